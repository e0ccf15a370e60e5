from __future__ import annotations

import pytest

from utils import LineIndex, case_insensitive_sorted, line_and_column, unique


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (0, (1, 1)),
        (2, (1, 3)),
        (3, (2, 1)),
        (6, (3, 1)),
        (7, (3, 2)),
        (99, (3, 2)),
        (-5, (1, 1)),
    ],
)
def test_line_and_column(offset: int, expected: tuple[int, int]) -> None:
    assert line_and_column("ab\ncd\ne", offset) == expected


def test_offset_inverts_line_column() -> None:
    text = "class A:\n    x = 1\n"
    index = LineIndex(text)

    for offset in range(len(text)):
        assert index.offset(*index.line_column(offset)) == offset


def test_offset_clamps_out_of_range_positions() -> None:
    index = LineIndex("ab\ncd")

    assert index.offset(0, 5) == 0
    assert index.offset(9, 1) == 5
    assert index.offset(2, 99) == 5


def test_case_insensitive_sorted_is_deterministic() -> None:
    assert case_insensitive_sorted(["b", "B", "a", "A"]) == ["A", "a", "B", "b"]


def test_unique_keeps_first_occurrence() -> None:
    assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
