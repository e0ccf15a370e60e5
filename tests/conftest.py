from __future__ import annotations

import pytest

SAMPLE_SOURCE = """\
import os
from collections import OrderedDict as OD


class Animal(Base):
    kind = "animal"

    def __init__(self, name):
        self.name = name
        self._secret = 1

    def speak(self, loud=False):
        return self.name

    def _hidden(self):
        pass


class _Private:
    def method(self):
        self.value = 2


def helper(a, b=2):
    return a + b


def _internal():
    pass


pet = Animal("rex")
counter = 0
"""


@pytest.fixture
def sample_source() -> str:
    return SAMPLE_SOURCE
