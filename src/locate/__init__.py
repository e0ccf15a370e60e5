"""Definition navigation for symlex."""

from locate.locator import PositionLocator, word_at

__all__ = ["PositionLocator", "word_at"]
