"""Headline window: bounds the fetched headlines into the prompt context."""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from fxsentiment.core.errors import ConfigurationError
from fxsentiment.models.datatypes import Headline


@dataclass(frozen=True)
class HeadlineWindow:
    """The first ``cap`` headlines of a feed, in feed order.

    Truncation always keeps the head of the list; nothing is sampled,
    filtered or deduplicated.
    """
    headlines: Tuple[Headline, ...]

    @classmethod
    def from_headlines(cls, headlines: Sequence[Headline], cap: int) -> "HeadlineWindow":
        if cap <= 0:
            raise ConfigurationError(f"headline cap must be positive, got {cap}")
        return cls(headlines=tuple(headlines[:cap]))

    def __len__(self) -> int:
        return len(self.headlines)

    @property
    def is_empty(self) -> bool:
        return not self.headlines

    @property
    def titles(self) -> List[str]:
        return [h.title for h in self.headlines]

    def render(self) -> str:
        """Return ``"1. title"`` lines joined by newlines ("" when empty)."""
        return "\n".join(f"{i}. {h.title}" for i, h in enumerate(self.headlines, start=1))
