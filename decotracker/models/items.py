"""
Classified item models.

One item exists per catalog entry, never per owned code. Comparison items
carry two ownership flags; the four-way state is derived from them.
"""

from dataclasses import dataclass
from enum import Enum

from decotracker.models.catalog import CatalogEntry, ItemKind


class ComparisonState(str, Enum):
    """Ownership state of an item across two players."""

    NEITHER = "neither"
    PLAYER1_ONLY = "player1_only"
    PLAYER2_ONLY = "player2_only"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class ClassifiedItem:
    """A catalog entry marked owned or missing for one player."""

    code: int
    name: str
    image_ref: str | None
    kind: ItemKind
    owned: bool

    @classmethod
    def from_entry(cls, entry: CatalogEntry, owned: bool) -> "ClassifiedItem":
        return cls(
            code=entry.code,
            name=entry.name,
            image_ref=entry.image_ref,
            kind=entry.kind,
            owned=owned,
        )


@dataclass(frozen=True, slots=True)
class ComparisonItem:
    """A catalog entry with independent ownership for two players."""

    code: int
    name: str
    image_ref: str | None
    kind: ItemKind
    player1_owned: bool
    player2_owned: bool

    @classmethod
    def from_entry(
        cls, entry: CatalogEntry, player1_owned: bool, player2_owned: bool
    ) -> "ComparisonItem":
        return cls(
            code=entry.code,
            name=entry.name,
            image_ref=entry.image_ref,
            kind=entry.kind,
            player1_owned=player1_owned,
            player2_owned=player2_owned,
        )

    @property
    def state(self) -> ComparisonState:
        """Derived four-way state. Exactly one state holds for any item."""
        if self.player1_owned and self.player2_owned:
            return ComparisonState.BOTH
        if self.player1_owned:
            return ComparisonState.PLAYER1_ONLY
        if self.player2_owned:
            return ComparisonState.PLAYER2_ONLY
        return ComparisonState.NEITHER
