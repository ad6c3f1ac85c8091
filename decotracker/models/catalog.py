"""
Catalog models.

A catalog is the static reference table of every known item of one kind.
Decorations and obstacles are kept as two ordered sequences; lookups by
code consult decorations first.
"""

from dataclasses import dataclass, field
from enum import Enum


class ItemKind(str, Enum):
    """Category of a catalog item."""

    DECORATION = "decoration"
    OBSTACLE = "obstacle"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """
    One known item.

    Attributes:
        code: Item code, unique within its catalog
        name: Display name
        image_ref: Opaque image path handed to the renderer, if any
        kind: Decoration or obstacle
    """

    code: int
    name: str
    image_ref: str | None
    kind: ItemKind


@dataclass(frozen=True)
class Catalog:
    """Read-only pair of decoration and obstacle catalogs."""

    decorations: tuple[CatalogEntry, ...] = ()
    obstacles: tuple[CatalogEntry, ...] = ()
    _by_code: dict[float, CatalogEntry] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        index: dict[float, CatalogEntry] = {}
        # Obstacles first so decorations overwrite on a code collision
        for entry in self.obstacles:
            index[entry.code] = entry
        for entry in self.decorations:
            index[entry.code] = entry
        object.__setattr__(self, "_by_code", index)

    @property
    def size(self) -> int:
        """Total number of entries across both kinds."""
        return len(self.decorations) + len(self.obstacles)

    def entries(self) -> tuple[CatalogEntry, ...]:
        """All entries, decorations first, each in original order."""
        return self.decorations + self.obstacles

    def lookup(self, code: float) -> CatalogEntry | None:
        """Find an entry by code. Decorations take precedence."""
        return self._by_code.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __len__(self) -> int:
        return self.size
