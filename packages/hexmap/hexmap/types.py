"""Shared types, aliases and errors for hexmap."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

Cell = tuple[int, int]
Pixel = tuple[float, float]


class TerrainKind(str, Enum):
    """Base terrain tiles. Declaration order drives weighted classification."""

    GRASS = "grass"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    DESERT = "desert"
    WATER = "water"


class FeatureKind(str, Enum):
    """Resource/decoration tiles drawn on top of terrain."""

    FRUIT = "fruit"
    ANIMALS = "animals"
    MINERALS = "minerals"
    RUINS = "ruins"
    VILLAGE = "village"


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1). ``random.Random`` qualifies."""

    def random(self) -> float: ...


class HexMapError(Exception):
    """Base class for hexmap errors."""


class InvalidDimension(HexMapError, ValueError):
    """Raised when a map is requested with a non-positive width or height."""

    def __init__(self, width: object, height: object) -> None:
        self.width = width
        self.height = height
        super().__init__(
            f"Map dimensions must be positive integers, got {width!r}x{height!r}"
        )


class ConfigurationError(HexMapError, ValueError):
    """Raised when weight or compatibility tables are inconsistent."""


@dataclass(frozen=True)
class FeaturePlacement:
    """A feature bound to one terrain cell.

    Attributes:
        column: Grid column (>= 0).
        row: Grid row (>= 0).
        kind: The feature placed on the cell.
    """

    column: int
    row: int
    kind: FeatureKind

    def __post_init__(self) -> None:
        if self.column < 0 or self.row < 0:
            raise ValueError(
                f"Feature coordinates must be >= 0, got ({self.column}, {self.row})"
            )

    @property
    def cell(self) -> Cell:
        return (self.column, self.row)


@dataclass(frozen=True)
class TileMap:
    """Generated map: a row-major terrain grid plus the feature overlay."""

    terrain: tuple[tuple[TerrainKind, ...], ...]
    features: tuple[FeaturePlacement, ...]

    def __post_init__(self) -> None:
        width = self.width
        for row in self.terrain:
            if len(row) != width:
                raise ValueError(
                    f"Terrain rows must all have width {width}, got a row of {len(row)}"
                )
        seen: set[Cell] = set()
        for feature in self.features:
            if not (feature.column < width and feature.row < self.height):
                raise ValueError(
                    f"Feature at {feature.cell} out of bounds for "
                    f"{width}x{self.height} map"
                )
            if feature.cell in seen:
                raise ValueError(f"Duplicate feature at {feature.cell}")
            seen.add(feature.cell)

    @property
    def width(self) -> int:
        return len(self.terrain[0]) if self.terrain else 0

    @property
    def height(self) -> int:
        return len(self.terrain)

    def terrain_at(self, column: int, row: int) -> TerrainKind:
        """Terrain at a cell. Raises IndexError outside the map."""
        if not (0 <= column < self.width and 0 <= row < self.height):
            raise IndexError(
                f"({column}, {row}) out of bounds for {self.width}x{self.height} map"
            )
        return self.terrain[row][column]

    def feature_at(self, column: int, row: int) -> FeaturePlacement | None:
        for feature in self.features:
            if feature.column == column and feature.row == row:
                return feature
        return None

    def terrain_counts(self) -> Counter[TerrainKind]:
        return Counter(kind for row in self.terrain for kind in row)
