"""MapGenerator - clustered terrain plus constrained feature placement."""
from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass

from hexmap.tables import DEFAULT_TABLES, TileTables
from hexmap.types import (
    ConfigurationError,
    FeatureKind,
    FeaturePlacement,
    InvalidDimension,
    RandomSource,
    TerrainKind,
    TileMap,
)

logger = logging.getLogger(__name__)

_NEIGHBOR_OFFSETS = [
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
]

TerrainRows = list[list[TerrainKind]]


@dataclass(frozen=True)
class GeneratorConfig:
    """Tunable constants for map generation.

    Attributes:
        feature_probability: Chance that a cell gets a placement attempt.
        water_spread_chance: Chance that a cell next to enough water floods.
        water_neighbor_threshold: Water neighbours (of 8) needed to flood.
    """

    feature_probability: float = 0.2
    water_spread_chance: float = 0.7
    water_neighbor_threshold: int = 2

    def __post_init__(self) -> None:
        if not 0.0 <= self.feature_probability <= 1.0:
            raise ConfigurationError(
                f"feature_probability must be in [0, 1], got {self.feature_probability}"
            )
        if not 0.0 <= self.water_spread_chance <= 1.0:
            raise ConfigurationError(
                f"water_spread_chance must be in [0, 1], got {self.water_spread_chance}"
            )
        if not 1 <= self.water_neighbor_threshold <= 8:
            raise ConfigurationError(
                "water_neighbor_threshold must be in 1..8, "
                f"got {self.water_neighbor_threshold}"
            )


class MapGenerator:
    """Builds TileMaps from a random source and static tables.

    Terrain comes from box-blurred noise bucketed by weight, then a single
    water pass that grows lakes and drops isolated water tiles. Features are
    scattered afterwards so they always match their final terrain.
    """

    def __init__(
        self,
        tables: TileTables = DEFAULT_TABLES,
        config: GeneratorConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        if not isinstance(tables, TileTables):
            raise ConfigurationError(
                f"tables must be a TileTables instance, got {type(tables).__name__}"
            )
        self._tables = tables
        self._config = config if config is not None else GeneratorConfig()
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        if rng is None:
            if seed is None:
                seed = int.from_bytes(os.urandom(8))
            rng = random.Random(seed)
        self._seed = seed
        self._rng = rng

    @property
    def tables(self) -> TileTables:
        return self._tables

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def seed(self) -> int | None:
        """Seed of the internal RNG, or None when an rng was injected."""
        return self._seed

    # --- Public entry point ---

    def generate(self, width: int, height: int) -> TileMap:
        """Generate a complete map. Raises InvalidDimension for bad sizes."""
        _check_dimensions(width, height)
        terrain = self.generate_terrain(width, height)
        features = self.place_features(terrain)
        logger.info(
            "Generated %dx%d map with %d features", width, height, len(features)
        )
        return TileMap(
            terrain=tuple(tuple(row) for row in terrain),
            features=tuple(features),
        )

    # --- Terrain ---

    def generate_terrain(self, width: int, height: int) -> TerrainRows:
        """Clustered terrain with water refinement applied."""
        _check_dimensions(width, height)
        return self.refine_water(self.coarse_terrain(width, height))

    def coarse_terrain(self, width: int, height: int) -> TerrainRows:
        """Terrain before water refinement."""
        _check_dimensions(width, height)
        smoothed = self.smooth(self.seed_noise(width, height))
        return [[self.classify(value) for value in row] for row in smoothed]

    def seed_noise(self, width: int, height: int) -> list[list[float]]:
        rng = self._rng
        return [[rng.random() for _ in range(width)] for _ in range(height)]

    @staticmethod
    def smooth(noise: list[list[float]]) -> list[list[float]]:
        """3x3 mean of each cell and its in-bounds neighbours."""
        height = len(noise)
        width = len(noise[0]) if noise else 0
        result: list[list[float]] = []
        for y in range(height):
            row: list[float] = []
            for x in range(width):
                total = 0.0
                count = 0
                for ny in range(max(0, y - 1), min(height, y + 2)):
                    for nx in range(max(0, x - 1), min(width, x + 2)):
                        total += noise[ny][nx]
                        count += 1
                row.append(total / count)
            result.append(row)
        return result

    def classify(self, value: float) -> TerrainKind:
        """Bucket a value in [0, 1) into a terrain kind by weight.

        A value sitting exactly on a boundary belongs to the lower bucket.
        Anything past the last bound falls into the last bucket.
        """
        kinds = list(TerrainKind)
        for kind, upper in zip(kinds, self._tables.terrain_bounds):
            if value <= upper:
                return kind
        return kinds[-1]

    def refine_water(self, grid: TerrainRows) -> TerrainRows:
        """Grow water next to water and dissolve single-tile lakes.

        Every decision reads the input grid; a new grid is returned.
        """
        height = len(grid)
        width = len(grid[0]) if grid else 0
        cfg = self._config
        rng = self._rng
        result = [list(row) for row in grid]
        flooded = 0
        dried = 0

        for y in range(height):
            for x in range(width):
                water_neighbors = 0
                for dx, dy in _NEIGHBOR_OFFSETS:
                    nx, ny = x + dx, y + dy
                    if 0 <= nx < width and 0 <= ny < height:
                        if grid[ny][nx] is TerrainKind.WATER:
                            water_neighbors += 1

                if (
                    water_neighbors >= cfg.water_neighbor_threshold
                    and rng.random() < cfg.water_spread_chance
                ):
                    if grid[y][x] is not TerrainKind.WATER:
                        flooded += 1
                    result[y][x] = TerrainKind.WATER

                if grid[y][x] is TerrainKind.WATER and water_neighbors == 0:
                    result[y][x] = self.classify(rng.random())
                    if result[y][x] is not TerrainKind.WATER:
                        dried += 1

        logger.debug("Water refinement: %d flooded, %d dried", flooded, dried)
        return result

    # --- Features ---

    def place_features(self, terrain: TerrainRows) -> list[FeaturePlacement]:
        """Scatter features over finished terrain, at most one per cell."""
        cfg = self._config
        rng = self._rng
        occupied: set[tuple[int, int]] = set()
        features: list[FeaturePlacement] = []

        for y, row in enumerate(terrain):
            for x, kind in enumerate(row):
                if (x, y) in occupied:
                    continue
                if rng.random() >= cfg.feature_probability:
                    continue
                candidates = self._tables.features_for(kind)
                if not candidates:
                    continue
                features.append(
                    FeaturePlacement(column=x, row=y, kind=self.pick_feature(candidates))
                )
                occupied.add((x, y))

        logger.debug("Placed %d features", len(features))
        return features

    def pick_feature(self, candidates: tuple[FeatureKind, ...]) -> FeatureKind:
        """Weighted choice among compatible feature kinds."""
        weights = self._tables.feature_weights
        total = sum(weights[kind] for kind in candidates)
        draw = self._rng.random() * total
        running = 0
        for kind in candidates:
            running += weights[kind]
            if draw <= running:
                return kind
        return candidates[0]


def _check_dimensions(width: int, height: int) -> None:
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidDimension(width, height)
