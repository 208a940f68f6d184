"""Renderer-facing layout: sprite positions, depth order, scene wiring."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from hexmap.coords import CoordinateTransform
from hexmap.generator import MapGenerator
from hexmap.types import Cell, Pixel, TileMap

logger = logging.getLogger(__name__)

# Features sit just above the terrain of their own row.
FEATURE_DEPTH_BIAS = 0.1


@dataclass(frozen=True)
class SpritePlacement:
    """One sprite to draw, centred on (x, y).

    Attributes:
        key: Asset key, the terrain or feature enum value.
        x: Screen x of the sprite centre.
        y: Screen y of the sprite centre.
        depth: Draw order; lower values are drawn first.
        column: Grid column the sprite belongs to.
        row: Grid row the sprite belongs to.
        layer: "terrain" or "feature".
    """

    key: str
    x: float
    y: float
    depth: float
    column: int
    row: int
    layer: Literal["terrain", "feature"]


def layout_tiles(
    tile_map: TileMap,
    transform: CoordinateTransform,
    origin: Pixel = (0.0, 0.0),
) -> list[SpritePlacement]:
    """Position every terrain and feature sprite, sorted back to front."""
    ox, oy = origin
    sprites: list[SpritePlacement] = []
    for row, kinds in enumerate(tile_map.terrain):
        for column, kind in enumerate(kinds):
            px, py = transform.to_pixel(column, row)
            sprites.append(SpritePlacement(
                key=kind.value, x=ox + px, y=oy + py, depth=float(row),
                column=column, row=row, layer="terrain",
            ))
    for feature in tile_map.features:
        px, py = transform.to_pixel(feature.column, feature.row)
        sprites.append(SpritePlacement(
            key=feature.kind.value, x=ox + px, y=oy + py,
            depth=feature.row + FEATURE_DEPTH_BIAS,
            column=feature.column, row=feature.row, layer="feature",
        ))
    sprites.sort(key=lambda s: s.depth)
    return sprites


def map_origin(screen_w: float, screen_h: float) -> Pixel:
    """Map anchor: horizontally centred, a third of the way down."""
    return (screen_w / 2, screen_h / 3)


@dataclass(frozen=True)
class ViewerConfig:
    """Everything needed to build a scene.

    Attributes:
        map_width: Columns in the map.
        map_height: Rows in the map.
        hex_width: Hex sprite width in pixels.
        hex_height: Hex sprite height in pixels.
        tile_offset: Column spacing as a fraction of hex_width.
        row_spacing: Row spacing as a fraction of hex_height.
        seed: Generator seed, random when None.
    """

    map_width: int = 10
    map_height: int = 10
    hex_width: float = 128
    hex_height: float = 112
    tile_offset: float = 0.75
    row_spacing: float = 1.0
    seed: int | None = None


@dataclass(frozen=True)
class Scene:
    config: ViewerConfig
    transform: CoordinateTransform
    generator: MapGenerator
    tile_map: TileMap

    def sprites(self, origin: Pixel = (0.0, 0.0)) -> list[SpritePlacement]:
        return layout_tiles(self.tile_map, self.transform, origin)

    def cell_at(self, x: float, y: float, origin: Pixel = (0.0, 0.0)) -> Cell | None:
        return self.transform.hit_test(
            x, y, self.tile_map.width, self.tile_map.height, origin
        )

    def regenerate(self) -> Scene:
        """A new scene with a freshly generated map from the same generator."""
        tile_map = self.generator.generate(self.config.map_width, self.config.map_height)
        return Scene(self.config, self.transform, self.generator, tile_map)


def build_scene(
    config: ViewerConfig,
    generator: MapGenerator | None = None,
    transform: CoordinateTransform | None = None,
) -> Scene:
    """Create (or accept) the transform and generator, then generate the map."""
    if transform is None:
        transform = CoordinateTransform(
            config.hex_width,
            config.hex_height,
            tile_offset=config.tile_offset,
            row_spacing=config.row_spacing,
        )
    if generator is None:
        generator = MapGenerator(seed=config.seed)
    tile_map = generator.generate(config.map_width, config.map_height)
    logger.debug("Scene built with generator seed %s", generator.seed)
    return Scene(config, transform, generator, tile_map)
