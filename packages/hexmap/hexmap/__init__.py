"""hexmap - procedural hex tile maps and offset-grid coordinates."""
from __future__ import annotations

from hexmap.coords import CoordinateTransform
from hexmap.generator import GeneratorConfig, MapGenerator
from hexmap.layout import (
    Scene,
    SpritePlacement,
    ViewerConfig,
    build_scene,
    layout_tiles,
    map_origin,
)
from hexmap.tables import (
    DEFAULT_TABLES,
    FEATURE_COMPATIBILITY,
    FEATURE_WEIGHTS,
    TERRAIN_WEIGHTS,
    TileTables,
)
from hexmap.types import (
    Cell,
    ConfigurationError,
    FeatureKind,
    FeaturePlacement,
    HexMapError,
    InvalidDimension,
    Pixel,
    RandomSource,
    TerrainKind,
    TileMap,
)

__all__ = [
    "Cell",
    "ConfigurationError",
    "CoordinateTransform",
    "DEFAULT_TABLES",
    "FEATURE_COMPATIBILITY",
    "FEATURE_WEIGHTS",
    "FeatureKind",
    "FeaturePlacement",
    "GeneratorConfig",
    "HexMapError",
    "InvalidDimension",
    "MapGenerator",
    "Pixel",
    "RandomSource",
    "Scene",
    "SpritePlacement",
    "TERRAIN_WEIGHTS",
    "TerrainKind",
    "TileMap",
    "TileTables",
    "ViewerConfig",
    "build_scene",
    "layout_tiles",
    "map_origin",
]
