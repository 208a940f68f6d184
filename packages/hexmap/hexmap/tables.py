"""Static weight and compatibility tables for terrain and features."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from hexmap.types import ConfigurationError, FeatureKind, TerrainKind

# Higher weight means a more common kind.
TERRAIN_WEIGHTS: Mapping[TerrainKind, int] = MappingProxyType({
    TerrainKind.GRASS: 35,
    TerrainKind.FOREST: 25,
    TerrainKind.MOUNTAIN: 15,
    TerrainKind.DESERT: 15,
    TerrainKind.WATER: 10,
})

FEATURE_WEIGHTS: Mapping[FeatureKind, int] = MappingProxyType({
    FeatureKind.FRUIT: 25,
    FeatureKind.ANIMALS: 25,
    FeatureKind.MINERALS: 20,
    FeatureKind.RUINS: 15,
    FeatureKind.VILLAGE: 15,
})

# Terrain each feature may sit on.
FEATURE_COMPATIBILITY: Mapping[FeatureKind, frozenset[TerrainKind]] = MappingProxyType({
    FeatureKind.FRUIT: frozenset({TerrainKind.GRASS, TerrainKind.FOREST}),
    FeatureKind.ANIMALS: frozenset(
        {TerrainKind.GRASS, TerrainKind.FOREST, TerrainKind.DESERT}
    ),
    FeatureKind.MINERALS: frozenset({TerrainKind.MOUNTAIN, TerrainKind.DESERT}),
    FeatureKind.RUINS: frozenset(
        {TerrainKind.GRASS, TerrainKind.DESERT, TerrainKind.FOREST}
    ),
    FeatureKind.VILLAGE: frozenset({TerrainKind.GRASS, TerrainKind.DESERT}),
})


def _check_weights(name: str, kinds: type, weights: Mapping) -> None:
    if not isinstance(weights, Mapping):
        raise ConfigurationError(
            f"{name} must be a mapping, got {type(weights).__name__}"
        )
    for kind in kinds:
        if kind not in weights:
            raise ConfigurationError(f"{name} has no entry for {kind.value!r}")
        weight = weights[kind]
        if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
            raise ConfigurationError(
                f"{name}[{kind.value!r}] must be a positive integer, got {weight!r}"
            )
    known = set(kinds)
    extra = [k for k in weights if k not in known]
    if extra:
        raise ConfigurationError(f"{name} has unknown entries: {extra!r}")
    if sum(weights.values()) <= 0:
        raise ConfigurationError(f"{name} sums to zero")


@dataclass(frozen=True)
class TileTables:
    """Validated bundle of the three static tables.

    Construction fails fast with ConfigurationError so that a bad table is
    caught when a generator is built, never halfway through a map.

    Attributes:
        terrain_weights: TerrainKind -> positive int weight.
        feature_weights: FeatureKind -> positive int weight.
        compatibility: FeatureKind -> non-empty set of TerrainKind.
    """

    terrain_weights: Mapping[TerrainKind, int] = field(
        default_factory=lambda: TERRAIN_WEIGHTS
    )
    feature_weights: Mapping[FeatureKind, int] = field(
        default_factory=lambda: FEATURE_WEIGHTS
    )
    compatibility: Mapping[FeatureKind, frozenset[TerrainKind]] = field(
        default_factory=lambda: FEATURE_COMPATIBILITY
    )
    _by_terrain: dict[TerrainKind, tuple[FeatureKind, ...]] = field(
        init=False, repr=False, compare=False
    )
    _bounds: tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_weights("terrain_weights", TerrainKind, self.terrain_weights)
        _check_weights("feature_weights", FeatureKind, self.feature_weights)

        if not isinstance(self.compatibility, Mapping):
            raise ConfigurationError(
                "compatibility must be a mapping, "
                f"got {type(self.compatibility).__name__}"
            )
        known = set(FeatureKind)
        extra = [k for k in self.compatibility if k not in known]
        if extra:
            raise ConfigurationError(f"compatibility has unknown entries: {extra!r}")

        for kind in FeatureKind:
            terrains = self.compatibility.get(kind)
            if not terrains:
                raise ConfigurationError(
                    f"Feature {kind.value!r} has no compatible terrain"
                )
            for terrain in terrains:
                if not isinstance(terrain, TerrainKind):
                    raise ConfigurationError(
                        f"Feature {kind.value!r} lists unknown terrain {terrain!r}"
                    )

        by_terrain = {
            terrain: tuple(
                kind for kind in FeatureKind if terrain in self.compatibility[kind]
            )
            for terrain in TerrainKind
        }
        object.__setattr__(self, "_by_terrain", by_terrain)

        total = sum(self.terrain_weights.values())
        running = 0
        bounds: list[float] = []
        for kind in TerrainKind:
            running += self.terrain_weights[kind]
            bounds.append(running / total)
        object.__setattr__(self, "_bounds", tuple(bounds))

    @property
    def terrain_bounds(self) -> tuple[float, ...]:
        """Upper bound of each terrain's slice of [0, 1), in declaration order."""
        return self._bounds

    def features_for(self, terrain: TerrainKind) -> tuple[FeatureKind, ...]:
        """Feature kinds allowed on a terrain, in FeatureKind declaration order."""
        return self._by_terrain[terrain]


DEFAULT_TABLES = TileTables()
