"""
Test suite for MapGenerator.

Tests cover:
- Dimension validation and map shape
- Feature uniqueness, bounds and terrain compatibility
- Seed determinism and injected random sources
- Box smoothing and weighted terrain classification
- Water refinement (flooding, isolated lakes, snapshot reads)
- Weighted feature selection
"""

import random
from collections import Counter

import pytest

from hexmap import (
    DEFAULT_TABLES,
    FEATURE_COMPATIBILITY,
    TERRAIN_WEIGHTS,
    ConfigurationError,
    FeatureKind,
    GeneratorConfig,
    InvalidDimension,
    MapGenerator,
    TerrainKind,
)

G = TerrainKind.GRASS
W = TerrainKind.WATER
M = TerrainKind.MOUNTAIN


class TestGeneratorConstruction:
    """Test MapGenerator initialization and configuration."""

    def test_seed_exposed(self):
        assert MapGenerator(seed=99).seed == 99

    def test_random_seed_when_omitted(self):
        assert isinstance(MapGenerator().seed, int)

    def test_injected_rng_has_no_seed(self, scripted):
        assert MapGenerator(rng=scripted([0.5])).seed is None

    def test_rng_and_seed_together_rejected(self, scripted):
        with pytest.raises(ValueError, match="not both"):
            MapGenerator(rng=scripted([0.5]), seed=5)

    def test_defaults(self):
        gen = MapGenerator(seed=1)
        assert gen.tables is DEFAULT_TABLES
        assert gen.config.feature_probability == 0.2

    def test_rejects_raw_tables(self):
        with pytest.raises(ConfigurationError):
            MapGenerator(tables={"terrain": TERRAIN_WEIGHTS})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"feature_probability": -0.1},
            {"feature_probability": 1.5},
            {"water_spread_chance": 2.0},
            {"water_neighbor_threshold": 0},
            {"water_neighbor_threshold": 9},
        ],
    )
    def test_bad_config(self, kwargs):
        with pytest.raises(ConfigurationError):
            GeneratorConfig(**kwargs)


class TestGenerateDimensions:
    """Test map shape and dimension validation."""

    @pytest.mark.parametrize("w,h", [(1, 1), (1, 7), (9, 1), (10, 10), (23, 17)])
    def test_shape(self, w, h):
        tile_map = MapGenerator(seed=3).generate(w, h)
        assert len(tile_map.terrain) == h
        assert all(len(row) == w for row in tile_map.terrain)
        assert tile_map.width == w
        assert tile_map.height == h

    @pytest.mark.parametrize("w,h", [(0, 5), (5, 0), (-1, 3), (3, -2), (2.5, 3), (True, 3)])
    def test_invalid_dimension(self, w, h):
        with pytest.raises(InvalidDimension):
            MapGenerator(seed=3).generate(w, h)

    def test_invalid_dimension_draws_nothing(self, scripted):
        rng = scripted([0.5])
        with pytest.raises(InvalidDimension):
            MapGenerator(rng=rng).generate(0, 4)
        assert rng.calls == 0

    def test_single_cell(self):
        for seed in range(30):
            tile_map = MapGenerator(seed=seed).generate(1, 1)
            assert len(tile_map.terrain) == 1
            assert len(tile_map.terrain[0]) == 1
            assert len(tile_map.features) <= 1
            for feature in tile_map.features:
                assert feature.cell == (0, 0)

    def test_result_is_immutable(self):
        tile_map = MapGenerator(seed=5).generate(4, 4)
        assert isinstance(tile_map.terrain, tuple)
        assert all(isinstance(row, tuple) for row in tile_map.terrain)
        assert isinstance(tile_map.features, tuple)


class TestGenerateInvariants:
    """Test feature placement guarantees on generated maps."""

    @pytest.mark.parametrize("seed", range(8))
    def test_features_unique_in_bounds_and_compatible(self, seed):
        tile_map = MapGenerator(seed=seed).generate(30, 20)
        cells = [f.cell for f in tile_map.features]
        assert len(cells) == len(set(cells))
        for f in tile_map.features:
            assert 0 <= f.column < 30
            assert 0 <= f.row < 20
            assert tile_map.terrain[f.row][f.column] in FEATURE_COMPATIBILITY[f.kind]

    def test_no_features_on_water(self):
        tile_map = MapGenerator(seed=11).generate(40, 40)
        for f in tile_map.features:
            assert tile_map.terrain_at(f.column, f.row) is not W

    def test_features_are_row_major(self):
        tile_map = MapGenerator(seed=12).generate(25, 25)
        keys = [(f.row, f.column) for f in tile_map.features]
        assert keys == sorted(keys)

    def test_roughly_a_fifth_of_land_gets_features(self):
        tile_map = MapGenerator(seed=2024).generate(80, 80)
        land = sum(1 for row in tile_map.terrain for kind in row if kind is not W)
        ratio = len(tile_map.features) / land
        assert 0.15 < ratio < 0.25


class TestDeterminism:
    """Test seeded and scripted random sources."""

    def test_same_seed_same_map(self):
        assert MapGenerator(seed=42).generate(15, 12) == MapGenerator(seed=42).generate(15, 12)

    def test_different_seed_different_map(self):
        assert MapGenerator(seed=1).generate(15, 12) != MapGenerator(seed=2).generate(15, 12)

    def test_injected_random_matches_seed(self):
        a = MapGenerator(rng=random.Random(7)).generate(10, 10)
        b = MapGenerator(seed=7).generate(10, 10)
        assert a == b

    def test_constant_mid_value_gives_forest_without_features(self, scripted):
        tile_map = MapGenerator(rng=scripted([0.5])).generate(4, 3)
        assert all(kind is TerrainKind.FOREST for row in tile_map.terrain for kind in row)
        assert tile_map.features == ()

    def test_constant_low_value_gives_fruit_everywhere(self, scripted):
        tile_map = MapGenerator(rng=scripted([0.1])).generate(3, 3)
        assert all(kind is G for row in tile_map.terrain for kind in row)
        assert len(tile_map.features) == 9
        assert {f.kind for f in tile_map.features} == {FeatureKind.FRUIT}


class TestSmoothing:
    """Test seed noise and box smoothing."""

    def test_single_cell_unchanged(self):
        assert MapGenerator.smooth([[0.3]]) == [[0.3]]

    def test_checkerboard_flattens(self):
        assert MapGenerator.smooth([[0.0, 1.0], [1.0, 0.0]]) == [[0.5, 0.5], [0.5, 0.5]]

    def test_edges_clip(self):
        noise = [[0.0, 0.0, 0.0], [0.0, 0.9, 0.0], [0.0, 0.0, 0.0]]
        smoothed = MapGenerator.smooth(noise)
        assert smoothed[0][0] == pytest.approx(0.9 / 4)
        assert smoothed[0][1] == pytest.approx(0.9 / 6)
        assert smoothed[1][1] == pytest.approx(0.9 / 9)

    def test_seed_noise_shape_and_draw_count(self, scripted):
        rng = scripted([0.25])
        noise = MapGenerator(rng=rng).seed_noise(5, 3)
        assert len(noise) == 3
        assert all(len(row) == 5 for row in noise)
        assert rng.calls == 15

    def test_smoothing_clusters_terrain(self):
        # Smoothed terrain has far more same-kind horizontal neighbours than raw noise.
        gen = MapGenerator(seed=8)
        coarse = gen.coarse_terrain(60, 60)
        rng = random.Random(8)
        raw = [[gen.classify(rng.random()) for _ in range(60)] for _ in range(60)]

        def same_pairs(grid):
            return sum(1 for row in grid for a, b in zip(row, row[1:]) if a is b)

        assert same_pairs(coarse) > same_pairs(raw)


class TestClassify:
    """Test weighted terrain classification."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.0, TerrainKind.GRASS),
            (0.2, TerrainKind.GRASS),
            (0.35, TerrainKind.GRASS),
            (0.36, TerrainKind.FOREST),
            (0.6, TerrainKind.FOREST),
            (0.7, TerrainKind.MOUNTAIN),
            (0.9, TerrainKind.DESERT),
            (0.95, TerrainKind.WATER),
            (1.0, TerrainKind.WATER),
            (1.5, TerrainKind.WATER),
            (-0.1, TerrainKind.GRASS),
        ],
    )
    def test_partition(self, value, expected):
        assert MapGenerator(seed=0).classify(value) is expected

    def test_stratified_values_match_weights_exactly(self):
        gen = MapGenerator(seed=0)
        counts = Counter(gen.classify((i + 0.5) / 1000) for i in range(1000))
        for kind, weight in TERRAIN_WEIGHTS.items():
            assert counts[kind] == weight * 10

    def test_seeded_uniform_values_match_weights(self):
        # Chi-square, 4 degrees of freedom; 18.47 is the 99.9% critical value.
        gen = MapGenerator(seed=0)
        rng = random.Random(20240601)
        n = 200 * 200
        counts = Counter(gen.classify(rng.random()) for _ in range(n))
        total = sum(TERRAIN_WEIGHTS.values())
        chi2 = 0.0
        for kind, weight in TERRAIN_WEIGHTS.items():
            expected = n * weight / total
            chi2 += (counts[kind] - expected) ** 2 / expected
        assert chi2 < 18.47

    def test_coarse_terrain_uses_all_draws_once(self, scripted):
        rng = scripted([0.5])
        grid = MapGenerator(rng=rng).coarse_terrain(4, 6)
        assert rng.calls == 24
        assert len(grid) == 6


class TestRefineWater:
    """Test water flooding and isolated lake removal."""

    def _grid(self, rows):
        return [list(r) for r in rows]

    def test_floods_cells_with_two_water_neighbours(self, scripted):
        grid = self._grid([[W, W, W], [G, G, G], [G, G, G]])
        result = MapGenerator(rng=scripted([0.5])).refine_water(grid)
        assert result[0] == [W, W, W]
        assert result[1] == [W, W, W]
        # Reads the input grid, so row 1 flooding does not cascade.
        assert result[2] == [G, G, G]

    def test_high_draw_does_not_flood(self, scripted):
        grid = self._grid([[W, W, W], [G, G, G], [G, G, G]])
        result = MapGenerator(rng=scripted([0.9])).refine_water(grid)
        assert result[1] == [G, G, G]

    def test_input_not_mutated(self, scripted):
        grid = self._grid([[W, W, W], [G, G, G]])
        MapGenerator(rng=scripted([0.0])).refine_water(grid)
        assert grid[1] == [G, G, G]

    def test_isolated_water_redrawn(self, scripted):
        grid = self._grid([[G, G, G], [G, W, G], [G, G, G]])
        rng = scripted([0.0])
        result = MapGenerator(rng=rng).refine_water(grid)
        assert result[1][1] is G
        assert rng.calls == 1

    def test_isolated_water_can_stay_water(self, scripted):
        grid = self._grid([[G, G], [G, W]])
        result = MapGenerator(rng=scripted([0.99])).refine_water(grid)
        assert result[1][1] is W

    def test_single_cell_lake(self, scripted):
        result = MapGenerator(rng=scripted([0.5])).refine_water([[W]])
        assert result == [[TerrainKind.FOREST]]

    def test_custom_threshold(self, scripted):
        config = GeneratorConfig(water_neighbor_threshold=1, water_spread_chance=1.0)
        grid = self._grid([[W, W, G, G]])
        result = MapGenerator(config=config, rng=scripted([0.5])).refine_water(grid)
        assert result == [[W, W, W, G]]


class TestFeaturePlacement:
    """Test feature scattering and weighted selection."""

    def test_picks_only_compatible(self, scripted):
        placements = MapGenerator(rng=scripted([0.0])).place_features([[M, W]])
        assert len(placements) == 1
        assert placements[0].cell == (0, 0)
        assert placements[0].kind is FeatureKind.MINERALS

    def test_water_never_gets_features(self, scripted):
        placements = MapGenerator(rng=scripted([0.0])).place_features([[W] * 5] * 5)
        assert placements == []

    def test_probability_zero(self):
        gen = MapGenerator(config=GeneratorConfig(feature_probability=0.0), seed=4)
        assert gen.generate(20, 20).features == ()

    def test_probability_one_fills_land(self):
        gen = MapGenerator(config=GeneratorConfig(feature_probability=1.0), seed=4)
        tile_map = gen.generate(20, 20)
        land = sum(1 for row in tile_map.terrain for kind in row if kind is not W)
        assert len(tile_map.features) == land

    @pytest.mark.parametrize(
        "draw,expected",
        [
            (0.0, FeatureKind.FRUIT),
            (25 / 80, FeatureKind.FRUIT),
            (0.32, FeatureKind.ANIMALS),
            (0.7, FeatureKind.RUINS),
            (0.99, FeatureKind.VILLAGE),
            (1.0, FeatureKind.VILLAGE),
        ],
    )
    def test_weighted_pick(self, scripted, draw, expected):
        gen = MapGenerator(rng=scripted([draw]))
        assert gen.pick_feature(DEFAULT_TABLES.features_for(G)) is expected

    def test_weighted_pick_distribution(self):
        gen = MapGenerator(seed=77)
        candidates = DEFAULT_TABLES.features_for(TerrainKind.DESERT)
        counts = Counter(gen.pick_feature(candidates) for _ in range(20000))
        # Desert: animals 25, minerals 20, ruins 15, village 15 -> total 75
        assert counts[FeatureKind.ANIMALS] / 20000 == pytest.approx(25 / 75, abs=0.02)
        assert counts[FeatureKind.MINERALS] / 20000 == pytest.approx(20 / 75, abs=0.02)
        assert FeatureKind.FRUIT not in counts
