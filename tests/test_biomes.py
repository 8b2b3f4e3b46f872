"""Tests for biomes classification module."""

import pytest
from py_polymap.core.biomes import Biome, BIOME_NAMES, assign_biomes, classify_biome
from py_polymap.core.geometry import Point
from py_polymap.core.voronoi_graph import MapConfig, Region, generate_voronoi_graph


def _region(**fields):
    region = Region(Point(0, 0))
    for name, value in fields.items():
        setattr(region, name, value)
    return region


class TestClassifyBiome:
    """Test the elevation/moisture decision table."""

    def test_water_flags_take_precedence(self):
        assert classify_biome(_region(ocean=True, water=True, elevation=0.9)) == Biome.OCEAN
        assert classify_biome(_region(coast=True, water=True, elevation=0.5)) == Biome.LAKE

    @pytest.mark.parametrize("elevation,expected", [
        (0.05, Biome.MARSH),
        (0.5, Biome.LAKE),
        (0.9, Biome.ICE),
    ])
    def test_water(self, elevation, expected):
        assert classify_biome(_region(water=True, elevation=elevation)) == expected

    def test_coast(self):
        assert classify_biome(_region(coast=True, elevation=0.9, moisture=0.9)) == Biome.BEACH

    @pytest.mark.parametrize("elevation,moisture,expected", [
        (0.9, 0.6, Biome.SNOW),
        (0.9, 0.4, Biome.TUNDRA),
        (0.9, 0.2, Biome.BARE),
        (0.9, 0.1, Biome.SCORCHED),
        (0.7, 0.7, Biome.TAIGA),
        (0.7, 0.5, Biome.SHRUBLAND),
        (0.7, 0.1, Biome.TEMPERATE_DESERT),
        (0.4, 0.9, Biome.TEMPERATE_RAIN_FOREST),
        (0.4, 0.6, Biome.TEMPERATE_DECIDUOUS_FOREST),
        (0.4, 0.3, Biome.GRASSLAND),
        (0.4, 0.1, Biome.TEMPERATE_DESERT),
        (0.1, 0.7, Biome.TROPICAL_RAIN_FOREST),
        (0.1, 0.5, Biome.TROPICAL_SEASONAL_FOREST),
        (0.1, 0.2, Biome.GRASSLAND),
        (0.1, 0.1, Biome.SUBTROPICAL_DESERT),
    ])
    def test_land(self, elevation, moisture, expected):
        assert classify_biome(_region(elevation=elevation, moisture=moisture)) == expected

    def test_thresholds_are_exclusive(self):
        """A value sitting on a threshold falls into the lower band."""
        assert classify_biome(_region(elevation=0.8, moisture=0.9)) == Biome.TAIGA
        assert classify_biome(_region(elevation=0.3, moisture=0.66)) == Biome.TROPICAL_SEASONAL_FOREST

    def test_every_biome_has_a_name(self):
        assert set(BIOME_NAMES) == set(Biome)


class TestAssignBiomes:
    """Test classifying a whole graph."""

    @pytest.fixture
    def graph(self):
        graph = generate_voronoi_graph(MapConfig(100, 100, 60, lloyd_iterations=0), seed=9)
        for region in graph.regions:
            region.elevation = region.center.x / 100
            region.moisture = region.center.y / 100
            region.ocean = region.center.x < 10
        return graph

    def test_all_regions_classified(self, graph):
        counts = assign_biomes(graph)

        assert sum(counts.values()) == len(graph.regions)
        assert all(isinstance(r.biome, Biome) for r in graph.regions)
        for region in graph.regions:
            if region.ocean:
                assert region.biome == Biome.OCEAN

    def test_injected_classifier(self, graph):
        counts = assign_biomes(graph, classifier=lambda region: Biome.TUNDRA)

        assert counts == {Biome.TUNDRA: len(graph.regions)}
        assert {r.biome for r in graph.regions} == {Biome.TUNDRA}
