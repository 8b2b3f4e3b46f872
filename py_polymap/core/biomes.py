"""
Biome classification from elevation and moisture.

Classification is a plain function of one region's fields. It is passed
into assign_biomes rather than looked up globally, so callers can swap in
their own decision table.
"""

from collections import Counter
from enum import IntEnum
from typing import Callable, Dict

import structlog

from .voronoi_graph import Region, VoronoiGraph

logger = structlog.get_logger()


class Biome(IntEnum):
    """Whittaker-style biome types."""

    OCEAN = 0
    MARSH = 1
    ICE = 2
    LAKE = 3
    BEACH = 4
    SNOW = 5
    TUNDRA = 6
    BARE = 7
    SCORCHED = 8
    TAIGA = 9
    SHRUBLAND = 10
    TEMPERATE_DESERT = 11
    TEMPERATE_RAIN_FOREST = 12
    TEMPERATE_DECIDUOUS_FOREST = 13
    GRASSLAND = 14
    TROPICAL_RAIN_FOREST = 15
    TROPICAL_SEASONAL_FOREST = 16
    SUBTROPICAL_DESERT = 17


# Biome names for display
BIOME_NAMES = {
    Biome.OCEAN: "Ocean",
    Biome.MARSH: "Marsh",
    Biome.ICE: "Ice",
    Biome.LAKE: "Lake",
    Biome.BEACH: "Beach",
    Biome.SNOW: "Snow",
    Biome.TUNDRA: "Tundra",
    Biome.BARE: "Bare",
    Biome.SCORCHED: "Scorched",
    Biome.TAIGA: "Taiga",
    Biome.SHRUBLAND: "Shrubland",
    Biome.TEMPERATE_DESERT: "Temperate Desert",
    Biome.TEMPERATE_RAIN_FOREST: "Temperate Rain Forest",
    Biome.TEMPERATE_DECIDUOUS_FOREST: "Temperate Deciduous Forest",
    Biome.GRASSLAND: "Grassland",
    Biome.TROPICAL_RAIN_FOREST: "Tropical Rain Forest",
    Biome.TROPICAL_SEASONAL_FOREST: "Tropical Seasonal Forest",
    Biome.SUBTROPICAL_DESERT: "Subtropical Desert",
}


def classify_biome(region: Region) -> Biome:
    """
    Pick a biome from a region's water flags, elevation and moisture.

    Elevation and moisture are expected in [0, 1].
    """
    if region.ocean:
        return Biome.OCEAN
    if region.water:
        if region.elevation < 0.1:
            return Biome.MARSH
        if region.elevation > 0.8:
            return Biome.ICE
        return Biome.LAKE
    if region.coast:
        return Biome.BEACH

    m = region.moisture
    if region.elevation > 0.8:
        if m > 0.50:
            return Biome.SNOW
        elif m > 0.33:
            return Biome.TUNDRA
        elif m > 0.16:
            return Biome.BARE
        return Biome.SCORCHED
    elif region.elevation > 0.6:
        if m > 0.66:
            return Biome.TAIGA
        elif m > 0.33:
            return Biome.SHRUBLAND
        return Biome.TEMPERATE_DESERT
    elif region.elevation > 0.3:
        if m > 0.83:
            return Biome.TEMPERATE_RAIN_FOREST
        elif m > 0.50:
            return Biome.TEMPERATE_DECIDUOUS_FOREST
        elif m > 0.16:
            return Biome.GRASSLAND
        return Biome.TEMPERATE_DESERT
    else:
        if m > 0.66:
            return Biome.TROPICAL_RAIN_FOREST
        elif m > 0.33:
            return Biome.TROPICAL_SEASONAL_FOREST
        elif m > 0.16:
            return Biome.GRASSLAND
        return Biome.SUBTROPICAL_DESERT


def assign_biomes(graph: VoronoiGraph,
                  classifier: Callable[[Region], Biome] = classify_biome) -> Dict[Biome, int]:
    """
    Classify every region of the graph.

    Args:
        graph: Graph whose regions carry elevation/moisture data
        classifier: Region -> Biome decision function

    Returns:
        Number of regions per biome
    """
    counts = Counter()
    for region in graph.regions:
        region.biome = classifier(region)
        counts[region.biome] += 1

    logger.info("Biomes assigned",
                regions=len(graph.regions),
                biomes={BIOME_NAMES.get(b, str(b)): n for b, n in counts.items()})
    return dict(counts)
