"""
Core graph construction functionality.
"""

from .geometry import Point, Rect, LineSegment
from .tessellation import ScipyTessellation, DualEdge
from .voronoi_graph import (Region, Corner, Edge, VoronoiGraph, MapConfig,
                            build_graph, build_voronoi_graph, generate_voronoi_graph,
                            improve_corners, relax_sites)
from .biomes import Biome, classify_biome, assign_biomes

__all__ = ['Point', 'Rect', 'LineSegment', 'ScipyTessellation', 'DualEdge',
           'Region', 'Corner', 'Edge', 'VoronoiGraph', 'MapConfig',
           'build_graph', 'build_voronoi_graph', 'generate_voronoi_graph',
           'improve_corners', 'relax_sites',
           'Biome', 'classify_biome', 'assign_biomes']
