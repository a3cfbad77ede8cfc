"""
Core terrain generation functionality.
"""

from .terrain_config import Color, TerrainBand, TerrainConfiguration, BAND_NAMES
from .noise import NoiseSource, OpenSimplexNoise
from .terrain_generator import (
    MAP_WIDTH,
    MAP_HEIGHT,
    PixelBuffer,
    TerrainGenerator,
    classify_depth,
    generate_terrain,
)

__all__ = ['Color', 'TerrainBand', 'TerrainConfiguration', 'BAND_NAMES',
           'NoiseSource', 'OpenSimplexNoise',
           'MAP_WIDTH', 'MAP_HEIGHT', 'PixelBuffer', 'TerrainGenerator',
           'classify_depth', 'generate_terrain']
