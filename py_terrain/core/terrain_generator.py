"""
Terrain map generation from fractal OpenSimplex noise.

Every pixel of a fixed 750x500 grid is sampled through several octaves of
noise, the summed signal is normalized into a depth in [0, 1] and the depth
is classified into one of eight terrain bands, each painted with a flat
color from the TerrainConfiguration.

The grid is evaluated one octave at a time with NumPy. Each pixel still goes
through the same floating point operations, in the same order, as the
per-pixel formulation, so a given seed always gives the same bitmap.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

import numpy as np
import structlog

from ..utils.image import save_png
from ..utils.random import FixedSeedSource, SeedSource, get_seed_source
from .noise import NoiseSource, OpenSimplexNoise
from .terrain_config import BAND_NAMES, TerrainBand, TerrainConfiguration

logger = structlog.get_logger()

MAP_WIDTH = 750
MAP_HEIGHT = 500

# (threshold, band) pairs checked top-down; a depth above the threshold
# selects the band, anything at or below the last threshold is snow
BAND_THRESHOLDS = (
    (0.70, TerrainBand.DEEP_WATER),
    (0.56, TerrainBand.MEDIUM_WATER),
    (0.52, TerrainBand.SHALLOW_WATER),
    (0.50, TerrainBand.SAND),
    (0.41, TerrainBand.LOW_GRASS),
    (0.31, TerrainBand.HIGH_GRASS),
    (0.23, TerrainBand.ROCK),
)
FALLBACK_BAND = TerrainBand.SNOW


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    A generated terrain bitmap.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        pixels: RGB values, shape (height, width, 3), dtype uint8
        bands: TerrainBand value of each pixel, shape (height, width)
    """

    width: int
    height: int
    pixels: np.ndarray
    bands: np.ndarray

    def __post_init__(self):
        if self.pixels.shape != (self.height, self.width, 3):
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height}"
            )
        if self.bands.shape != (self.height, self.width):
            raise ValueError(
                f"Band array shape {self.bands.shape} does not match "
                f"{self.width}x{self.height}"
            )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixel(self, x: int, y: int) -> tuple:
        """Get the (r, g, b) color at column x, row y."""
        r, g, b = self.pixels[y, x]
        return (int(r), int(g), int(b))

    def band_at(self, x: int, y: int) -> TerrainBand:
        return TerrainBand(int(self.bands[y, x]))

    def band_counts(self) -> Dict[TerrainBand, int]:
        """Number of pixels in each band, every band present."""
        counts = np.bincount(self.bands.ravel(), minlength=len(TerrainBand))
        return {band: int(counts[band]) for band in TerrainBand}

    def band_fractions(self) -> Dict[TerrainBand, float]:
        return {
            band: count / self.pixel_count
            for band, count in self.band_counts().items()
        }


def classify_depth(depth: float) -> TerrainBand:
    """
    Classify a single depth value into its terrain band.

    NaN compares false against every threshold and lands in the fallback band.
    """
    for threshold, band in BAND_THRESHOLDS:
        if depth > threshold:
            return band
    return FALLBACK_BAND


def classify_depths(depths: np.ndarray) -> np.ndarray:
    """Vectorized classify_depth; returns an array of TerrainBand values."""
    depths = np.asarray(depths, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        conditions = [depths > threshold for threshold, _ in BAND_THRESHOLDS]
    choices = [int(band) for _, band in BAND_THRESHOLDS]
    return np.select(conditions, choices, default=int(FALLBACK_BAND)).astype(np.uint8)


def fractal_depth(
    noise: NoiseSource,
    xs: np.ndarray,
    ys: np.ndarray,
    lacunarity: float,
    persistence: float,
    octaves: int,
) -> np.ndarray:
    """
    Sum octaves of noise over a sample grid and normalize the result to [0, 1].

    Args:
        noise: Noise source to sample
        xs: Sample x coordinates (already divided by scale), one per column
        ys: Sample y coordinates, one per row
        lacunarity: Frequency multiplier between octaves
        persistence: Amplitude multiplier between octaves
        octaves: Number of octaves

    Returns:
        Depth array of shape (len(ys), len(xs))
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)

    frequency = 1.0
    amplitude = 1.0
    normalizer = 0.0
    total = np.zeros((len(ys), len(xs)), dtype=np.float64)

    for _ in range(octaves):
        total += noise.eval_grid(xs * frequency, ys * frequency) * amplitude
        normalizer += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    # octaves=0 leaves normalizer at zero and gives NaN depths
    with np.errstate(divide="ignore", invalid="ignore"):
        return (total / np.float64(normalizer) + 1) / 2


def build_palette(config: TerrainConfiguration) -> np.ndarray:
    """
    Band colors as a (8, 3) uint8 lookup table.

    Channel values outside [0, 255] are clamped when painted.
    """
    colors = np.array(
        [color.as_tuple() for color in config.palette()], dtype=np.int64
    )
    return np.clip(colors, 0, 255).astype(np.uint8)


class TerrainGenerator:
    """
    Generates terrain bitmaps from a TerrainConfiguration.

    Collaborators are injectable: the seed source feeding each run, the
    factory building the noise source from a seed, and the image writer used
    when an output path is requested.
    """

    def __init__(
        self,
        seed_source: Optional[SeedSource] = None,
        noise_factory: Callable[[int], NoiseSource] = OpenSimplexNoise,
        image_writer: Optional[Callable[[PixelBuffer, Union[str, Path]], Path]] = None,
    ):
        """
        Initialize the terrain generator.

        Args:
            seed_source: Source of noise seeds; the process-wide source if None
            noise_factory: Builds a noise source from an integer seed
            image_writer: Persists a PixelBuffer; save_png if None
        """
        self.seed_source = seed_source
        self.noise_factory = noise_factory
        self.image_writer = image_writer or save_png
        self.last_seed = None

    def _next_seed(self) -> int:
        source = self.seed_source or get_seed_source()
        return source.next_seed()

    def generate(
        self,
        config: TerrainConfiguration,
        output_path: Optional[Union[str, Path]] = None,
    ) -> PixelBuffer:
        """
        Generate one terrain map.

        Args:
            config: Shape parameters and palette
            output_path: Where to write the PNG; nothing is written if None

        Returns:
            The completed PixelBuffer
        """
        seed = self._next_seed()
        self.last_seed = seed
        noise = self.noise_factory(seed)

        logger.info(
            "Generating terrain",
            seed=seed,
            width=MAP_WIDTH,
            height=MAP_HEIGHT,
            scale=config.scale,
            lacunarity=config.lacunarity,
            persistence=config.persistence,
            octaves=config.octaves,
        )

        with np.errstate(divide="ignore", invalid="ignore"):
            xs = np.arange(MAP_WIDTH, dtype=np.float64) / np.float64(config.scale)
            ys = np.arange(MAP_HEIGHT, dtype=np.float64) / np.float64(config.scale)

        depths = fractal_depth(
            noise, xs, ys, config.lacunarity, config.persistence, config.octaves
        )
        bands = classify_depths(depths)
        pixels = build_palette(config)[bands]

        buffer = PixelBuffer(
            width=MAP_WIDTH, height=MAP_HEIGHT, pixels=pixels, bands=bands
        )

        logger.info(
            "Terrain generated",
            seed=seed,
            bands={
                BAND_NAMES[band]: count
                for band, count in buffer.band_counts().items()
            },
        )

        if output_path is not None:
            self.image_writer(buffer, output_path)

        return buffer


def generate_terrain(
    config: Optional[TerrainConfiguration] = None,
    seed: Optional[int] = None,
    output_path: Optional[Union[str, Path]] = None,
) -> PixelBuffer:
    """
    Generate a terrain map in one call.

    Args:
        config: Configuration to use; the defaults if None
        seed: Noise seed; drawn from the process-wide source if None
        output_path: Optional PNG destination

    Returns:
        The completed PixelBuffer
    """
    seed_source = FixedSeedSource(seed) if seed is not None else None
    generator = TerrainGenerator(seed_source=seed_source)
    return generator.generate(config or TerrainConfiguration.new_default(), output_path)
