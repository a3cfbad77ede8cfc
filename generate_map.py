#!/usr/bin/env python3
"""
Generate a terrain map PNG.

Usage:
    python generate_map.py [--seed N] [--output map.png]
                           [--scale S] [--lacunarity L] [--persistence P] [--octaves O]

Without --seed a wall-clock seeded map is produced, different on every run.
"""

import sys

import structlog

from py_terrain.config import settings
from py_terrain.core.terrain_config import BAND_NAMES, TerrainConfiguration
from py_terrain.core.terrain_generator import TerrainGenerator
from py_terrain.utils.random import FixedSeedSource
from py_terrain.utils.setup_logging import configure_logging

logger = structlog.get_logger()


def main():
    """Main function."""
    import argparse

    parser = argparse.ArgumentParser(description="Generate a terrain map PNG")
    parser.add_argument("--seed", type=int, default=settings.seed, help="Noise seed for a reproducible map")
    parser.add_argument("--output", default=settings.output_path, help="Output PNG path")
    parser.add_argument("--scale", type=float, help="Feature size divisor")
    parser.add_argument("--lacunarity", type=float, help="Frequency multiplier per octave")
    parser.add_argument("--persistence", type=float, help="Amplitude multiplier per octave")
    parser.add_argument("--octaves", type=int, help="Number of noise layers")

    args = parser.parse_args()

    configure_logging(settings.log_level, settings.log_format)

    config = TerrainConfiguration.new_default()
    config.set_generation_modifiers(
        args.scale if args.scale is not None else config.scale,
        args.lacunarity if args.lacunarity is not None else config.lacunarity,
        args.persistence if args.persistence is not None else config.persistence,
        args.octaves if args.octaves is not None else config.octaves,
    )

    seed_source = FixedSeedSource(args.seed) if args.seed is not None else None
    generator = TerrainGenerator(seed_source=seed_source)

    try:
        buffer = generator.generate(config, output_path=args.output)
    except OSError as e:
        logger.error("Failed to write terrain map", output=args.output, error=str(e))
        sys.exit(1)

    print(f"Terrain map written to {args.output} (seed {generator.last_seed})")
    for band, fraction in buffer.band_fractions().items():
        print(f"  {BAND_NAMES[band]:<14} {fraction * 100:6.2f}%")


if __name__ == "__main__":
    main()
