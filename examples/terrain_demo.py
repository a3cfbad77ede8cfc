#!/usr/bin/env python3
"""
Demo script showing how the generation modifiers and palette change a map.
"""

from py_terrain.core import (
    BAND_NAMES,
    TerrainConfiguration,
    TerrainGenerator,
)
from py_terrain.utils.random import FixedSeedSource


def print_distribution(buffer):
    for band, fraction in buffer.band_fractions().items():
        bar = "#" * int(fraction * 50)
        print(f"  {BAND_NAMES[band]:<14} {fraction * 100:5.1f}% {bar}")


def main():
    """Demonstrate terrain generation."""
    print("Py-Terrain Generation Demo")
    print("=" * 40)

    seed = 20240611
    variants = {
        "default": (125.0, 2.0, 0.5, 5),
        "zoomed_out": (40.0, 2.0, 0.5, 5),
        "rough": (125.0, 2.5, 0.7, 8),
        "smooth": (250.0, 2.0, 0.3, 3),
    }

    for name, modifiers in variants.items():
        print(f"\n{name.upper()} (scale={modifiers[0]}, lacunarity={modifiers[1]}, "
              f"persistence={modifiers[2]}, octaves={modifiers[3]}):")
        print("-" * 30)

        config = TerrainConfiguration.new_default()
        config.set_generation_modifiers(*modifiers)

        generator = TerrainGenerator(seed_source=FixedSeedSource(seed))
        buffer = generator.generate(config, output_path=f"demo_{name}.png")
        print_distribution(buffer)

    print("\nAUTUMN palette:")
    print("-" * 30)
    config = TerrainConfiguration.new_default()
    config.set_low_grass_color(196, 140, 42)
    config.set_high_grass_color(150, 82, 30)
    config.set_snow_color(250, 250, 250)
    generator = TerrainGenerator(seed_source=FixedSeedSource(seed))
    generator.generate(config, output_path="demo_autumn.png")
    print("  written to demo_autumn.png")


if __name__ == "__main__":
    main()
