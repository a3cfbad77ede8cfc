"""
Terrain configuration: noise shape parameters and the band palette.

Colors are immutable values; every setter replaces a whole color. Numeric
parameters are stored as given, without range checks.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Color:
    """An RGB color with 8-bit channels."""

    red: int
    green: int
    blue: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)


class TerrainBand(IntEnum):
    """Terrain bands, ordered from the highest depth threshold down."""

    DEEP_WATER = 0
    MEDIUM_WATER = 1
    SHALLOW_WATER = 2
    SAND = 3
    LOW_GRASS = 4
    HIGH_GRASS = 5
    ROCK = 6
    SNOW = 7


BAND_NAMES = {
    TerrainBand.DEEP_WATER: "Deep Water",
    TerrainBand.MEDIUM_WATER: "Medium Water",
    TerrainBand.SHALLOW_WATER: "Shallow Water",
    TerrainBand.SAND: "Sand",
    TerrainBand.LOW_GRASS: "Low Grass",
    TerrainBand.HIGH_GRASS: "High Grass",
    TerrainBand.ROCK: "Rock",
    TerrainBand.SNOW: "Snow",
}

# Attribute holding each band's color on TerrainConfiguration
BAND_FIELDS = {
    TerrainBand.DEEP_WATER: "deep_water",
    TerrainBand.MEDIUM_WATER: "medium_water",
    TerrainBand.SHALLOW_WATER: "shallow_water",
    TerrainBand.SAND: "sand",
    TerrainBand.LOW_GRASS: "low_grass",
    TerrainBand.HIGH_GRASS: "high_grass",
    TerrainBand.ROCK: "rock",
    TerrainBand.SNOW: "snow",
}

DEFAULT_SCALE = 125.0
DEFAULT_LACUNARITY = 2.0
DEFAULT_PERSISTENCE = 0.5
DEFAULT_OCTAVES = 5

DEFAULT_PALETTE = {
    TerrainBand.DEEP_WATER: Color(8, 50, 201),
    TerrainBand.MEDIUM_WATER: Color(8, 66, 201),
    TerrainBand.SHALLOW_WATER: Color(8, 114, 201),
    TerrainBand.SAND: Color(255, 228, 110),
    TerrainBand.LOW_GRASS: Color(23, 140, 22),
    TerrainBand.HIGH_GRASS: Color(23, 120, 22),
    TerrainBand.ROCK: Color(55, 63, 66),
    TerrainBand.SNOW: Color(230, 232, 237),
}


@dataclass
class TerrainConfiguration:
    """
    Parameters for one terrain generation run.

    Attributes:
        scale: Divisor applied to pixel coordinates; larger values give
            larger features
        lacunarity: Frequency multiplier between octaves
        persistence: Amplitude multiplier between octaves
        octaves: Number of noise layers summed
    """

    scale: float = DEFAULT_SCALE
    lacunarity: float = DEFAULT_LACUNARITY
    persistence: float = DEFAULT_PERSISTENCE
    octaves: int = DEFAULT_OCTAVES

    deep_water: Color = DEFAULT_PALETTE[TerrainBand.DEEP_WATER]
    medium_water: Color = DEFAULT_PALETTE[TerrainBand.MEDIUM_WATER]
    shallow_water: Color = DEFAULT_PALETTE[TerrainBand.SHALLOW_WATER]
    sand: Color = DEFAULT_PALETTE[TerrainBand.SAND]
    low_grass: Color = DEFAULT_PALETTE[TerrainBand.LOW_GRASS]
    high_grass: Color = DEFAULT_PALETTE[TerrainBand.HIGH_GRASS]
    rock: Color = DEFAULT_PALETTE[TerrainBand.ROCK]
    snow: Color = DEFAULT_PALETTE[TerrainBand.SNOW]

    @classmethod
    def new_default(cls) -> "TerrainConfiguration":
        """Create a configuration with the default shape and palette."""
        return cls()

    def set_generation_modifiers(
        self, scale: float, lacunarity: float, persistence: float, octaves: int
    ) -> None:
        """Overwrite the four noise shape parameters."""
        self.scale = scale
        self.lacunarity = lacunarity
        self.persistence = persistence
        self.octaves = octaves

    def set_deep_water_color(self, r: int, g: int, b: int) -> None:
        self.deep_water = Color(r, g, b)

    def set_medium_water_color(self, r: int, g: int, b: int) -> None:
        self.medium_water = Color(r, g, b)

    def set_shallow_water_color(self, r: int, g: int, b: int) -> None:
        self.shallow_water = Color(r, g, b)

    def set_sand_color(self, r: int, g: int, b: int) -> None:
        self.sand = Color(r, g, b)

    def set_low_grass_color(self, r: int, g: int, b: int) -> None:
        self.low_grass = Color(r, g, b)

    def set_high_grass_color(self, r: int, g: int, b: int) -> None:
        self.high_grass = Color(r, g, b)

    def set_rock_color(self, r: int, g: int, b: int) -> None:
        self.rock = Color(r, g, b)

    def set_snow_color(self, r: int, g: int, b: int) -> None:
        self.snow = Color(r, g, b)

    def color_for(self, band: TerrainBand) -> Color:
        """Get the configured color for a band."""
        return getattr(self, BAND_FIELDS[TerrainBand(band)])

    def palette(self) -> List[Color]:
        """Band colors indexed by TerrainBand value."""
        return [self.color_for(band) for band in TerrainBand]

    def copy(self) -> "TerrainConfiguration":
        return replace(self)

    def to_dict(self) -> Dict:
        """Convert to plain data, colors as [r, g, b] lists."""
        data = {
            "scale": self.scale,
            "lacunarity": self.lacunarity,
            "persistence": self.persistence,
            "octaves": self.octaves,
        }
        for band in TerrainBand:
            data[BAND_FIELDS[band]] = list(self.color_for(band).as_tuple())
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "TerrainConfiguration":
        """
        Build a configuration from plain data.

        Missing keys keep their defaults, so partial overrides are accepted.
        """
        config = cls()
        config.set_generation_modifiers(
            data.get("scale", config.scale),
            data.get("lacunarity", config.lacunarity),
            data.get("persistence", config.persistence),
            data.get("octaves", config.octaves),
        )
        for band in TerrainBand:
            name = BAND_FIELDS[band]
            if data.get(name) is not None:
                r, g, b = data[name]
                setattr(config, name, Color(r, g, b))
        return config
