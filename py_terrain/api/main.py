"""FastAPI main application."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field
from typing import Annotated, List, Optional, Tuple
import structlog

from ..config import settings
from ..core.terrain_config import (
    BAND_NAMES,
    DEFAULT_LACUNARITY,
    DEFAULT_OCTAVES,
    DEFAULT_PERSISTENCE,
    DEFAULT_SCALE,
    TerrainBand,
    TerrainConfiguration,
)
from ..core.terrain_generator import PixelBuffer, TerrainGenerator
from ..utils.image import encode_png
from ..utils.random import FixedSeedSource
from ..utils.setup_logging import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Terrain Map Generator API",
    description="Procedural terrain maps from fractal OpenSimplex noise",
    version="0.1.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Channel = Annotated[int, Field(ge=0, le=255)]
RGB = Tuple[Channel, Channel, Channel]


# Request/Response models
class TerrainRequest(BaseModel):
    """Request to generate a terrain map."""

    seed: Optional[int] = Field(None, ge=0, description="Noise seed for reproducible maps")
    scale: float = Field(DEFAULT_SCALE, gt=0, description="Feature size divisor")
    lacunarity: float = Field(DEFAULT_LACUNARITY, gt=0, description="Frequency multiplier per octave")
    persistence: float = Field(DEFAULT_PERSISTENCE, gt=0, description="Amplitude multiplier per octave")
    octaves: int = Field(DEFAULT_OCTAVES, ge=1, le=16, description="Number of noise layers")

    deep_water: Optional[RGB] = None
    medium_water: Optional[RGB] = None
    shallow_water: Optional[RGB] = None
    sand: Optional[RGB] = None
    low_grass: Optional[RGB] = None
    high_grass: Optional[RGB] = None
    rock: Optional[RGB] = None
    snow: Optional[RGB] = None

    def to_configuration(self) -> TerrainConfiguration:
        return TerrainConfiguration.from_dict(self.model_dump(exclude={"seed"}))


class BandStatistics(BaseModel):
    """Pixel distribution of one terrain band."""

    band: str
    pixel_count: int
    percentage: float
    color: RGB


class TerrainStatistics(BaseModel):
    """Band distribution of a generated map."""

    seed: int
    width: int
    height: int
    total_pixels: int
    bands: List[BandStatistics]


def _run_generation(request: TerrainRequest) -> Tuple[PixelBuffer, int, TerrainConfiguration]:
    config = request.to_configuration()
    seed_source = FixedSeedSource(request.seed) if request.seed is not None else None
    generator = TerrainGenerator(seed_source=seed_source)

    try:
        buffer = generator.generate(config)
    except Exception as e:
        logger.error("Terrain generation failed", error=str(e))
        raise HTTPException(status_code=500, detail="Terrain generation failed")

    return buffer, generator.last_seed, config


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Terrain Map Generator API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/config/default")
async def default_configuration():
    """Default generation parameters and palette."""
    return TerrainConfiguration.new_default().to_dict()


@app.post("/maps/generate")
def generate_map(request: TerrainRequest):
    """
    Generate a terrain map and return it as a PNG.

    The seed used is returned in the X-Terrain-Seed header.
    """
    logger.info("Map generation requested", request=request.model_dump())

    buffer, seed, _ = _run_generation(request)

    return Response(
        content=encode_png(buffer),
        media_type="image/png",
        headers={"X-Terrain-Seed": str(seed)},
    )


@app.post("/maps/statistics", response_model=TerrainStatistics)
def map_statistics(request: TerrainRequest):
    """Generate a terrain map and return its band distribution."""
    logger.info("Map statistics requested", request=request.model_dump())

    buffer, seed, config = _run_generation(request)

    counts = buffer.band_counts()
    bands = [
        BandStatistics(
            band=BAND_NAMES[band],
            pixel_count=counts[band],
            percentage=round(counts[band] / buffer.pixel_count * 100, 2),
            color=config.color_for(band).as_tuple(),
        )
        for band in TerrainBand
    ]

    return TerrainStatistics(
        seed=seed,
        width=buffer.width,
        height=buffer.height,
        total_pixels=buffer.pixel_count,
        bands=bands,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
