from pydantic import BaseModel, Field


class Coordinate(BaseModel):
    """A point on the globe in decimal degrees."""

    lat: float = Field(ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    lon: float = Field(ge=-180.0, le=180.0, description="Longitude in decimal degrees")
