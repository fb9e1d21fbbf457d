"""
Pydantic schemas for the landmark catalog.

Defines the raw catalog record (tolerant of the field spellings found in
real catalog files) and the immutable Landmark used by the engine.
"""
from typing import Any, Dict, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator

# Accepted spellings for location fields, in lookup order
LATITUDE_KEYS = ('latitude', 'lat')
LONGITUDE_KEYS = ('longitude', 'longiture', 'lon', 'long', 'lng')


class Landmark(BaseModel):
    """
    A known landmark the radar points at.

    Example:
        >>> landmark = Landmark(
        ...     id=0,
        ...     title='Beffroi de Lille',
        ...     audio_path='audio/lille.mp3',
        ...     latitude=50.6355,
        ...     longitude=3.0700,
        ... )
    """
    id: int = Field(..., ge=0, description="Position in the catalog")
    title: str = Field(..., min_length=1, description="Display title")
    audio_path: Optional[str] = Field(None, description="Playable audio path or URL")
    source: Optional[str] = Field(None, description="Source citation")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    location_coerced: bool = Field(False, description="True when a coordinate was missing or invalid and set to 0")

    model_config = {
        "frozen": True,
        "str_strip_whitespace": True,
    }


class LandmarkRecord(BaseModel):
    """
    One raw record from a catalog file, before coordinates are resolved.

    Unknown fields are ignored; ``titre``/``localisation`` are accepted
    alongside ``title``/``location``.
    """
    title: Optional[str] = Field(None, validation_alias=AliasChoices('title', 'titre', 'name'))
    audio_path: Optional[str] = Field(None, validation_alias=AliasChoices('path', 'audio', 'audio_path'))
    source: Optional[str] = None
    location: Optional[Dict[str, Any]] = Field(
        None, validation_alias=AliasChoices('location', 'localisation')
    )

    @field_validator('title', 'audio_path', 'source', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty or non-string values as absent."""
        if v is None:
            return None
        if not isinstance(v, str):
            v = str(v)
        v = v.strip()
        return v or None

    @field_validator('location', mode='before')
    @classmethod
    def location_mapping(cls, v):
        """A location that is not a mapping is treated as missing."""
        return v if isinstance(v, dict) else None

    model_config = {
        "extra": "ignore",
    }
