"""
Landmark catalog module.

Provides the Pydantic landmark schemas and the tolerant JSON catalog loader.
"""
from landmark_radar.data.schemas import Landmark, LandmarkRecord
from landmark_radar.data.loaders import (
    CatalogLoadResult,
    CatalogWarning,
    get_catalog_summary,
    load_landmark_catalog,
    parse_landmark_catalog,
)

__all__ = [
    'Landmark',
    'LandmarkRecord',
    'CatalogLoadResult',
    'CatalogWarning',
    'get_catalog_summary',
    'load_landmark_catalog',
    'parse_landmark_catalog',
]
