"""
Landmark catalog loading.

Reads the JSON catalog once at startup. Problems inside a readable file
never abort the load: an unparsable document yields an empty catalog and a
warning, and a record with missing or invalid coordinates is kept with the
coordinate set to 0 and flagged, so the mislocation is visible to callers.
"""
import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from landmark_radar.data.schemas import (
    LATITUDE_KEYS,
    LONGITUDE_KEYS,
    Landmark,
    LandmarkRecord,
)
from landmark_radar.utils.exceptions import CatalogLoadError
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)

# Top-level keys that may hold the record list
RECORD_LIST_KEYS = ('landmarks', 'beffroi')

DEFAULT_COORDINATE = 0.0


@dataclass(frozen=True)
class CatalogWarning:
    """A non-fatal problem found while loading the catalog."""
    message: str
    record_index: Optional[int] = None
    field_name: Optional[str] = None


@dataclass
class CatalogLoadResult:
    """Loaded landmarks plus any warnings raised along the way."""
    landmarks: Tuple[Landmark, ...] = ()
    warnings: List[CatalogWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def coerced_count(self) -> int:
        return sum(1 for lm in self.landmarks if lm.location_coerced)


def load_landmark_catalog(file_path: Path) -> CatalogLoadResult:
    """
    Load the landmark catalog from a JSON file.

    Args:
        file_path: Path to the catalog JSON

    Returns:
        CatalogLoadResult (empty with a warning if the JSON is malformed)

    Raises:
        CatalogLoadError: If the file does not exist or cannot be read

    Example:
        >>> result = load_landmark_catalog(Path("data/beffrois.json"))
        >>> print(f"Loaded {len(result.landmarks)} landmarks")
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise CatalogLoadError(f"Catalog file not found: {file_path}")

    logger.info("loading_catalog", file=str(file_path))

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(f"Failed to read catalog file: {e}") from e

    return parse_landmark_catalog(text)


def parse_landmark_catalog(source: Union[str, bytes, Any]) -> CatalogLoadResult:
    """
    Build landmarks from catalog JSON text or an already-decoded document.

    Args:
        source: JSON text, or the decoded object (dict or list)

    Returns:
        CatalogLoadResult
    """
    if isinstance(source, (str, bytes)):
        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            warning = CatalogWarning(f"Catalog is not valid JSON: {e}")
            logger.warning("catalog_parse_failed", error=str(e))
            return CatalogLoadResult(warnings=[warning])
    else:
        data = source

    warnings: List[CatalogWarning] = []
    records = _extract_records(data, warnings)

    landmarks = []
    for idx, raw in enumerate(records):
        landmark = _build_landmark(idx, raw, warnings)
        if landmark is not None:
            landmarks.append(landmark)

    result = CatalogLoadResult(landmarks=tuple(landmarks), warnings=warnings)
    logger.info(
        "catalog_loaded",
        landmarks=len(result.landmarks),
        coerced_locations=result.coerced_count,
        warnings=len(warnings),
    )
    return result


def _extract_records(data: Any, warnings: List[CatalogWarning]) -> List[Any]:
    if isinstance(data, list):
        return data

    if isinstance(data, dict):
        for key in RECORD_LIST_KEYS:
            if key in data:
                records = data[key]
                if isinstance(records, list):
                    return records
                warnings.append(CatalogWarning(f"Catalog field '{key}' is not a list"))
                logger.warning("catalog_records_not_list", key=key)
                return []
        # A document without records is an empty catalog
        return []

    warnings.append(CatalogWarning(f"Catalog document has unexpected type {type(data).__name__}"))
    logger.warning("catalog_unexpected_document", type=type(data).__name__)
    return []


def _build_landmark(idx: int, raw: Any, warnings: List[CatalogWarning]) -> Optional[Landmark]:
    if not isinstance(raw, dict):
        warnings.append(CatalogWarning("Record is not an object; skipped", record_index=idx))
        logger.warning("catalog_record_skipped", record_index=idx, type=type(raw).__name__)
        return None

    try:
        record = LandmarkRecord.model_validate(raw)
    except ValidationError as e:
        warnings.append(CatalogWarning(f"Record failed validation; skipped: {e.error_count()} errors", record_index=idx))
        logger.warning("catalog_record_invalid", record_index=idx, errors=e.errors())
        return None

    location = record.location or {}
    latitude, lat_ok = _resolve_coordinate(location, LATITUDE_KEYS, 90.0)
    longitude, lon_ok = _resolve_coordinate(location, LONGITUDE_KEYS, 180.0)

    for ok, name in ((lat_ok, 'latitude'), (lon_ok, 'longitude')):
        if not ok:
            warnings.append(CatalogWarning(
                f"Missing or invalid {name}; set to {DEFAULT_COORDINATE}",
                record_index=idx,
                field_name=name,
            ))
            logger.warning("catalog_coordinate_coerced", record_index=idx, field=name)

    return Landmark(
        id=idx,
        title=record.title or f"Landmark {idx + 1}",
        audio_path=record.audio_path,
        source=record.source,
        latitude=latitude,
        longitude=longitude,
        location_coerced=not (lat_ok and lon_ok),
    )


def _resolve_coordinate(location: Dict[str, Any], keys: Sequence[str], limit: float) -> Tuple[float, bool]:
    """First present spelling of a coordinate, or the default when missing/invalid."""
    for key in keys:
        if location.get(key) is None:
            continue
        value = location[key]
        if isinstance(value, bool):
            return DEFAULT_COORDINATE, False
        try:
            number = float(value)
        except (TypeError, ValueError):
            return DEFAULT_COORDINATE, False
        if not math.isfinite(number) or abs(number) > limit:
            return DEFAULT_COORDINATE, False
        return number, True
    return DEFAULT_COORDINATE, False


def get_catalog_summary(landmarks: Sequence[Landmark]) -> dict:
    """
    Summary statistics for a loaded catalog.

    Example:
        >>> summary = get_catalog_summary(result.landmarks)
        >>> print(summary['total_landmarks'], summary['with_audio'])
    """
    summary = {
        'total_landmarks': len(landmarks),
        'coerced_locations': sum(1 for lm in landmarks if lm.location_coerced),
        'with_audio': sum(1 for lm in landmarks if lm.audio_path),
        'bounding_box': None,
    }

    located = [lm for lm in landmarks if not lm.location_coerced]
    if located:
        summary['bounding_box'] = {
            'min_latitude': min(lm.latitude for lm in located),
            'max_latitude': max(lm.latitude for lm in located),
            'min_longitude': min(lm.longitude for lm in located),
            'max_longitude': max(lm.longitude for lm in located),
        }

    return summary
