"""
Custom exception hierarchy for Landmark Radar.

All custom exceptions inherit from LandmarkRadarError for easy catching.
"""


class LandmarkRadarError(Exception):
    """Base exception for all Landmark Radar errors."""
    pass


class ConfigurationError(LandmarkRadarError):
    """Configuration-related errors.

    Raised when configuration loading or validation fails.

    Example:
        >>> raise ConfigurationError("Config document must be a mapping")
    """
    pass


class DataLoadError(LandmarkRadarError):
    """Data loading errors.

    Raised when input files cannot be found or read.

    Example:
        >>> raise DataLoadError("Failed to read track CSV: file not found")
    """
    pass


class CatalogLoadError(DataLoadError):
    """Landmark catalog loading errors.

    Raised when the catalog file cannot be found or read at all. Content
    problems inside a readable file are reported as warnings instead.

    Example:
        >>> raise CatalogLoadError("Catalog file not found: landmarks.json")
    """
    pass


class DataValidationError(LandmarkRadarError):
    """Data validation errors.

    Raised when tabular input (e.g. a replay track) fails validation checks.

    Attributes:
        invalid_rows: Number of rows that failed validation
        details: Dictionary with validation error details
    """

    def __init__(self, message: str, invalid_rows: int = 0, details: dict = None):
        super().__init__(message)
        self.invalid_rows = invalid_rows
        self.details = details or {}

    def __str__(self):
        base = super().__str__()
        if self.invalid_rows > 0:
            return f"{base} (invalid_rows={self.invalid_rows})"
        return base


class GeometryError(LandmarkRadarError):
    """Geometric calculation errors.

    Raised when geometry operations receive input they are undefined for
    (e.g., the circular mean of no angles).
    """
    pass
