"""
Configuration management using Pydantic for validation.

This module provides type-safe configuration loading and validation
for the radar layout engine and its tick scheduler.
"""
from pathlib import Path
from pydantic import BaseModel, Field
import yaml

from landmark_radar.core.alignment import AlignmentPolicy
from landmark_radar.core.clustering import JoinPolicy
from landmark_radar.utils.exceptions import ConfigurationError


class TimingParams(BaseModel):
    """Sensor staleness windows and timeouts (milliseconds)."""
    initial_fix_max_age_ms: int = Field(10000, ge=0, description="Oldest cached fix accepted as the first fix")
    watch_fix_max_age_ms: int = Field(5000, ge=0, description="Oldest fix accepted for continuous updates")
    position_timeout_ms: int = Field(10000, ge=1, description="Wait for a first fix before warning")


class StyleParams(BaseModel):
    """Draw-command styling handed to the renderer."""
    aligned_color: str = "#000"
    idle_color: str = "#666"
    aligned_line_width: float = Field(5.0, gt=0.0)
    idle_line_width: float = Field(2.0, gt=0.0)
    aligned_marker_color: str = "#000"
    idle_marker_color: str = "#444"
    aligned_marker_radius: float = Field(6.0, gt=0.0)
    idle_marker_radius: float = Field(4.0, gt=0.0)
    label_color: str = "#222"
    label_font: str = "12px system-ui"
    label_offset: float = 4.0
    axis_color: str = "#eee"
    reference_color: str = "#19a75b"
    reference_line_width: float = Field(3.0, gt=0.0)
    reference_top_margin: float = Field(10.0, ge=0.0)


class RadarConfig(BaseModel):
    """Complete configuration for the radar engine."""
    alignment_tolerance_deg: float = Field(5.0, ge=0.0, le=180.0, description="Half-width of the forward band (degrees)")
    group_spacing_deg: float = Field(3.0, gt=0.0, le=180.0, description="Cluster join threshold and spread spacing (degrees)")
    max_display_distance_km: float = Field(200.0, gt=0.0, description="Distance at which lines reach minimum length (km)")
    line_max_length: float = Field(260.0, gt=0.0, description="Longest line drawn (display units)")
    min_line_length: float = Field(40.0, ge=0.0, description="Shortest line drawn (display units)")
    min_length_ratio: float = Field(0.05, ge=0.0, le=1.0, description="Lower clamp of the distance ratio")
    label_position_ratio: float = Field(0.6, ge=0.0, le=1.0, description="Label anchor as a fraction of line length")
    canvas_size: int = Field(720, ge=1, description="Largest canvas edge (display units)")
    canvas_margin: float = Field(20.0, ge=0.0, description="Gap kept between line ends and the canvas edge")
    update_interval_ms: int = Field(60, ge=1, description="Minimum interval between frame rebuilds (ms)")
    audio_fade_ms: int = Field(150, ge=0, description="Audio fade applied when stopping playback (ms)")
    join_policy: JoinPolicy = JoinPolicy.FIRST_MATCH
    alignment_policy: AlignmentPolicy = AlignmentPolicy.LAST
    timing: TimingParams = Field(default_factory=TimingParams)
    style: StyleParams = Field(default_factory=StyleParams)

    model_config = {
        "validate_assignment": True,
    }


def load_config(config_path: Path) -> RadarConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated RadarConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed
        ConfigurationError: If the document is not a mapping
        ValidationError: If config validation fails

    Example:
        >>> config = load_config(Path("config/radar.yaml"))
        >>> print(config.alignment_tolerance_deg)
        5.0
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return RadarConfig()
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(config_dict).__name__}"
        )

    return RadarConfig(**config_dict)


def get_default_config() -> RadarConfig:
    """
    Get default configuration.

    Returns:
        Default RadarConfig
    """
    return RadarConfig()
