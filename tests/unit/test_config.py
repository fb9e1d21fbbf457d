"""
Tests for configuration management.
"""
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from landmark_radar.core.alignment import AlignmentPolicy
from landmark_radar.core.clustering import JoinPolicy
from landmark_radar.utils.config import (
    RadarConfig,
    StyleParams,
    TimingParams,
    get_default_config,
    load_config,
)
from landmark_radar.utils.exceptions import ConfigurationError

CONFIG_DIR = Path(__file__).parents[2] / "config"


def write_yaml(tmpdir, text):
    path = Path(tmpdir) / "radar.yaml"
    path.write_text(text)
    return path


def test_load_shipped_config():
    """Test loading the shipped default configuration."""
    config = load_config(CONFIG_DIR / "radar.yaml")

    assert config.alignment_tolerance_deg == 5.0
    assert config.group_spacing_deg == 3.0
    assert config.max_display_distance_km == 200.0
    assert config.update_interval_ms == 60
    assert config.join_policy is JoinPolicy.FIRST_MATCH
    assert config.alignment_policy is AlignmentPolicy.LAST
    assert config.timing.watch_fix_max_age_ms == 5000


def test_config_file_not_found():
    """Test error handling when config file doesn't exist."""
    with pytest.raises(FileNotFoundError):
        load_config(Path("config/nonexistent.yaml"))


def test_partial_config_keeps_defaults():
    """Test that omitted keys fall back to defaults."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(write_yaml(tmpdir, "alignment_tolerance_deg: 2.5\nalignment_policy: nearest\n"))

    assert config.alignment_tolerance_deg == 2.5
    assert config.alignment_policy is AlignmentPolicy.NEAREST
    assert config.group_spacing_deg == 3.0
    assert config.style.reference_color == "#19a75b"


def test_empty_config_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(write_yaml(tmpdir, ""))

    assert config == RadarConfig()


def test_non_mapping_config():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_yaml(tmpdir, "- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config(path)


def test_invalid_value_in_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_yaml(tmpdir, "group_spacing_deg: 0\n")
        with pytest.raises(ValidationError):
            load_config(path)


def test_radar_config_validation():
    """Test validation of radar parameters."""
    with pytest.raises(ValidationError):
        RadarConfig(alignment_tolerance_deg=-1)

    with pytest.raises(ValidationError):
        RadarConfig(alignment_tolerance_deg=200)

    with pytest.raises(ValidationError):
        RadarConfig(update_interval_ms=0)

    with pytest.raises(ValidationError):
        RadarConfig(min_length_ratio=1.5)

    with pytest.raises(ValidationError):
        RadarConfig(join_policy="random")


def test_validate_assignment():
    config = RadarConfig()
    with pytest.raises(ValidationError):
        config.group_spacing_deg = -3


def test_timing_params_validation():
    assert TimingParams().initial_fix_max_age_ms == 10000

    with pytest.raises(ValidationError):
        TimingParams(watch_fix_max_age_ms=-1)


def test_style_params_validation():
    assert StyleParams().label_font == "12px system-ui"

    with pytest.raises(ValidationError):
        StyleParams(aligned_line_width=0)


def test_get_default_config():
    """Test default configuration generation."""
    config = get_default_config()

    assert config.canvas_size == 720
    assert config.line_max_length == 260
    assert config.audio_fade_ms == 150
    assert config.timing.position_timeout_ms == 10000
