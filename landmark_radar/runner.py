"""
Command-line runner for the landmark radar engine.

Builds radar frames from a landmark catalog, either for a single
position/heading or for every tick of a recorded sensor track.

Usage:
    python -m landmark_radar.runner --catalog data/beffrois.json --lat 50.63 --lon 3.06 --heading 90

    # Replay a recorded track and export every segment as CSV
    python -m landmark_radar.runner --catalog data/beffrois.json --replay track.csv --output csv

    # Custom thresholds
    python -m landmark_radar.runner --catalog data/beffrois.json --config config/radar.yaml --lat 50.63 --lon 3.06 --heading 0
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from landmark_radar.core.frame_builder import Frame, FrameBuilder
from landmark_radar.data.loaders import get_catalog_summary, load_landmark_catalog
from landmark_radar.sensors.dispatcher import RadarDispatcher
from landmark_radar.sensors.replay import frames_to_dataframe, load_track, replay_track
from landmark_radar.utils.config import RadarConfig, get_default_config, load_config
from landmark_radar.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

OUTPUT_FORMATS = ['json', 'csv']


def frame_to_dict(frame: Frame) -> Dict[str, Any]:
    """JSON-ready representation of a frame."""
    aligned = None
    if frame.aligned is not None:
        aligned = {
            'titles': list(frame.aligned.titles),
            'nearest_distance_km': round(frame.aligned.nearest_distance_km, 3),
            'text': frame.aligned.title_text,
        }

    return {
        'timestamp_ms': frame.timestamp_ms,
        'heading': frame.heading,
        'has_alignment': frame.has_alignment,
        'aligned': aligned,
        'segments': [
            {
                'landmark_id': seg.landmark.id,
                'title': seg.landmark.title,
                'distance_km': round(seg.distance_km, 3),
                'display_angle': round(seg.display_angle, 3),
                'length': round(seg.length, 2),
                'end': [round(seg.end.x, 2), round(seg.end.y, 2)],
                'is_aligned': seg.is_aligned,
                'label': seg.label_text,
            }
            for seg in frame.segments
        ],
        'commands': [
            {k: (list(v) if isinstance(v, tuple) else v) for k, v in vars(cmd).items()}
            for cmd in frame.commands
        ],
    }


def run(
    catalog_path: Path,
    config: RadarConfig,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    heading: Optional[float] = None,
    replay_path: Optional[Path] = None,
) -> List[Frame]:
    """
    Load the catalog and build frames.

    Returns:
        A single frame for a fixed position/heading, or every frame rebuilt
        while replaying a track
    """
    result = load_landmark_catalog(catalog_path)
    for warning in result.warnings:
        logger.warning("catalog_warning", message=warning.message, record_index=warning.record_index)
    logger.info("catalog_summary", **get_catalog_summary(result.landmarks))

    builder = FrameBuilder.from_config(result.landmarks, config)

    if replay_path is not None:
        dispatcher = RadarDispatcher.from_config(builder, config)
        return replay_track(dispatcher, load_track(replay_path))

    if latitude is None or longitude is None or heading is None:
        raise ValueError("--lat, --lon and --heading are required without --replay")

    return [builder.build(latitude, longitude, heading, timestamp_ms=0.0)]


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description='Landmark Radar - frame builder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One frame for a fixed position and heading
  landmark-radar --catalog data/beffrois.json --lat 50.63 --lon 3.06 --heading 90

  # Replay a sensor track, CSV output
  landmark-radar --catalog data/beffrois.json --replay track.csv --output csv
        """
    )

    parser.add_argument('--catalog', type=Path, required=True, help='Landmark catalog JSON file')
    parser.add_argument('--config', type=Path, default=None, help='YAML config file (default: built-in defaults)')
    parser.add_argument('--lat', type=float, default=None, help='User latitude (decimal degrees)')
    parser.add_argument('--lon', type=float, default=None, help='User longitude (decimal degrees)')
    parser.add_argument('--heading', type=float, default=None, help='User heading (degrees, 0 = north)')
    parser.add_argument('--replay', type=Path, default=None, help='Sensor track CSV to replay')
    parser.add_argument(
        '--output',
        choices=OUTPUT_FORMATS,
        default='json',
        help=f'Output format (default: json). Choices: {OUTPUT_FORMATS}'
    )
    parser.add_argument('--log-level', default='WARNING', help='Logging level (default: WARNING)')
    parser.add_argument('--json-logs', action='store_true', help='Emit JSON logs')

    args = parser.parse_args()

    configure_logging(log_level=args.log_level, json_output=args.json_logs)

    try:
        config = load_config(args.config) if args.config else get_default_config()
        frames = run(
            catalog_path=args.catalog,
            config=config,
            latitude=args.lat,
            longitude=args.lon,
            heading=args.heading,
            replay_path=args.replay,
        )
    except Exception as e:
        logger.error("Execution failed", error=str(e), exc_info=True)
        return 1

    if args.output == 'csv':
        frames_to_dataframe(frames).to_csv(sys.stdout, index=False)
    else:
        json.dump([frame_to_dict(f) for f in frames], sys.stdout, indent=2)
        sys.stdout.write("\n")

    return 0


if __name__ == '__main__':
    sys.exit(main())
