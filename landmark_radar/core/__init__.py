"""
Core layout engine for the landmark radar.

Contains spherical geometry, circular clustering, cluster layout, radar
projection, alignment detection and frame assembly.
"""
from landmark_radar.core.geometry import (
    haversine_distance,
    calculate_bearing,
    get_distance_and_bearing,
    normalize_angle_diff,
    bearing_difference,
    circular_mean,
    EARTH_RADIUS_KM,
)
from landmark_radar.core.clustering import (
    CircularClusterer,
    Cluster,
    JoinPolicy,
    RelativeAngle,
)
from landmark_radar.core.cluster_layout import ClusterLayout, DisplayAssignment
from landmark_radar.core.projector import LayoutBounds, Point, ProjectedSegment, RadarProjector
from landmark_radar.core.alignment import AlignedGroup, AlignmentDetector, AlignmentPolicy
from landmark_radar.core.frame_builder import DrawStyle, Frame, FrameBuilder, Observation

__all__ = [
    # Geometry
    'haversine_distance',
    'calculate_bearing',
    'get_distance_and_bearing',
    'normalize_angle_diff',
    'bearing_difference',
    'circular_mean',
    'EARTH_RADIUS_KM',
    # Clustering and layout
    'CircularClusterer',
    'Cluster',
    'JoinPolicy',
    'RelativeAngle',
    'ClusterLayout',
    'DisplayAssignment',
    # Projection
    'LayoutBounds',
    'Point',
    'ProjectedSegment',
    'RadarProjector',
    # Alignment and frames
    'AlignedGroup',
    'AlignmentDetector',
    'AlignmentPolicy',
    'DrawStyle',
    'Frame',
    'FrameBuilder',
    'Observation',
]
