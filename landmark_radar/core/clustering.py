"""
Circular clustering of heading-relative angles.

Groups landmarks whose relative angles are close enough to be merged on
the radar. The algorithm is a single greedy pass over the angles sorted
ascending:

  1) Each item is tested against the existing clusters in creation order
  2) It joins a cluster whose *current* center lies within the spacing
     threshold (which one is decided by the JoinPolicy)
  3) The joined cluster's center is immediately recomputed as the
     circular mean of all of its members
  4) Items matching no cluster start a new one centered on themselves

Grouping is order-dependent and not globally optimal. Because centers move
as members join, a finished cluster may hold members that are further than
the threshold from its final center.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from landmark_radar.core.geometry import circular_mean, normalize_angle_diff
from landmark_radar.data.schemas import Landmark
from landmark_radar.utils.logging_config import get_logger

logger = get_logger(__name__)

# Slack on the join threshold so trigonometric rounding upstream does not
# split angles that sit exactly on the spacing boundary
ANGLE_EPSILON = 1e-9


class JoinPolicy(str, Enum):
    """Which matching cluster an item joins."""
    FIRST_MATCH = "first_match"        # First cluster in creation order
    CLOSEST_CENTER = "closest_center"  # Matching cluster with the nearest center


@dataclass(frozen=True)
class RelativeAngle:
    """A landmark's direction relative to the current heading."""
    landmark: Landmark
    angle: float          # (-180, 180], 0 = straight ahead
    distance_km: float


@dataclass
class Cluster:
    """A circular center angle and the members that joined it, in join order."""
    center: float
    members: List[RelativeAngle] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    def distance_to(self, angle: float) -> float:
        """Circular distance from an angle to the current center (degrees)."""
        return abs(normalize_angle_diff(angle - self.center))

    def add(self, item: RelativeAngle) -> None:
        """Append a member and recenter on the circular mean of all members."""
        self.members.append(item)
        self.center = normalize_angle_diff(circular_mean(m.angle for m in self.members))

    @classmethod
    def seed(cls, item: RelativeAngle) -> 'Cluster':
        return cls(center=normalize_angle_diff(item.angle), members=[item])


class CircularClusterer:
    """
    Greedy single-pass clusterer for heading-relative angles.

    Args:
        spacing_deg: Join threshold (degrees); also the spread spacing used
            later by the layout
        join_policy: Which matching cluster an item joins

    Example:
        >>> clusterer = CircularClusterer(spacing_deg=3.0)
        >>> clusters = clusterer.cluster(relative_angles)
        >>> [c.size for c in clusters]
        [3, 1]
    """

    def __init__(self, spacing_deg: float = 3.0, join_policy: JoinPolicy = JoinPolicy.FIRST_MATCH):
        if spacing_deg <= 0:
            raise ValueError("spacing_deg must be positive")
        self.spacing_deg = spacing_deg
        self.join_policy = JoinPolicy(join_policy)

    def cluster(self, relative_angles: Sequence[RelativeAngle]) -> List[Cluster]:
        """
        Group relative angles into clusters.

        Args:
            relative_angles: Items to group, in any order

        Returns:
            Clusters in creation order
        """
        clusters: List[Cluster] = []

        for item in sorted(relative_angles, key=lambda r: r.angle):
            target = self._find_cluster(clusters, item.angle)
            if target is None:
                clusters.append(Cluster.seed(item))
            else:
                target.add(item)

        logger.debug(
            "angles_clustered",
            items=len(relative_angles),
            clusters=len(clusters),
            policy=self.join_policy.value,
        )
        return clusters

    def _find_cluster(self, clusters: List[Cluster], angle: float) -> Optional[Cluster]:
        if self.join_policy is JoinPolicy.FIRST_MATCH:
            for cluster in clusters:
                if cluster.distance_to(angle) <= self.spacing_deg + ANGLE_EPSILON:
                    return cluster
            return None

        best = None
        best_distance = None
        for cluster in clusters:
            d = cluster.distance_to(angle)
            if d <= self.spacing_deg + ANGLE_EPSILON and (best_distance is None or d < best_distance):
                best, best_distance = cluster, d
        return best


def cluster_relative_angles(
    relative_angles: Sequence[RelativeAngle],
    spacing_deg: float = 3.0,
    join_policy: JoinPolicy = JoinPolicy.FIRST_MATCH,
) -> List[Cluster]:
    """Convenience wrapper around CircularClusterer.cluster."""
    return CircularClusterer(spacing_deg, join_policy).cluster(relative_angles)
