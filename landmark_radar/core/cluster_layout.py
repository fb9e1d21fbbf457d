"""
Display-angle assignment for clustered landmarks.

A single-member cluster keeps its member's relative angle. Members of a
larger cluster are spread exactly ``spacing`` degrees apart, centered on
the cluster's center, in member order. Different clusters are laid out
independently and their spreads may overlap.
"""
from dataclasses import dataclass
from typing import List, Sequence

from landmark_radar.core.clustering import Cluster, RelativeAngle


@dataclass(frozen=True)
class DisplayAssignment:
    """Where a clustered member is drawn (degrees, 0 = forward, clockwise positive)."""
    member: RelativeAngle
    display_angle: float

    @property
    def landmark(self):
        return self.member.landmark


class ClusterLayout:
    """Spread cluster members around their cluster's center."""

    def __init__(self, spacing_deg: float = 3.0):
        if spacing_deg <= 0:
            raise ValueError("spacing_deg must be positive")
        self.spacing_deg = spacing_deg

    def assign(self, cluster: Cluster) -> List[DisplayAssignment]:
        """
        Compute display angles for one cluster.

        Example:
            >>> layout = ClusterLayout(spacing_deg=3.0)
            >>> [a.display_angle for a in layout.assign(cluster_at_20_with_3_members)]
            [17.0, 20.0, 23.0]
        """
        count = len(cluster.members)
        if count == 0:
            return []
        if count == 1:
            only = cluster.members[0]
            return [DisplayAssignment(member=only, display_angle=only.angle)]

        span = (count - 1) * self.spacing_deg
        base = cluster.center - span / 2
        return [
            DisplayAssignment(member=member, display_angle=base + i * self.spacing_deg)
            for i, member in enumerate(cluster.members)
        ]

    def assign_all(self, clusters: Sequence[Cluster]) -> List[List[DisplayAssignment]]:
        """Display assignments per cluster, preserving cluster order."""
        return [self.assign(cluster) for cluster in clusters]
