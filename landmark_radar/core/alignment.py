"""
Alignment detection: which landmark group the user is currently facing.

A segment is aligned when its display angle lies within the tolerance band
around straight ahead, boundary included. An aligned *group* is the whole
cluster that contains at least one aligned segment.

When several groups are aligned in the same tick, the AlignmentPolicy
decides what is surfaced:

  LAST     the last aligned group in cluster/member iteration order
  NEAREST  the group whose nearest member is closest to the user
  MERGE    every aligned group merged into a single selection
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from landmark_radar.core.geometry import normalize_angle_diff
from landmark_radar.core.projector import ProjectedSegment, format_distance
from landmark_radar.data.schemas import Landmark


class AlignmentPolicy(str, Enum):
    """How competing aligned groups in one tick are resolved."""
    LAST = "last"
    NEAREST = "nearest"
    MERGE = "merge"


@dataclass(frozen=True)
class AlignedGroup:
    """The currently aligned selection shown next to the radar."""
    members: Tuple[Landmark, ...]
    nearest_distance_km: float

    @property
    def titles(self) -> Tuple[str, ...]:
        return tuple(m.title for m in self.members)

    @property
    def primary(self) -> Landmark:
        """Member whose audio the play control starts."""
        return self.members[0]

    @property
    def title_text(self) -> str:
        return " / ".join(self.titles) + " at " + format_distance(self.nearest_distance_km)

    @classmethod
    def from_segments(cls, segments: Sequence[ProjectedSegment]) -> 'AlignedGroup':
        return cls(
            members=tuple(s.landmark for s in segments),
            nearest_distance_km=min(s.distance_km for s in segments),
        )


class AlignmentDetector:
    """
    Hit-test segments against the forward tolerance band.

    Args:
        tolerance_deg: Half-width of the band (degrees, inclusive)
        policy: Resolution of multiple aligned groups
    """

    def __init__(self, tolerance_deg: float = 5.0, policy: AlignmentPolicy = AlignmentPolicy.LAST):
        if tolerance_deg < 0:
            raise ValueError("tolerance_deg must be non-negative")
        self.tolerance_deg = tolerance_deg
        self.policy = AlignmentPolicy(policy)

    def is_aligned(self, display_angle: float) -> bool:
        return abs(normalize_angle_diff(display_angle)) <= self.tolerance_deg

    def select(self, groups: Sequence[Sequence[ProjectedSegment]]) -> Optional[AlignedGroup]:
        """
        Pick the aligned selection from per-cluster segments.

        Args:
            groups: Segments grouped by cluster, in iteration order

        Returns:
            The selection, or None when nothing is aligned
        """
        candidates: List[AlignedGroup] = [
            AlignedGroup.from_segments(segments)
            for segments in groups
            if any(s.is_aligned for s in segments)
        ]
        if not candidates:
            return None

        if self.policy is AlignmentPolicy.LAST:
            return candidates[-1]
        if self.policy is AlignmentPolicy.NEAREST:
            return min(candidates, key=lambda g: g.nearest_distance_km)

        members = tuple(m for g in candidates for m in g.members)
        return AlignedGroup(
            members=members,
            nearest_distance_km=min(g.nearest_distance_km for g in candidates),
        )
