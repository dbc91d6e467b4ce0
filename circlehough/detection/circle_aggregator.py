"""Cross-radius merging of circle candidates."""

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple


@dataclass
class CircleCandidate:
    """A detected circle: center (x, y), radius r and vote value v."""
    x: int
    y: int
    r: int
    v: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.x, self.y, self.r

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "r": self.r, "v": self.v}


class CircleAggregator:
    """
    Owns the circle list and folds new candidates into it.

    A candidate matches an existing entry when the entry's radius is the
    candidate's radius or up to ``radius_tolerance`` below it, and both center
    coordinates are within ``center_tolerance`` pixels. Radii are scanned in
    ascending order, so a circle is usually seen first at r - 1 and then again,
    stronger, at r.
    """

    def __init__(self, center_tolerance: int = 4, radius_tolerance: int = 1):
        self.center_tolerance = center_tolerance
        self.radius_tolerance = radius_tolerance
        self.circles: List[CircleCandidate] = []

    def matches(self, existing: CircleCandidate, candidate: CircleCandidate) -> bool:
        """Whether two candidates describe the same physical circle."""
        return (candidate.r - self.radius_tolerance <= existing.r <= candidate.r
                and abs(existing.x - candidate.x) <= self.center_tolerance
                and abs(existing.y - candidate.y) <= self.center_tolerance)

    def merge(self, candidate: CircleCandidate) -> CircleCandidate:
        """
        Add a candidate or update its duplicate in place.

        The first matching entry in list order is the duplicate. It takes the
        candidate's fields when the candidate has at least as many votes;
        otherwise it is left as is.

        Returns:
            The list entry now representing the candidate's circle
        """
        for entry in self.circles:
            if self.matches(entry, candidate):
                if entry.v <= candidate.v:
                    entry.x, entry.y, entry.r, entry.v = candidate.x, candidate.y, candidate.r, candidate.v
                return entry

        entry = replace(candidate)
        self.circles.append(entry)
        return entry

    def clear(self):
        """Drop all collected circles."""
        self.circles = []

    def __len__(self) -> int:
        return len(self.circles)
