"""Scene model: a named set of input segments."""

from dataclasses import dataclass, field
from typing import Any

from facetizer.domain.geometry import Segment


@dataclass
class Scene:
    """A named collection of segments polygonized as one unit.

    Attributes:
        name: Scene identifier, unique within a scene file
        segments: Input segments in a single coordinate space
    """

    name: str
    segments: list[Segment] = field(default_factory=list)

    @property
    def segment_count(self) -> int:
        """Number of segments in the scene."""
        return len(self.segments)

    def is_empty(self) -> bool:
        """Check if the scene has too few segments to enclose any region."""
        return len(self.segments) < 3

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with name and segment list
        """
        return {
            "name": self.name,
            "segments": [s.to_dict() for s in self.segments],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a scene

        Returns:
            Scene instance
        """
        return cls(
            name=data["name"],
            segments=[Segment.from_dict(s) for s in data["segments"]],
        )
