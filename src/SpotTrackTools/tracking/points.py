import numpy as np
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .tag_filter import TrackMarkers, filter_tracks

TAG_SEPARATOR = "\t"


@dataclass(frozen=True)
class Point:
    """A single detection in one frame.

    Attributes:
        x (float): x coordinate, in pixels
        y (float): y coordinate, in pixels
        tag (str): free-form provenance label (e.g. "Prox", "Coloc")
        frame (int, optional): frame index the point was detected in
    """

    x: float
    y: float
    tag: str = ""
    frame: Optional[int] = None

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return float(np.hypot(self.x - other.x, self.y - other.y))


class PointSerie:
    """
    Ordered, mutable collection of points belonging to one frame.

    The same container is reused by Track to hold a trajectory. Points are
    immutable, so copies share the points but never the underlying list.

    Args:
        points: Initial points, in order
        name: Display name of the serie
        tag: Aggregate tag. Derived from the points' tags when omitted.
    """

    def __init__(
        self,
        points: Optional[Iterable[Point]] = None,
        name: str = "",
        tag: Optional[str] = None,
    ):
        self._points: List[Point] = list(points) if points is not None else []
        self.name = name
        if tag is None:
            tag = TAG_SEPARATOR.join(p.tag for p in self._points)
        self.tag = tag

    def count(self) -> int:
        """Number of points currently held."""
        return len(self._points)

    def at(self, index: int) -> Point:
        """
        Return the point at ``index``.

        Raises:
            IndexError: If index is outside [0, count())
        """
        self._check_index(index)
        return self._points[index]

    def append(self, point: Point) -> None:
        self._points.append(point)

    def remove_at(self, index: int) -> Point:
        """
        Remove and return the point at ``index``; later points shift down by one.

        Raises:
            IndexError: If index is outside [0, count())
        """
        self._check_index(index)
        return self._points.pop(index)

    def copy(self) -> "PointSerie":
        """Independent copy: same points, new container."""
        return self.__class__(self._points, name=self.name, tag=self.tag)

    def coordinates(self) -> np.ndarray:
        """Return the point coordinates as an (N, 2) float array of (x, y)."""
        if not self._points:
            return np.empty((0, 2), dtype=float)
        return np.array([(p.x, p.y) for p in self._points], dtype=float)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._points):
            raise IndexError(
                f"Point index {index} out of range for serie of {len(self._points)} points"
            )

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> Point:
        return self.at(index)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSerie):
            return NotImplemented
        return (
            self._points == other._points
            and self.name == other.name
            and self.tag == other.tag
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, n_points={len(self)})"


class Track(PointSerie):
    """
    A trajectory: one point per frame the object was seen in, in frame order.

    The tag is the tab-joined tags of the points, in the order they were added.
    """

    def __init__(self, seed: Optional[Point] = None, name: str = ""):
        points = [seed] if seed is not None else []
        super().__init__(points, name=name, tag=seed.tag if seed is not None else "")

    def add_point(self, point: Point) -> None:
        """Append a linked point and extend the track tag with its tag."""
        self.append(point)
        self.tag = self.tag + TAG_SEPARATOR + point.tag

    def copy(self) -> "Track":
        new_track = Track(name=self.name)
        new_track._points = list(self._points)
        new_track.tag = self.tag
        return new_track

    @property
    def length(self) -> int:
        return len(self)

    @property
    def markers(self) -> TrackMarkers:
        return TrackMarkers.from_tag(self.tag)

    def frames(self) -> List[Optional[int]]:
        return [p.frame for p in self]

    def to_polyline(self) -> np.ndarray:
        """Ordered (N, 2) vertex array, suitable for drawing the track as a polyline."""
        return self.coordinates()


class TrackSet:
    """Ordered collection of kept tracks, in discovery order."""

    def __init__(self, tracks: Optional[Iterable[Track]] = None):
        self._tracks: List[Track] = list(tracks) if tracks is not None else []

    def add(self, track: Track) -> None:
        """Name the track after its position in the set and store it."""
        track.name = f"Track_{len(self._tracks) + 1}"
        self._tracks.append(track)

    def names(self) -> List[str]:
        return [t.name for t in self._tracks]

    def filter(self, keyword: str) -> List[Track]:
        """Tracks whose tag passes the given filter keyword (see tag_filter)."""
        return filter_tracks(self._tracks, keyword)

    def __len__(self) -> int:
        return len(self._tracks)

    def __getitem__(self, index: int) -> Track:
        return self._tracks[index]

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __repr__(self) -> str:
        return f"TrackSet(n_tracks={len(self)})"
