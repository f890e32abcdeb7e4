"""
Tag-based selection of tracks.

Tracks carry the tab-joined tags of their points. Upstream colocalization
analysis marks points with "Prox" (proximity) and "Coloc" (colocalization);
the filters below select tracks on the presence of these markers anywhere
in the tag. Matching is a case-sensitive substring search, so "Proximal"
also counts as "Prox".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Union

PROX_MARKER = "Prox"
COLOC_MARKER = "Coloc"


class InvalidFilterKeywordError(ValueError):
    """Raised when a filter keyword is not one of the TrackFilter values."""


class TrackFilter(str, Enum):
    ALL = "All"
    NON_PROX_COLOC = "NonProxColoc"
    PROX = "Prox"
    COLOC = "Coloc"
    PROX_ONLY = "ProxOnly"
    COLOC_ONLY = "ColocOnly"

    @classmethod
    def parse(cls, keyword: Union[str, "TrackFilter"]) -> "TrackFilter":
        """
        Convert a keyword to a TrackFilter.

        Raises:
            InvalidFilterKeywordError: If the keyword is not recognised
        """
        if isinstance(keyword, cls):
            return keyword
        try:
            return cls(keyword)
        except ValueError:
            valid = ", ".join(f.value for f in cls)
            raise InvalidFilterKeywordError(
                f"Unknown track filter {keyword!r}. Use one of: {valid}"
            ) from None


@dataclass(frozen=True)
class TrackMarkers:
    """Structured view of the markers found in a track tag."""

    prox: bool = False
    coloc: bool = False

    @classmethod
    def from_tag(cls, tag: str) -> "TrackMarkers":
        return cls(prox=PROX_MARKER in tag, coloc=COLOC_MARKER in tag)

    def passes(self, keyword: Union[str, TrackFilter]) -> bool:
        """Decide whether a track with these markers is kept by ``keyword``."""
        track_filter = TrackFilter.parse(keyword)

        if track_filter is TrackFilter.ALL:
            return True
        if track_filter is TrackFilter.NON_PROX_COLOC:
            return not (self.prox or self.coloc)
        if track_filter is TrackFilter.PROX:
            return self.prox
        if track_filter is TrackFilter.COLOC:
            return self.coloc
        if track_filter is TrackFilter.PROX_ONLY:
            return self.prox and not self.coloc
        # COLOC_ONLY
        return self.coloc and not self.prox


def track_passes_filter(tag: str, keyword: Union[str, TrackFilter]) -> bool:
    """
    Check a track tag against a filter keyword.

    Args:
        tag: Track tag, as built by Track.add_point
        keyword: One of "All", "NonProxColoc", "Prox", "Coloc", "ProxOnly", "ColocOnly"

    Returns:
        True if the track should be included

    Raises:
        InvalidFilterKeywordError: If the keyword is not recognised
    """
    return TrackMarkers.from_tag(tag).passes(keyword)


def filter_tracks(tracks: Iterable, keyword: Union[str, TrackFilter]) -> List:
    """Keep the tracks whose tag passes ``keyword``, preserving order."""
    track_filter = TrackFilter.parse(keyword)
    return [t for t in tracks if track_passes_filter(t.tag, track_filter)]
