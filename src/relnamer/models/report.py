"""Technical report model.

Wraps the track list produced by the external media-analysis tool
(``mediainfo --Output=JSON``). Tracks stay as raw dicts because the analyzer's
field set varies between versions and containers; the normalizer reads the
fields it knows and ignores the rest.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from relnamer.utils.debug import warn

GENERAL = "General"
VIDEO = "Video"
AUDIO = "Audio"
TEXT = "Text"


class TechnicalReport(BaseModel):
    """Structured technical report: general/video/audio/subtitle tracks."""

    tracks: List[Dict[str, Any]] = Field(default_factory=list)
    """Raw track descriptors, each with an ``@type`` key."""

    @classmethod
    def from_mediainfo(cls, data: Any) -> "TechnicalReport":  # noqa: ANN401
        """Build a report from analyzer output.

        Accepts the analyzer's JSON document (``{"media": {"track": [...]}}``),
        a bare list of tracks, or an existing report. Text output cannot be
        interpreted and yields an empty report.
        """
        if isinstance(data, TechnicalReport):
            return data
        if isinstance(data, str):
            warn("Received text technical report instead of JSON; ignoring it", source=__name__)
            return cls()
        if isinstance(data, list):
            return cls(tracks=[t for t in data if isinstance(t, dict)])
        if isinstance(data, dict):
            media = data.get("media")
            if isinstance(media, dict):
                tracks = media.get("track") or []
            else:
                tracks = data.get("tracks") or data.get("track") or []
            if isinstance(tracks, dict):
                tracks = [tracks]
            return cls(tracks=[t for t in tracks if isinstance(t, dict)])
        return cls()

    def tracks_of(self, track_type: str) -> List[Dict[str, Any]]:
        """Return every track whose ``@type`` equals *track_type*."""
        return [t for t in self.tracks if t.get("@type") == track_type]

    def first_of(self, track_type: str) -> Dict[str, Any] | None:
        """Return the first track of *track_type*, or None."""
        matches = self.tracks_of(track_type)
        return matches[0] if matches else None
