"""Naming policy for the release-name composer.

This module defines the configuration dataclass grouping every option that
affects naming without being part of a release's attributes.
- NamingPolicy: default release group and the French-region heuristic used to
  pick VFF or VFQ when audio is only tagged as generic French.
- load_policy: builds a NamingPolicy from CLI values, ``RELNAMER_NAMING_*``
  environment variables and the ``[naming]`` table of config.toml.

Design:
- The region heuristic keys off free-text markers with no authoritative
  source, so the marker lists are policy, not code.
- The composer accepts a policy argument; callers that pass none get the
  defaults below.
"""

from dataclasses import dataclass, field
from typing import Optional

from relnamer.models.core import NO_TAG
from relnamer.utils.config import resolve_setting

DEFAULT_QUEBEC_MARKERS = [
    "VFQ",
    "QUÉBEC",
    "QUEBEC",
    "CANADIAN",
    "CANADA",
    "QUEBECOIS",
    "QUÉBÉCOIS",
]
DEFAULT_FRANCE_MARKERS = ["VFF", "FRENCH", "FRANCE", "EUROPEAN"]


# Reason: NamingPolicy groups all options that may affect naming, making it
# easy to pass config between CLI and composer.
@dataclass
class NamingPolicy:
    """Configuration for the name composer."""

    default_group: str = NO_TAG
    quebec_markers: list[str] = field(
        default_factory=lambda: list(DEFAULT_QUEBEC_MARKERS)
    )
    france_markers: list[str] = field(
        default_factory=lambda: list(DEFAULT_FRANCE_MARKERS)
    )
    default_french_variant: str = "VFF"

    def french_variant(self, text: str) -> str:
        """Return VFQ or VFF for the upper-cased marker *text*."""
        haystack = text.upper()
        if any(marker.upper() in haystack for marker in self.quebec_markers):
            return "VFQ"
        if any(marker.upper() in haystack for marker in self.france_markers):
            return "VFF"
        return self.default_french_variant.upper()


def load_policy(default_group: Optional[str] = None) -> NamingPolicy:
    """Resolve a NamingPolicy from CLI value > env > config file > defaults."""
    return NamingPolicy(
        default_group=resolve_setting(
            "naming.default_group", default=NO_TAG, cli_value=default_group
        ),
        quebec_markers=resolve_setting(
            "naming.quebec_markers", default=list(DEFAULT_QUEBEC_MARKERS)
        ),
        france_markers=resolve_setting(
            "naming.france_markers", default=list(DEFAULT_FRANCE_MARKERS)
        ),
        default_french_variant=resolve_setting(
            "naming.default_french_variant", default="VFF"
        ),
    )
