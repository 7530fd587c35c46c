"""Utility modules for relnamer."""

from relnamer.utils.config import resolve_setting, set_setting
from relnamer.utils.json import ReleaseEncoder, dumps

__all__ = [
    "resolve_setting",
    "set_setting",
    "ReleaseEncoder",
    "dumps",
]
