"""Naming policy and fixed vocabularies."""

from relnamer.rules.base import NamingPolicy, load_policy

__all__ = ["NamingPolicy", "load_policy"]
