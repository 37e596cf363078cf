"""Exceptions raised while turning an island skeleton into support points."""

from __future__ import annotations


class SupportIslandError(ValueError):
    """Base class for invalid island input or broken search invariants."""


class UnannotatedInputError(SupportIslandError):
    """A kept Voronoi edge touches a vertex with the ``UNKNOWN`` category."""


class MissingContourStartError(SupportIslandError):
    """The skeleton has no node on the island contour to start from."""


class DegenerateNeighborError(SupportIslandError):
    """An operation that needs a leaf node received a node of another degree."""


class EmptyLongestPathError(SupportIslandError):
    """The search produced a longest path without any node."""


__all__ = [
    "SupportIslandError",
    "UnannotatedInputError",
    "MissingContourStartError",
    "DegenerateNeighborError",
    "EmptyLongestPathError",
]
