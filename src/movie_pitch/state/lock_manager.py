"""
Lock manager.

Pure functions over a locked-field set. Sets are never mutated in place;
every operation returns a new frozenset.
"""
from typing import FrozenSet, Iterable

from ..models import MovieField


LockedFields = FrozenSet[MovieField]


def lock(locked: Iterable[MovieField], movie_field: MovieField) -> LockedFields:
    """Return a lock set that contains ``movie_field``. Idempotent."""
    return frozenset(locked) | {movie_field}


def unlock(locked: Iterable[MovieField], movie_field: MovieField) -> LockedFields:
    """Return a lock set without ``movie_field``. Idempotent."""
    return frozenset(locked) - {movie_field}


def is_locked(locked: Iterable[MovieField], movie_field: MovieField) -> bool:
    return movie_field in frozenset(locked)
