"""
State layer for movie concept sessions.

Follows the same principles as the generation and storage capabilities:
- Abstract persistence backends
- Per-session isolation
- Value-semantics lock set
"""
from .backends import InMemoryBackend, JsonFileBackend, StateBackend
from .state_store import SessionStateStore, StateStoreManager
from . import lock_manager

__all__ = [
    "InMemoryBackend",
    "JsonFileBackend",
    "StateBackend",
    "SessionStateStore",
    "StateStoreManager",
    "lock_manager",
]
