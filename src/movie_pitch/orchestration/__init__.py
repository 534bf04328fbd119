"""
Orchestration services for the regeneration pipeline.

Deterministic application logic (ordering, locking, failure isolation)
lives here, not in prompts.
"""

from .regeneration_orchestrator import FANOUT_FIELDS, RegenerationOrchestrator

__all__ = ["FANOUT_FIELDS", "RegenerationOrchestrator"]
