"""
Bots module - Move selection.

Provides:
- MovePolicy: Interface for per-turn decisions
- RandomPolicy: Uniform random moves (reference behaviour)
- CautiousPolicy: Random among moves that avoid known bodies
- FixedPolicy: Always the same move
"""

from .policy import (
    Action,
    CautiousPolicy,
    FixedPolicy,
    MoveDecision,
    MovePolicy,
    POLICIES,
    RandomPolicy,
    get_policy,
)
from .shouts import SHOUTS

__all__ = [
    "Action",
    "CautiousPolicy",
    "FixedPolicy",
    "MoveDecision",
    "MovePolicy",
    "POLICIES",
    "RandomPolicy",
    "SHOUTS",
    "get_policy",
]
