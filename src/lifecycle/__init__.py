"""Lifecycle — модули управления жизненным циклом bonding curve.

- State machine GOALS_NOT_SET → ACTIVE ⇄ LOCKED
- История переходов для диагностики
"""

from .state_machine import (
    LifecycleAction,
    LifecycleStateMachine,
    LifecycleTransitionResult,
)

__all__ = [
    "LifecycleAction",
    "LifecycleStateMachine",
    "LifecycleTransitionResult",
]
