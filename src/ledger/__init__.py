"""Ledger — reference in-memory коллабораторы контроллера.

- InMemoryToken: claim/funding token
- InMemoryVault: vault без доходности
- ManualPauser: ручной флаг паузы
"""

from .token import (
    InMemoryToken,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    LedgerError,
)
from .vault import InMemoryVault, ManualPauser

__all__ = [
    "InMemoryToken",
    "InMemoryVault",
    "ManualPauser",
    "LedgerError",
    "InsufficientBalanceError",
    "InsufficientAllowanceError",
]
