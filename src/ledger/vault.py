"""InMemoryVault / ManualPauser — reference коллабораторы.

InMemoryVault учитывает позиции 1:1 по (token, account), без доходности.
ManualPauser — флаг паузы, переключаемый вручную (тесты, скрипты).
"""

import logging
from typing import Dict, Tuple

from src.controller.collaborators import FundingToken, Pauser, Vault
from src.core.math.fixed_point import validate_uint
from src.ledger.token import InsufficientBalanceError

logger = logging.getLogger(__name__)


class InMemoryVault(Vault):
    """Vault без доходности: позиция == сумма депозитов минус выводы."""

    def __init__(self, address: str = "vault"):
        self.address = address
        self._positions: Dict[Tuple[str, str], int] = {}

    def deposit(self, token: FundingToken, amount: int, recipient: str, depositor: str) -> None:
        validate_uint(amount, "amount")
        token.transfer_from(self.address, depositor, self.address, amount)
        key = (token.address, recipient)
        self._positions[key] = self._positions.get(key, 0) + amount
        logger.debug("vault deposit %d %s for %s", amount, token.address, recipient)

    def withdraw(self, token: FundingToken, amount: int, recipient: str, owner: str) -> None:
        validate_uint(amount, "amount")
        key = (token.address, owner)
        position = self._positions.get(key, 0)
        if position < amount:
            raise InsufficientBalanceError(owner, position, amount)

        self._positions[key] = position - amount
        token.transfer(self.address, recipient, amount)
        logger.debug("vault withdraw %d %s from %s to %s", amount, token.address, owner, recipient)

    def balance_of(self, token: FundingToken, account: str) -> int:
        return self._positions.get((token.address, account), 0)

    def checkpoint(self) -> Dict[Tuple[str, str], int]:
        return dict(self._positions)

    def rollback(self, token: Dict[Tuple[str, str], int]) -> None:
        self._positions = dict(token)


class ManualPauser(Pauser):
    """Pauser с ручным переключением."""

    def __init__(self, paused: bool = False):
        self._paused = paused

    @property
    def paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        self._paused = True
        logger.info("paused")

    def unpause(self) -> None:
        self._paused = False
        logger.info("unpaused")
