"""Collaborators — capability-интерфейсы внешних участников контроллера.

Контроллер не знает реализаций: claim token, funding token, vault и pauser
передаются ему снаружи. Reference in-memory реализации лежат в src/ledger.

Адреса — непрозрачные строки. В Python нет msg.sender, поэтому
инициатор перевода передаётся явным аргументом (spender, depositor, owner).

Transactional — структурный интерфейс: любой объект с checkpoint/rollback
участвует в атомарном откате, наследование не требуется.
"""

from abc import ABC, abstractmethod
from typing import Any


# =============================================================================
# TRANSACTIONAL
# =============================================================================


class Transactional(ABC):
    """Участник атомарной операции контроллера."""

    @abstractmethod
    def checkpoint(self) -> Any:
        """Непрозрачный токен состояния для последующего rollback."""

    @abstractmethod
    def rollback(self, token: Any) -> None:
        """Восстановление состояния, сохранённого checkpoint."""

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is Transactional:
            if all(
                callable(getattr(subclass, method, None))
                for method in ("checkpoint", "rollback")
            ):
                return True
        return NotImplemented


# =============================================================================
# TOKENS
# =============================================================================


class ClaimToken(ABC):
    """Mintable claim token, выпускаемый кривой."""

    address: str

    @abstractmethod
    def mint(self, account: str, amount: int) -> None:
        ...

    @abstractmethod
    def burn(self, account: str, amount: int) -> None:
        ...

    @abstractmethod
    def balance_of(self, account: str) -> int:
        ...

    @abstractmethod
    def total_supply(self) -> int:
        ...


class FundingToken(ABC):
    """Funding token, который вносят пользователи."""

    address: str

    @abstractmethod
    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        ...

    @abstractmethod
    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        """Перевод amount от owner к recipient в пределах allowance spender."""

    @abstractmethod
    def approve(self, owner: str, spender: str, amount: int) -> None:
        ...

    @abstractmethod
    def allowance(self, owner: str, spender: str) -> int:
        ...

    @abstractmethod
    def balance_of(self, account: str) -> int:
        ...


# =============================================================================
# VAULT / PAUSER
# =============================================================================


class Vault(ABC):
    """Yield vault, хранящий депозиты funding token.

    Внутренний учёт доходности vault контроллер не моделирует.
    """

    address: str

    @abstractmethod
    def deposit(self, token: FundingToken, amount: int, recipient: str, depositor: str) -> None:
        """Забрать amount у depositor (через allowance) и зачислить recipient."""

    @abstractmethod
    def withdraw(self, token: FundingToken, amount: int, recipient: str, owner: str) -> None:
        """Списать amount с позиции owner и перевести recipient."""

    @abstractmethod
    def balance_of(self, token: FundingToken, account: str) -> int:
        ...


class Pauser(ABC):
    """Внешний механизм паузы. Логика срабатывания вне контроллера."""

    @property
    @abstractmethod
    def paused(self) -> bool:
        ...
