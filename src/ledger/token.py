"""InMemoryToken — reference реализация claim/funding token.

Балансы и allowance хранятся в dict. Allowance, равный UINT256_MAX,
считается бесконечным и не уменьшается при transfer_from.

Не является production реализацией токена: нет событий, нет ролей
minter, mint/burn доступны любому вызывающему.
"""

import logging
from typing import Dict, Tuple

from src.controller.collaborators import ClaimToken, FundingToken
from src.core.math.fixed_point import UINT256_MAX, validate_uint

logger = logging.getLogger(__name__)


# =============================================================================
# ERRORS
# =============================================================================


class LedgerError(Exception):
    """Ошибка in-memory коллаборатора."""


class InsufficientBalanceError(LedgerError):
    def __init__(self, account: str, balance: int, required: int):
        super().__init__(f"{account} balance {balance} is below {required}")
        self.account = account
        self.balance = balance
        self.required = required


class InsufficientAllowanceError(LedgerError):
    def __init__(self, owner: str, spender: str, allowance: int, required: int):
        super().__init__(
            f"{spender} allowance from {owner} is {allowance}, required {required}"
        )
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.required = required


# =============================================================================
# TOKEN
# =============================================================================


TokenCheckpoint = Tuple[Dict[str, int], Dict[Tuple[str, str], int], int]


class InMemoryToken(ClaimToken, FundingToken):
    """ERC20-подобный токен в памяти."""

    def __init__(self, address: str, symbol: str = ""):
        self.address = address
        self.symbol = symbol or address
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0

    def __repr__(self) -> str:
        return f"InMemoryToken({self.address!r}, supply={self._total_supply})"

    # --- supply --------------------------------------------------------------

    def mint(self, account: str, amount: int) -> None:
        validate_uint(amount, "amount")
        self._balances[account] = self._balances.get(account, 0) + amount
        self._total_supply += amount
        logger.debug("%s mint %d to %s", self.symbol, amount, account)

    def burn(self, account: str, amount: int) -> None:
        validate_uint(amount, "amount")
        self._debit(account, amount)
        self._total_supply -= amount
        logger.debug("%s burn %d from %s", self.symbol, amount, account)

    def total_supply(self) -> int:
        return self._total_supply

    # --- transfers -----------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        validate_uint(amount, "amount")
        self._debit(sender, amount)
        self._balances[recipient] = self._balances.get(recipient, 0) + amount

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        validate_uint(amount, "amount")
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientAllowanceError(owner, spender, allowed, amount)

        self._debit(owner, amount)
        self._balances[recipient] = self._balances.get(recipient, 0) + amount
        if allowed != UINT256_MAX:
            self._allowances[(owner, spender)] = allowed - amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        validate_uint(amount, "amount")
        self._allowances[(owner, spender)] = amount

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def _debit(self, account: str, amount: int) -> None:
        balance = self._balances.get(account, 0)
        if balance < amount:
            raise InsufficientBalanceError(account, balance, amount)
        self._balances[account] = balance - amount

    # --- transactional -------------------------------------------------------

    def checkpoint(self) -> TokenCheckpoint:
        return dict(self._balances), dict(self._allowances), self._total_supply

    def rollback(self, token: TokenCheckpoint) -> None:
        balances, allowances, total_supply = token
        self._balances = dict(balances)
        self._allowances = dict(allowances)
        self._total_supply = total_supply
