"""
Unit tests для reference коллабораторов (src/ledger)

Coverage:
- InMemoryToken: mint/burn/transfer/transfer_from/allowance
- InMemoryVault: deposit/withdraw через allowance
- ManualPauser
- checkpoint/rollback и структурный Transactional
"""

import pytest

from src.controller.collaborators import Transactional
from src.core.errors import InvalidAmountError
from src.core.math.fixed_point import UINT256_MAX
from src.ledger import (
    InMemoryToken,
    InMemoryVault,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    ManualPauser,
)


@pytest.fixture
def token():
    token = InMemoryToken("usdc")
    token.mint("alice", 1000)
    return token


@pytest.fixture
def vault():
    return InMemoryVault("vault")


class TestInMemoryToken:
    def test_mint_and_burn(self, token):
        assert token.balance_of("alice") == 1000
        assert token.total_supply() == 1000
        token.burn("alice", 400)
        assert token.balance_of("alice") == 600
        assert token.total_supply() == 600

    def test_burn_more_than_balance(self, token):
        with pytest.raises(InsufficientBalanceError) as exc_info:
            token.burn("alice", 1001)
        assert exc_info.value.balance == 1000

    def test_transfer(self, token):
        token.transfer("alice", "bob", 300)
        assert token.balance_of("alice") == 700
        assert token.balance_of("bob") == 300
        assert token.total_supply() == 1000

    def test_transfer_from_consumes_allowance(self, token):
        token.approve("alice", "curve", 500)
        token.transfer_from("curve", "alice", "curve", 200)
        assert token.allowance("alice", "curve") == 300
        assert token.balance_of("curve") == 200

    def test_transfer_from_without_allowance(self, token):
        with pytest.raises(InsufficientAllowanceError):
            token.transfer_from("curve", "alice", "curve", 1)

    def test_unlimited_allowance_not_decremented(self, token):
        token.approve("alice", "curve", UINT256_MAX)
        token.transfer_from("curve", "alice", "curve", 1000)
        assert token.allowance("alice", "curve") == UINT256_MAX

    def test_negative_amount_rejected(self, token):
        with pytest.raises(InvalidAmountError):
            token.transfer("alice", "bob", -1)

    def test_checkpoint_rollback(self, token):
        checkpoint = token.checkpoint()
        token.mint("bob", 5)
        token.approve("alice", "bob", 7)
        token.rollback(checkpoint)
        assert token.balance_of("bob") == 0
        assert token.allowance("alice", "bob") == 0
        assert token.total_supply() == 1000


class TestInMemoryVault:
    def test_deposit_requires_allowance(self, token, vault):
        with pytest.raises(InsufficientAllowanceError):
            vault.deposit(token, 100, "alice", "alice")

    def test_deposit_and_withdraw(self, token, vault):
        token.approve("alice", vault.address, 1000)
        vault.deposit(token, 600, "alice", "alice")
        assert vault.balance_of(token, "alice") == 600
        assert token.balance_of(vault.address) == 600

        vault.withdraw(token, 250, "bob", "alice")
        assert vault.balance_of(token, "alice") == 350
        assert token.balance_of("bob") == 250

    def test_withdraw_beyond_position(self, token, vault):
        with pytest.raises(InsufficientBalanceError):
            vault.withdraw(token, 1, "alice", "alice")

    def test_zero_withdraw_allowed(self, token, vault):
        vault.withdraw(token, 0, "alice", "alice")
        assert token.balance_of("alice") == 1000

    def test_checkpoint_rollback(self, token, vault):
        token.approve("alice", vault.address, 1000)
        checkpoint = vault.checkpoint()
        vault.deposit(token, 100, "alice", "alice")
        vault.rollback(checkpoint)
        assert vault.balance_of(token, "alice") == 0


class TestManualPauser:
    def test_toggle(self):
        pauser = ManualPauser()
        assert not pauser.paused
        pauser.pause()
        assert pauser.paused
        pauser.unpause()
        assert not pauser.paused


def test_transactional_is_structural(token, vault):
    assert isinstance(token, Transactional)
    assert isinstance(vault, Transactional)
    assert not isinstance(ManualPauser(), Transactional)
