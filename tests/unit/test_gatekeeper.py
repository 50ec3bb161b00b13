"""
Unit тесты для цепочки гейтов (GATE 0..3) и Gatekeeper.

Coverage:
- Каждый gate по отдельности (PASS / BLOCK)
- Порядок цепочки: первая блокировка выигрывает
- enforce: block_reason → типизированная ошибка
"""

import pytest

from src.core.domain.lifecycle import CurveState
from src.core.errors import (
    GoalsNotSetError,
    LockedError,
    PausedError,
    VaultNotApprovedError,
    ZeroAmountError,
)
from src.gatekeeper import (
    Gate00Lifecycle,
    Gate01Pause,
    Gate02VaultApproval,
    Gate03AmountValidation,
    Gatekeeper,
)


@pytest.fixture
def gatekeeper():
    """Fixture для Gatekeeper."""
    return Gatekeeper()


def _open(**overrides):
    """Параметры, при которых все гейты проходят."""
    params = dict(
        curve_state=CurveState.ACTIVE,
        paused=False,
        vault_approval_initialized=True,
        amount=10**18,
        amount_name="input_amount",
    )
    params.update(overrides)
    return params


# =============================================================================
# INDIVIDUAL GATES
# =============================================================================


def test_gate00_pass_active():
    result = Gate00Lifecycle().evaluate(CurveState.ACTIVE)
    assert result.entry_allowed
    assert result.block_reason == ""


def test_gate00_blocks_goals_not_set():
    result = Gate00Lifecycle().evaluate(CurveState.GOALS_NOT_SET)
    assert not result.entry_allowed
    assert result.block_reason == "goals_not_set"


def test_gate00_blocks_locked():
    result = Gate00Lifecycle().evaluate(CurveState.LOCKED)
    assert not result.entry_allowed
    assert result.block_reason == "locked"
    assert result.curve_state == CurveState.LOCKED


def test_gate01_pause():
    assert Gate01Pause().evaluate(False).entry_allowed
    blocked = Gate01Pause().evaluate(True)
    assert not blocked.entry_allowed
    assert blocked.block_reason == "paused"


def test_gate02_vault_approval():
    assert Gate02VaultApproval().evaluate(True).entry_allowed
    blocked = Gate02VaultApproval().evaluate(False)
    assert blocked.block_reason == "vault_not_approved"


def test_gate03_amount():
    assert Gate03AmountValidation().evaluate(1).entry_allowed
    blocked = Gate03AmountValidation().evaluate(0, "bonding_token_amount")
    assert blocked.block_reason == "zero_amount"
    assert "bonding_token_amount" in blocked.details


# =============================================================================
# CHAIN
# =============================================================================


class TestGateChain:
    def test_all_pass(self, gatekeeper):
        result = gatekeeper.evaluate(**_open())
        assert result.entry_allowed
        assert result.blocked_at == ""
        assert len(result.gate_results) == 4

    def test_first_block_wins(self, gatekeeper):
        """LOCKED + paused + без approval + 0: блокирует GATE 0."""
        result = gatekeeper.evaluate(
            **_open(
                curve_state=CurveState.LOCKED,
                paused=True,
                vault_approval_initialized=False,
                amount=0,
            )
        )
        assert result.block_reason == "locked"
        assert result.blocked_at == "GATE_00"
        assert len(result.gate_results) == 1

    def test_pause_before_vault(self, gatekeeper):
        result = gatekeeper.evaluate(**_open(paused=True, vault_approval_initialized=False))
        assert result.block_reason == "paused"
        assert result.blocked_at == "GATE_01"

    def test_vault_before_amount(self, gatekeeper):
        result = gatekeeper.evaluate(**_open(vault_approval_initialized=False, amount=0))
        assert result.block_reason == "vault_not_approved"

    @pytest.mark.parametrize(
        "overrides,error",
        [
            ({"curve_state": CurveState.GOALS_NOT_SET}, GoalsNotSetError),
            ({"curve_state": CurveState.LOCKED}, LockedError),
            ({"paused": True}, PausedError),
            ({"vault_approval_initialized": False}, VaultNotApprovedError),
            ({"amount": 0}, ZeroAmountError),
        ],
    )
    def test_enforce_maps_errors(self, gatekeeper, overrides, error):
        with pytest.raises(error):
            gatekeeper.enforce(**_open(**overrides))

    def test_enforce_zero_amount_names_parameter(self, gatekeeper):
        with pytest.raises(ZeroAmountError) as exc_info:
            gatekeeper.enforce(**_open(amount=0, amount_name="bonding_token_amount"))
        assert exc_info.value.name == "bonding_token_amount"

    def test_enforce_pass_returns_result(self, gatekeeper):
        assert gatekeeper.enforce(**_open()).entry_allowed
