"""
Unit tests для EarlySellPenaltyHook

Coverage:
- Линейное убывание штрафа (defaults 10/час, 100 часов)
- Продавец без покупок → максимальный штраф
- Активация/деактивация штрафа
- Конфигурационный инвариант rate * hours >= 1000
- Owner-only конфигурация
- checkpoint/rollback
"""

import pytest

from src.core.errors import AuthorizationError, PenaltyConfigError
from src.hooks.early_sell_penalty import (
    MAX_PENALTY_FEE,
    SECONDS_PER_HOUR,
    EarlySellPenaltyHook,
    PenaltyConfig,
)

T0 = 1_700_000_000


class FakeClock:
    """Детерминированный источник времени (секунды)."""

    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance_hours(self, hours: int) -> None:
        self.now += hours * SECONDS_PER_HOUR


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def hook(clock):
    return EarlySellPenaltyHook(owner="owner", clock=clock)


# =============================================================================
# CONFIG
# =============================================================================


class TestPenaltyConfig:
    def test_defaults(self):
        config = PenaltyConfig()
        assert config.decline_rate_per_hour == 10
        assert config.max_duration_hours == 100

    @pytest.mark.parametrize(
        "rate,hours",
        [(0, 100), (1001, 100), (10, 0), (9, 100), (1, 999)],
    )
    def test_invalid_configs(self, rate, hours):
        with pytest.raises(PenaltyConfigError):
            PenaltyConfig(decline_rate_per_hour=rate, max_duration_hours=hours)

    @pytest.mark.parametrize("rate,hours", [(10, 100), (1, 1000), (1000, 1), (20, 50)])
    def test_valid_configs(self, rate, hours):
        PenaltyConfig(decline_rate_per_hour=rate, max_duration_hours=hours)

    def test_from_dict_round_trip(self):
        config = PenaltyConfig(decline_rate_per_hour=20, max_duration_hours=50)
        assert PenaltyConfig.from_dict(config.to_dict()) == config

    def test_from_dict_schema_violation(self):
        with pytest.raises(PenaltyConfigError, match="invalid penalty config"):
            PenaltyConfig.from_dict({"decline_rate_per_hour": 10})

    def test_from_dict_invariant_violation(self):
        """Схема пропускает, но rate * hours < 1000."""
        with pytest.raises(PenaltyConfigError):
            PenaltyConfig.from_dict({"decline_rate_per_hour": 5, "max_duration_hours": 100})


# =============================================================================
# PENALTY CURVE
# =============================================================================


class TestPenaltyFee:
    def test_never_bought_pays_max(self, hook):
        assert hook.calculate_penalty_fee("stranger") == MAX_PENALTY_FEE
        assert hook.get_hours_since_last_buy("stranger") is None

    def test_buy_records_timestamp(self, hook):
        result = hook.buy("alice", 100, 100)
        assert result.is_neutral
        assert hook.last_buy_timestamp("alice") == T0

    @pytest.mark.parametrize(
        "hours,expected_fee",
        [(0, 1000), (1, 990), (50, 500), (99, 10), (100, 0), (500, 0)],
    )
    def test_linear_decline(self, hook, clock, hours, expected_fee):
        hook.buy("alice", 100, 100)
        clock.advance_hours(hours)
        assert hook.get_hours_since_last_buy("alice") == hours
        assert hook.calculate_penalty_fee("alice") == expected_fee

    def test_partial_hours_floor(self, hook, clock):
        hook.buy("alice", 100, 100)
        clock.now += SECONDS_PER_HOUR - 1
        assert hook.calculate_penalty_fee("alice") == 1000

    def test_new_buy_resets_penalty(self, hook, clock):
        hook.buy("alice", 100, 100)
        clock.advance_hours(80)
        hook.buy("alice", 100, 100)
        assert hook.calculate_penalty_fee("alice") == 1000

    def test_sell_returns_fee(self, hook, clock):
        hook.buy("alice", 100, 100)
        clock.advance_hours(25)
        result = hook.sell("alice", 100, 100)
        assert result.fee == 750
        assert result.delta_bonding_token == 0

    def test_sell_after_window_is_neutral(self, hook, clock):
        hook.buy("alice", 100, 100)
        clock.advance_hours(100)
        assert hook.sell("alice", 100, 100).is_neutral

    def test_custom_parameters(self, hook, clock):
        hook.set_penalty_parameters("owner", 20, 50)
        hook.buy("alice", 100, 100)
        clock.advance_hours(25)
        assert hook.calculate_penalty_fee("alice") == 500
        clock.advance_hours(25)
        assert hook.calculate_penalty_fee("alice") == 0


class TestPenaltyActivation:
    def test_inactive_no_fee_and_no_recording(self, clock):
        hook = EarlySellPenaltyHook(owner="owner", clock=clock, penalty_active=False)
        hook.buy("alice", 100, 100)
        assert hook.last_buy_timestamp("alice") is None
        assert hook.sell("stranger", 100, 100).is_neutral

    def test_toggle(self, hook):
        hook.set_penalty_active("owner", False)
        assert not hook.penalty_active
        assert hook.calculate_penalty_fee("stranger") == 0
        hook.set_penalty_active("owner", True)
        assert hook.calculate_penalty_fee("stranger") == MAX_PENALTY_FEE


class TestPenaltyAuthorization:
    def test_non_owner_cannot_set_parameters(self, hook):
        with pytest.raises(AuthorizationError):
            hook.set_penalty_parameters("mallory", 20, 50)
        assert hook.config == PenaltyConfig()

    def test_non_owner_cannot_toggle(self, hook):
        with pytest.raises(AuthorizationError):
            hook.set_penalty_active("mallory", False)
        assert hook.penalty_active

    def test_invalid_parameters_keep_previous(self, hook):
        with pytest.raises(PenaltyConfigError):
            hook.set_penalty_parameters("owner", 5, 100)
        assert hook.config == PenaltyConfig()


class TestPenaltyTransactional:
    def test_rollback_restores_timestamps(self, hook, clock):
        hook.buy("alice", 100, 100)
        token = hook.checkpoint()
        clock.advance_hours(10)
        hook.buy("alice", 100, 100)
        hook.buy("bob", 100, 100)

        hook.rollback(token)

        assert hook.last_buy_timestamp("alice") == T0
        assert hook.last_buy_timestamp("bob") is None
