"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints (min/max/enum/const)
- Интеграция с Pydantic моделями и снапшотом контроллера
"""

import copy

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import (
    EngineStateValidator,
    PenaltyConfigValidator,
    SchemaLoader,
    validate_engine_state,
    validate_penalty_config,
)
from src.core.domain.reserves import Goals, VirtualReserves
from src.curve.goal_configurator import GoalConfigurator


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def configuration():
    return GoalConfigurator().configure(1000 * 10**18, 9 * 10**17)


@pytest.fixture
def valid_engine_state(configuration):
    """Валидный engine_state для тестирования."""
    return {
        "schema_version": "1",
        "owner": "owner",
        "curve_state": "ACTIVE",
        "reserves": configuration.reserves.model_dump(),
        "goals": configuration.goals.model_dump(),
        "withdrawal_fee_basis_points": 250,
        "vault_approval_initialized": True,
        "paused": False,
        "hook": "NoOpHook",
    }


@pytest.fixture
def valid_penalty_config():
    return {"decline_rate_per_hour": 10, "max_duration_hours": 100}


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    @pytest.mark.parametrize("name", ["engine_state", "penalty_config"])
    def test_schemas_are_valid(self, name):
        schema = SchemaLoader().load_schema(name)
        Draft202012Validator.check_schema(schema)

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("engine_state") is loader.load_schema("engine_state")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")


# =============================================================================
# ENGINE STATE
# =============================================================================


class TestEngineStateContract:
    def test_valid(self, valid_engine_state):
        validate_engine_state(valid_engine_state)
        assert EngineStateValidator().is_valid(valid_engine_state)

    def test_goals_may_be_null(self, valid_engine_state):
        state = dict(valid_engine_state, goals=None, curve_state="GOALS_NOT_SET")
        state["reserves"] = VirtualReserves().model_dump()
        validate_engine_state(state)

    @pytest.mark.parametrize(
        "field",
        ["schema_version", "owner", "curve_state", "reserves", "goals", "hook"],
    )
    def test_required_fields(self, valid_engine_state, field):
        del valid_engine_state[field]
        with pytest.raises(ValidationError):
            validate_engine_state(valid_engine_state)

    def test_unknown_curve_state(self, valid_engine_state):
        valid_engine_state["curve_state"] = "PAUSED"
        with pytest.raises(ValidationError):
            validate_engine_state(valid_engine_state)

    def test_fee_above_max(self, valid_engine_state):
        valid_engine_state["withdrawal_fee_basis_points"] = 10_001
        with pytest.raises(ValidationError):
            validate_engine_state(valid_engine_state)

    def test_negative_reserve(self, valid_engine_state):
        valid_engine_state["reserves"]["virtual_l"] = -1
        with pytest.raises(ValidationError):
            validate_engine_state(valid_engine_state)

    def test_nonzero_seed(self, valid_engine_state):
        valid_engine_state["goals"]["seed_input"] = 1
        with pytest.raises(ValidationError):
            validate_engine_state(valid_engine_state)

    @pytest.mark.parametrize("price", [866025403784438646, 10**18])
    def test_price_bounds(self, valid_engine_state, price):
        valid_engine_state["goals"]["desired_average_price"] = price
        with pytest.raises(ValidationError):
            validate_engine_state(valid_engine_state)

    def test_additional_properties_rejected(self, valid_engine_state):
        valid_engine_state["extra"] = 1
        with pytest.raises(ValidationError):
            validate_engine_state(valid_engine_state)

    def test_iter_errors_collects_all(self, valid_engine_state):
        broken = copy.deepcopy(valid_engine_state)
        broken["paused"] = "no"
        broken["hook"] = ""
        errors = list(EngineStateValidator().iter_errors(broken))
        assert len(errors) == 2


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


class TestPydanticIntegration:
    def test_reserves_round_trip(self, valid_engine_state):
        reserves = VirtualReserves(**valid_engine_state["reserves"])
        assert reserves.model_dump() == valid_engine_state["reserves"]

    def test_goals_round_trip(self, valid_engine_state):
        goals = Goals(**valid_engine_state["goals"])
        assert goals.model_dump() == valid_engine_state["goals"]

    def test_reserves_reject_unequal_offsets(self, valid_engine_state):
        data = dict(valid_engine_state["reserves"], beta=1)
        with pytest.raises(ValueError):
            VirtualReserves(**data)


# =============================================================================
# PENALTY CONFIG
# =============================================================================


class TestPenaltyConfigContract:
    def test_valid(self, valid_penalty_config):
        validate_penalty_config(valid_penalty_config)
        assert PenaltyConfigValidator().is_valid(valid_penalty_config)

    @pytest.mark.parametrize(
        "data",
        [
            {"decline_rate_per_hour": 0, "max_duration_hours": 100},
            {"decline_rate_per_hour": 1001, "max_duration_hours": 100},
            {"decline_rate_per_hour": 10, "max_duration_hours": 0},
            {"decline_rate_per_hour": "10", "max_duration_hours": 100},
            {"decline_rate_per_hour": 10},
            {"decline_rate_per_hour": 10, "max_duration_hours": 100, "extra": True},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(ValidationError):
            validate_penalty_config(data)
