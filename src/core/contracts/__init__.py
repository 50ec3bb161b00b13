"""
Contract Validation Module

Модуль для валидации JSON контрактов (снапшот движка, конфигурация hook).
"""

from .validators import (
    ContractValidator,
    EngineStateValidator,
    PenaltyConfigValidator,
    SchemaLoader,
    validate_engine_state,
    validate_penalty_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EngineStateValidator",
    "PenaltyConfigValidator",
    # Functions
    "validate_engine_state",
    "validate_penalty_config",
]
