"""
Contract Validation Module

Модуль для валидации JSON контрактов quote graph.
"""

from .validators import (
    ContractValidator,
    OptimalRateValidator,
    SchemaLoader,
    validate_optimal_rate,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "OptimalRateValidator",
    # Functions
    "validate_optimal_rate",
]
