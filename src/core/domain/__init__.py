"""
Domain models and value objects.

Contains the quote-graph entities: Node, Path, requests/results and error kinds.
"""

from src.core.domain.errors import (
    ExchangeRateRequestValidationError,
    GraphError,
    GraphIntegrityViolation,
    PriceUpdateRequestValidationError,
)
from src.core.domain.node import ExchangeCurrencyPair, Node
from src.core.domain.path import Factor, Path
from src.core.domain.requests import (
    ExchangeRateRequest,
    OptimalRateWithPath,
    PriceUpdateRequest,
)

__all__ = [
    # Node model
    "Node",
    "ExchangeCurrencyPair",
    # Path model
    "Path",
    "Factor",
    # Requests / results
    "PriceUpdateRequest",
    "ExchangeRateRequest",
    "OptimalRateWithPath",
    # Errors
    "GraphError",
    "GraphIntegrityViolation",
    "PriceUpdateRequestValidationError",
    "ExchangeRateRequestValidationError",
]
