"""Validation Layer — сырые текстовые поля → типизированные запросы.

- validate_price_update_input: 6 полей, проверки в фиксированном порядке,
  arbitrage cross-check против текущего графа
- validate_exchange_rate_input: 4 поля, нормализация
"""

from .exchange_rate import (
    EXCHANGE_RATE_FIELD_COUNT,
    ExchangeRateValidationResult,
    validate_exchange_rate_input,
)
from .price_update import (
    PRICE_UPDATE_FIELD_COUNT,
    PriceUpdateValidationResult,
    PriceUpdateValidator,
    parse_factor,
    parse_rfc3339_timestamp,
    validate_price_update_input,
)

__all__ = [
    "EXCHANGE_RATE_FIELD_COUNT",
    "ExchangeRateValidationResult",
    "validate_exchange_rate_input",
    "PRICE_UPDATE_FIELD_COUNT",
    "PriceUpdateValidationResult",
    "PriceUpdateValidator",
    "parse_factor",
    "parse_rfc3339_timestamp",
    "validate_price_update_input",
]
