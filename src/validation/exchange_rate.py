"""Exchange-rate validation — сырые поля → ExchangeRateRequest.

Требуется ровно 4 поля; каждое trim + upper-case. Граф не проверяется:
неизвестная биржа даёт валидный запрос и PATH_NOT_FOUND при вычислении.
"""

from dataclasses import dataclass
from typing import Final, Sequence

from src.core.domain.errors import ExchangeRateRequestValidationError
from src.core.domain.requests import ExchangeRateRequest
from src.observability.logging import get_logger

logger = get_logger(__name__, layer="validation", component="exchange-rate")

EXCHANGE_RATE_FIELD_COUNT: Final[int] = 4


@dataclass(frozen=True)
class ExchangeRateValidationResult:
    """Результат валидации exchange-rate запроса."""

    accepted: bool
    request: ExchangeRateRequest | None
    error: ExchangeRateRequestValidationError | None
    details: str


def validate_exchange_rate_input(fields: Sequence[str]) -> ExchangeRateValidationResult:
    """
    Валидация полей [source_exchange, source_currency, destination_exchange,
    destination_currency].

    Пустое после trim поле трактуется как нехватка аргумента.
    """
    normalized = [field.strip().upper() for field in fields]

    if len(normalized) != EXCHANGE_RATE_FIELD_COUNT or not all(normalized):
        details = f"expected {EXCHANGE_RATE_FIELD_COUNT} non-empty fields, got {len(fields)}"
        logger.debug(
            "exchange_rate_rejected",
            error=ExchangeRateRequestValidationError.INVALID_ARGUMENT_NUMBER.value,
            details=details,
        )
        return ExchangeRateValidationResult(
            accepted=False,
            request=None,
            error=ExchangeRateRequestValidationError.INVALID_ARGUMENT_NUMBER,
            details=details,
        )

    source_exchange, source_currency, destination_exchange, destination_currency = normalized
    request = ExchangeRateRequest(
        source_exchange=source_exchange,
        source_currency=source_currency,
        destination_exchange=destination_exchange,
        destination_currency=destination_currency,
    )
    return ExchangeRateValidationResult(
        accepted=True,
        request=request,
        error=None,
        details=f"{source_exchange} {source_currency} -> {destination_exchange} {destination_currency}",
    )
