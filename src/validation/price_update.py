"""Price-update validation — сырые поля → PriceUpdateRequest.

Порядок проверок (short-circuit на первой ошибке):
1. Количество полей != 6 → InvalidArgumentNumber
2. source currency == destination currency → SameSourceDestinationCurrency
3. Timestamp не RFC 3339 с offset → InvalidTimestamp
4. Forward factor не число или <= 0 → InvalidForwardfactor
5. Backward factor не число или <= 0 → InvalidBackwardfactor
6. existing backward × new forward > bound или
   existing forward × new backward > bound → CrossForwardBackwardFactorMultiplyError
7. new forward × new backward > bound → ForwardBackwardFactorMultiplyError

Проверки 6-7 — эвристическая защита от arbitrage только для 2-циклов;
длинные циклы не проверяются, пороги сохраняются как есть.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Final, Sequence

from src.core.domain.errors import PriceUpdateRequestValidationError
from src.core.domain.requests import PriceUpdateRequest
from src.core.math.numerical_safeguards import (
    ARBITRAGE_BOUND,
    any_product_exceeds,
    is_valid_rate,
    product_exceeds,
)
from src.graph.engine import QuoteGraph
from src.observability.logging import get_logger

logger = get_logger(__name__, layer="validation", component="price-update")


# =============================================================================
# CONSTANTS
# =============================================================================

PRICE_UPDATE_FIELD_COUNT: Final[int] = 6

# RFC 3339 date-time: дата, 'T', время, дробные секунды (optional), offset обязателен
_RFC3339_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class PriceUpdateValidationResult:
    """Результат валидации price-update запроса."""

    accepted: bool
    request: PriceUpdateRequest | None
    error: PriceUpdateRequestValidationError | None

    # Детали
    details: str


# =============================================================================
# PARSERS
# =============================================================================


def parse_rfc3339_timestamp(text: str) -> datetime | None:
    """Строгий разбор RFC 3339 date-time с обязательным offset.

    Args:
        text: строка вида '2017-11-01T09:42:23+00:00'

    Returns:
        timezone-aware datetime в UTC, либо None если формат невалиден

    Examples:
        >>> parse_rfc3339_timestamp("2017-11-01T11:42:23+02:00").hour
        9
        >>> parse_rfc3339_timestamp("2017-11-01T09:42:23") is None
        True
    """
    match = _RFC3339_PATTERN.match(text.strip())
    if match is None:
        return None

    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()

    if zulu:
        offset = timedelta(0)
    else:
        if int(off_h) > 23 or int(off_m) > 59:
            return None
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        if sign == "-":
            offset = -offset

    # datetime хранит микросекунды, лишние разряды отбрасываются
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))

    try:
        parsed = datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=timezone(offset),
        )
    except ValueError:
        return None

    return parsed.astimezone(timezone.utc)


def parse_factor(text: str) -> float | None:
    """Разбор курса: конечное число строго > 0.

    Returns:
        float, либо None если строка не число, NaN/Inf или <= 0
    """
    text = text.strip()
    # float() допускает '1_000', которое не является записью числа в котировке
    if not text or "_" in text:
        return None

    try:
        value = float(text)
    except ValueError:
        return None

    if not is_valid_rate(value):
        return None
    return value


# =============================================================================
# VALIDATOR
# =============================================================================


class PriceUpdateValidator:
    """Валидация price-update запроса против текущего состояния графа.

    Граф используется только на чтение (веса Forward/Backward рёбер).
    Граница произведения 2-цикла фиксирована: ARBITRAGE_BOUND.
    """

    def evaluate(self, fields: Sequence[str], graph: QuoteGraph) -> PriceUpdateValidationResult:
        """Валидация сырых полей.

        Args:
            fields: [timestamp, exchange, source, destination, forward, backward]
            graph: текущий граф (read-only)

        Returns:
            PriceUpdateValidationResult с request или первой найденной ошибкой
        """
        # 1. Количество полей (пустое после trim поле считается отсутствующим)
        if len(fields) != PRICE_UPDATE_FIELD_COUNT or not all(field.strip() for field in fields):
            return self._rejected(
                PriceUpdateRequestValidationError.INVALID_ARGUMENT_NUMBER,
                f"expected {PRICE_UPDATE_FIELD_COUNT} non-empty fields, got {len(fields)}",
            )

        raw_timestamp, raw_exchange, raw_source, raw_destination, raw_forward, raw_backward = fields
        exchange = raw_exchange.strip().upper()
        source_currency = raw_source.strip().upper()
        destination_currency = raw_destination.strip().upper()

        # 2. Одинаковые валюты
        if source_currency == destination_currency:
            return self._rejected(
                PriceUpdateRequestValidationError.SAME_SOURCE_DESTINATION_CURRENCY,
                f"source and destination currency are both {source_currency}",
            )

        # 3. Timestamp
        timestamp = parse_rfc3339_timestamp(raw_timestamp)
        if timestamp is None:
            return self._rejected(
                PriceUpdateRequestValidationError.INVALID_TIMESTAMP,
                f"not an RFC 3339 date-time: {raw_timestamp.strip()!r}",
            )

        # 4-5. Курсы
        forward_factor = parse_factor(raw_forward)
        if forward_factor is None:
            return self._rejected(
                PriceUpdateRequestValidationError.INVALID_FORWARD_FACTOR,
                f"forward factor must be a positive number, got {raw_forward.strip()!r}",
            )

        backward_factor = parse_factor(raw_backward)
        if backward_factor is None:
            return self._rejected(
                PriceUpdateRequestValidationError.INVALID_BACKWARD_FACTOR,
                f"backward factor must be a positive number, got {raw_backward.strip()!r}",
            )

        # 6. Перекрёстная проверка с существующими рёбрами
        bound = ARBITRAGE_BOUND
        existing_forward, existing_backward = graph.get_forward_backward_factor_of_existing_paths()
        if any_product_exceeds(existing_backward, forward_factor, bound) or any_product_exceeds(
            existing_forward, backward_factor, bound
        ):
            return self._rejected(
                PriceUpdateRequestValidationError.CROSS_FORWARD_BACKWARD_FACTOR_MULTIPLY_ERROR,
                f"existing factors multiplied by {forward_factor}/{backward_factor} exceed {bound}",
            )

        # 7. Собственный 2-цикл
        if product_exceeds(forward_factor, backward_factor, bound):
            return self._rejected(
                PriceUpdateRequestValidationError.FORWARD_BACKWARD_FACTOR_MULTIPLY_ERROR,
                f"{forward_factor} * {backward_factor} > {bound}",
            )

        # 8. PASS
        request = PriceUpdateRequest(
            timestamp=timestamp,
            exchange=exchange,
            source_currency=source_currency,
            destination_currency=destination_currency,
            forward_factor=forward_factor,
            backward_factor=backward_factor,
        )
        return PriceUpdateValidationResult(
            accepted=True,
            request=request,
            error=None,
            details=f"{exchange} {source_currency}/{destination_currency} at {timestamp.isoformat()}",
        )

    def _rejected(
        self, error: PriceUpdateRequestValidationError, details: str
    ) -> PriceUpdateValidationResult:
        logger.debug("price_update_rejected", error=error.value, details=details)
        return PriceUpdateValidationResult(
            accepted=False,
            request=None,
            error=error,
            details=details,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_price_update_input(
    fields: Sequence[str], graph: QuoteGraph
) -> PriceUpdateValidationResult:
    """Валидация price-update полей."""
    return PriceUpdateValidator().evaluate(fields, graph)
