"""
Requests & Results — Value objects для обмена с внешними коллабораторами

Immutable Pydantic модели:
- PriceUpdateRequest: провалидированное обновление котировки
- ExchangeRateRequest: запрос лучшего курса между двумя (exchange, currency)
- OptimalRateWithPath: лучший курс и путь, на котором он достигается

Нормализация (trim + upper-case, перевод timestamp в UTC) выполняется
Validation Layer; модели только проверяют инварианты.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from .node import ExchangeCurrencyPair


# =============================================================================
# PRICE UPDATE
# =============================================================================


class PriceUpdateRequest(BaseModel):
    """
    Обновление котировки для пары валют на одной бирже.

    forward_factor: единиц destination за единицу source
    backward_factor: единиц source за единицу destination
    """

    timestamp: datetime = Field(..., description="Время котировки (timezone-aware)")
    exchange: str = Field(..., min_length=1, description="Биржа")
    source_currency: str = Field(..., min_length=1, description="Исходная валюта")
    destination_currency: str = Field(..., min_length=1, description="Валюта назначения")
    forward_factor: float = Field(..., gt=0, description="Курс source → destination")
    backward_factor: float = Field(..., gt=0, description="Курс destination → source")

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def validate_timezone_aware(cls, v: datetime) -> datetime:
        """Naive datetime запрещён; aware datetime приводится к UTC"""
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("timestamp must be timezone-aware")
        return v.astimezone(timezone.utc)

    @field_validator("destination_currency")
    @classmethod
    def validate_distinct_currencies(cls, v: str, info) -> str:
        """Проверка, что source и destination различаются"""
        if "source_currency" in info.data and info.data["source_currency"] == v:
            raise ValueError("destination_currency must differ from source_currency")
        return v


# =============================================================================
# EXCHANGE RATE REQUEST
# =============================================================================


class ExchangeRateRequest(BaseModel):
    """Запрос лучшего курса source (exchange, currency) → destination (exchange, currency)"""

    source_exchange: str = Field(..., min_length=1)
    source_currency: str = Field(..., min_length=1)
    destination_exchange: str = Field(..., min_length=1)
    destination_currency: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    @property
    def source_key(self) -> tuple[str, str]:
        return (self.source_exchange, self.source_currency)

    @property
    def destination_key(self) -> tuple[str, str]:
        return (self.destination_exchange, self.destination_currency)

    def to_contract(self) -> dict[str, str]:
        return {
            "source_exchange": self.source_exchange,
            "source_currency": self.source_currency,
            "destination_exchange": self.destination_exchange,
            "destination_currency": self.destination_currency,
        }


# =============================================================================
# OPTIMAL RATE RESULT
# =============================================================================


class OptimalRateWithPath(BaseModel):
    """
    Результат best-rate запроса.

    path — упорядоченная последовательность пар от source до destination
    включительно; порядок совпадает с порядком обхода рёбер.
    """

    rate: float = Field(..., gt=0, description="Произведение весов рёбер вдоль пути")
    path: tuple[ExchangeCurrencyPair, ...] = Field(..., min_length=2, description="Пары пути")

    model_config = {"frozen": True}

    @property
    def hop_count(self) -> int:
        """Количество рёбер в пути"""
        return len(self.path) - 1

    def to_contract(self, request: ExchangeRateRequest) -> dict:
        """
        Payload для коллабораторов (см. контракт optimal_rate.json).

        Args:
            request: Исходный запрос (включается в payload)
        """
        return {
            "request": request.to_contract(),
            "rate": self.rate,
            "path": [pair.to_contract() for pair in self.path],
        }
