"""
Node — Вершина графа котировок

Immutable Pydantic модели для идентичности (exchange, currency).

Node хранит плотный целочисленный index (координата строки/столбца в матрицах
relaxation). Index назначается при первой вставке в граф и не меняется до clear.
Равенство и hash определяются только парой (exchange, currency).
"""

from pydantic import BaseModel, Field


# =============================================================================
# EXCHANGE/CURRENCY PAIR
# =============================================================================


class ExchangeCurrencyPair(BaseModel):
    """Пара (exchange, currency) — элемент пути в результате best-rate запроса"""

    exchange: str = Field(..., min_length=1, description="Биржа (например, 'KRAKEN')")
    currency: str = Field(..., min_length=1, description="Код валюты (например, 'BTC')")

    model_config = {"frozen": True}

    def to_contract(self) -> dict[str, str]:
        return {"exchange": self.exchange, "currency": self.currency}


# =============================================================================
# NODE MODEL
# =============================================================================


class Node(BaseModel):
    """
    Вершина графа: (exchange, currency) + index.

    Immutable модель (frozen=True). Index не участвует в равенстве:
    Node("KRAKEN", "BTC", 0) == Node("KRAKEN", "BTC", 7).
    """

    exchange: str = Field(..., min_length=1, description="Биржа")
    currency: str = Field(..., min_length=1, description="Код валюты")
    index: int = Field(..., ge=0, description="Координата в матрицах relaxation")

    model_config = {"frozen": True}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.exchange == other.exchange and self.currency == other.currency

    def __hash__(self) -> int:
        return hash((self.exchange, self.currency))

    @property
    def key(self) -> tuple[str, str]:
        """Ключ идентичности (exchange, currency)"""
        return (self.exchange, self.currency)

    @property
    def pair(self) -> ExchangeCurrencyPair:
        return ExchangeCurrencyPair(exchange=self.exchange, currency=self.currency)
