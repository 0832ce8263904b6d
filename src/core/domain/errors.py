"""
Errors — Таксономия ошибок графа и Validation Layer

Виды ошибок — str Enum с пользовательскими сообщениями (.message).
Ошибки возвращаются вызывающей стороне в result-объектах; единственное
исключение — Critical, который поднимается как GraphIntegrityViolation.
"""

from enum import Enum


# =============================================================================
# GRAPH ERRORS
# =============================================================================


class GraphError(str, Enum):
    """Ошибки best-rate запроса"""

    PATH_NOT_FOUND = "PathNotFound"
    INVALID_PATH = "InvalidPath"
    CRITICAL = "Critical"

    @property
    def message(self) -> str:
        return _GRAPH_ERROR_MESSAGES[self]


_GRAPH_ERROR_MESSAGES: dict[GraphError, str] = {
    GraphError.PATH_NOT_FOUND: (
        "No path found at the moment. System doesn't have enough data "
        "to provide answer to your request."
    ),
    GraphError.INVALID_PATH: (
        "Invalid request. Source exchange and currency should not be the same "
        "as destination's"
    ),
    GraphError.CRITICAL: (
        "There is a critical error inside the system. Please wipe out all "
        "the existing data and continue using the system."
    ),
}


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class PriceUpdateRequestValidationError(str, Enum):
    """Ошибки валидации price-update запроса (в порядке приоритета проверок)"""

    INVALID_ARGUMENT_NUMBER = "InvalidArgumentNumber"
    SAME_SOURCE_DESTINATION_CURRENCY = "SameSourceDestinationCurrency"
    INVALID_TIMESTAMP = "InvalidTimestamp"
    INVALID_FORWARD_FACTOR = "InvalidForwardfactor"
    INVALID_BACKWARD_FACTOR = "InvalidBackwardfactor"
    CROSS_FORWARD_BACKWARD_FACTOR_MULTIPLY_ERROR = "CrossForwardBackwardFactorMultiplyError"
    FORWARD_BACKWARD_FACTOR_MULTIPLY_ERROR = "ForwardBackwardFactorMultiplyError"

    @property
    def message(self) -> str:
        return _PRICE_UPDATE_ERROR_MESSAGES[self]


_PRICE_UPDATE_ERROR_MESSAGES: dict[PriceUpdateRequestValidationError, str] = {
    PriceUpdateRequestValidationError.INVALID_ARGUMENT_NUMBER: (
        "Invalid request : the number of price-update-request arguments must be 6"
    ),
    PriceUpdateRequestValidationError.SAME_SOURCE_DESTINATION_CURRENCY: (
        "The currency of Source should not be the same as that of Destination"
    ),
    PriceUpdateRequestValidationError.INVALID_TIMESTAMP: "Invalid timestamp",
    PriceUpdateRequestValidationError.INVALID_FORWARD_FACTOR: "Invalid forward factor",
    PriceUpdateRequestValidationError.INVALID_BACKWARD_FACTOR: "Invalid backward factor",
    PriceUpdateRequestValidationError.CROSS_FORWARD_BACKWARD_FACTOR_MULTIPLY_ERROR: (
        "Invalid input based on the current algorithm of the system. The algorithm "
        "works only when the product of forward and backward factor of each path "
        "is less than or equal to 1"
    ),
    PriceUpdateRequestValidationError.FORWARD_BACKWARD_FACTOR_MULTIPLY_ERROR: (
        "The product of forward factor and backward factor should be less than "
        "or equal to 1"
    ),
}


class ExchangeRateRequestValidationError(str, Enum):
    """Ошибки валидации exchange-rate запроса"""

    INVALID_ARGUMENT_NUMBER = "InvalidArgumentNumber"

    @property
    def message(self) -> str:
        return "Invalid request : the number of exchange-rate-request arguments must be 4"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class GraphIntegrityViolation(Exception):
    """
    Критическое нарушение целостности графа (GraphError.CRITICAL).

    Реконструкция пути сослалась на ребро, которого нет в хранилище,
    либо next-hop матрица не сходится к destination.

    При возникновении требуется полный сброс состояния (QuoteGraph.clear()).
    """

    def __init__(self, details: str):
        super().__init__(f"{GraphError.CRITICAL.message} ({details})")
        self.error = GraphError.CRITICAL
        self.details = details
