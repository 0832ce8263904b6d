"""Общие fixtures для unit-тестов quote graph."""

import pytest

from src.graph import QuoteGraph
from src.observability import setup_logging
from src.validation import validate_price_update_input

setup_logging(level="WARNING")


KRAKEN_PRICE = [
    "2017-11-01T09:42:23+00:00 ",
    "KRAKEN",
    "BtC",
    "UsD",
    "1000.0 ",
    "0.0009 ",
]
KRAKEN_PRICE_WITH_LATEST_DATE = [
    "2018-11-01T09:42:23+00:00 ",
    "KRAKEN",
    "BtC",
    "UsD",
    "1018.0 ",
    "0.0001 ",
]
GDAX_PRICE = [
    " 2017-11-01T09:42:23+00:00 ",
    " GDAX",
    " BtC",
    " UsD",
    " 1001.0 ",
    " 0.0008 ",
]
BITTREX_PRICE = [
    " 2017-11-01T09:42:23+00:00 ",
    " BITTREX",
    " BtC",
    " UsD",
    " 1002.0 ",
    " 0.0009 ",
]


def apply_price(graph: QuoteGraph, fields: list[str]) -> None:
    """Helper: валидирует и применяет котировку (валидация обязана пройти)."""
    result = validate_price_update_input(fields, graph)
    assert result.accepted, result.details
    graph.update(result.request)


@pytest.fixture
def graph() -> QuoteGraph:
    """Пустой граф."""
    return QuoteGraph()


@pytest.fixture
def kraken_graph(graph: QuoteGraph) -> QuoteGraph:
    """Граф с котировкой KRAKEN BTC/USD."""
    apply_price(graph, KRAKEN_PRICE)
    return graph


@pytest.fixture
def two_exchange_graph(kraken_graph: QuoteGraph) -> QuoteGraph:
    """Граф KRAKEN + GDAX BTC/USD."""
    apply_price(kraken_graph, GDAX_PRICE)
    return kraken_graph
