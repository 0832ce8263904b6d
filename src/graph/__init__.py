"""Graph Engine — граф котировок и best-rate запросы.

- update: вставка/слияние котировок с recency-семантикой
- bridge-рёбра weight=1.0 для одной валюты на разных биржах
- get_top_result: max-product Floyd–Warshall + реконструкция пути
"""

from .engine import FILLED_UP_WEIGHT, QuoteGraph, TopRateResult

__all__ = [
    "QuoteGraph",
    "TopRateResult",
    "FILLED_UP_WEIGHT",
]
