"""Graph Engine — хранилище котировок и best-rate запросы.

Владеет Quote Store (вершины + рёбра) и выполняет:
- update: вставка/слияние котировки с recency-семантикой + bridge-рёбра
- get_top_result: лучший курс и путь через max-product Floyd–Warshall
- clear: полный сброс состояния

Хранилище устроено как arena + index:
- вершины лежат в одном списке, Node.index == позиция в списке
- рёбра ссылаются на вершины по index
- на каждую упорядоченную пару (start, end) не более одного ребра
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Final

from src.core.domain.errors import GraphError, GraphIntegrityViolation
from src.core.domain.node import ExchangeCurrencyPair, Node
from src.core.domain.path import Factor, Path
from src.core.domain.requests import (
    ExchangeRateRequest,
    OptimalRateWithPath,
    PriceUpdateRequest,
)
from src.core.math.rate_relaxation import (
    PathReconstructionError,
    reconstruct_hops,
    relax_best_rates,
)
from src.observability.logging import get_logger

logger = get_logger(__name__, layer="graph", component="quote-graph")


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class TopRateResult:
    """Результат best-rate запроса."""

    found: bool
    error: GraphError | None
    optimal: OptimalRateWithPath | None

    # Детали
    details: str


# =============================================================================
# CONSTANTS
# =============================================================================

# Вес синтетических рёбер между одной валютой на разных биржах (не конфигурируется)
FILLED_UP_WEIGHT: Final[float] = 1.0


# =============================================================================
# QUOTE GRAPH
# =============================================================================


class QuoteGraph:
    """Граф котировок между парами (exchange, currency).

    Однопоточный, синхронный. Результаты воспроизводимы бит-в-бит для одной и
    той же последовательности update/запросов: порядок назначения index и
    порядок tie-break фиксированы.
    """

    def __init__(self):
        self._nodes: list[Node] = []
        self._node_index: dict[tuple[str, str], int] = {}
        self._paths: list[Path] = []
        self._path_slot: dict[tuple[int, int], int] = {}

    # -------------------------------------------------------------------------
    # UPDATE
    # -------------------------------------------------------------------------

    def update(self, request: PriceUpdateRequest) -> None:
        """Применение провалидированной котировки.

        Если между вершинами уже есть рёбра, каждое обновляется независимо,
        только при строго более новом timestamp. Иначе вставляются Forward и
        Backward рёбра и bridge-рёбра для новых вершин. Новые вершины получают
        index в конце операции: сначала source, затем destination.

        Args:
            request: провалидированный PriceUpdateRequest
        """
        start_key = (request.exchange, request.source_currency)
        end_key = (request.exchange, request.destination_currency)

        start_index = self._node_index.get(start_key)
        end_index = self._node_index.get(end_key)
        start_is_new = start_index is None
        end_is_new = end_index is None

        # Индексы будущих вершин в порядке append
        next_index = len(self._nodes)
        if start_index is None:
            start_index = next_index
            next_index += 1
        if end_index is None:
            end_index = next_index

        forward_slot = self._path_slot.get((start_index, end_index))
        backward_slot = self._path_slot.get((end_index, start_index))

        if forward_slot is not None or backward_slot is not None:
            forward_updated = self._merge_quote(
                forward_slot, request.forward_factor, request.timestamp
            )
            backward_updated = self._merge_quote(
                backward_slot, request.backward_factor, request.timestamp
            )
            logger.debug(
                "price_update_applied",
                exchange=request.exchange,
                source_currency=request.source_currency,
                destination_currency=request.destination_currency,
                forward_updated=forward_updated,
                backward_updated=backward_updated,
            )
        else:
            self._append_path(
                start_index, end_index, request.forward_factor, request.timestamp, Factor.FORWARD
            )
            self._append_path(
                end_index, start_index, request.backward_factor, request.timestamp, Factor.BACKWARD
            )
            logger.debug(
                "paths_inserted",
                exchange=request.exchange,
                source_currency=request.source_currency,
                destination_currency=request.destination_currency,
            )
            self._insert_bridge_paths(
                request.exchange,
                request.source_currency if start_is_new else None,
                start_index,
                request.destination_currency if end_is_new else None,
                end_index,
                request.timestamp,
            )

        if start_is_new:
            self._insert_node(request.exchange, request.source_currency)
        if end_is_new:
            self._insert_node(request.exchange, request.destination_currency)

    def _merge_quote(self, slot: int | None, weight: float, timestamp: datetime) -> bool:
        """Обновление ребра в слоте, если timestamp строго новее.

        Returns:
            True если ребро обновлено
        """
        if slot is None:
            return False

        path = self._paths[slot]
        if timestamp > path.timestamp:
            self._paths[slot] = path.with_quote(weight, timestamp)
            return True
        return False

    def _insert_bridge_paths(
        self,
        exchange: str,
        new_start_currency: str | None,
        start_index: int,
        new_end_currency: str | None,
        end_index: int,
        timestamp: datetime,
    ) -> None:
        """Bridge-рёбра между новой вершиной и той же валютой на других биржах.

        Для каждой существующей вершины (в порядке хранения) добавляется пара рёбер
        FilledUpForward (existing → new) и FilledUpBackward (new → existing).

        Args:
            exchange: биржа новой котировки
            new_start_currency: валюта source, если вершина новая (иначе None)
            start_index: index вершины source
            new_end_currency: валюта destination, если вершина новая (иначе None)
            end_index: index вершины destination
            timestamp: время котировки
        """
        bridged = 0

        for existing in self._nodes:
            if existing.exchange == exchange:
                continue

            if new_start_currency is not None and existing.currency == new_start_currency:
                new_index = start_index
            elif new_end_currency is not None and existing.currency == new_end_currency:
                new_index = end_index
            else:
                continue

            self._append_path(
                existing.index, new_index, FILLED_UP_WEIGHT, timestamp, Factor.FILLED_UP_FORWARD
            )
            self._append_path(
                new_index, existing.index, FILLED_UP_WEIGHT, timestamp, Factor.FILLED_UP_BACKWARD
            )
            bridged += 1

        if bridged:
            logger.debug("bridge_paths_inserted", exchange=exchange, bridged_nodes=bridged)

    def _append_path(
        self,
        start: int,
        end: int,
        weight: float,
        timestamp: datetime,
        factor_type: Factor,
    ) -> None:
        self._path_slot[(start, end)] = len(self._paths)
        self._paths.append(
            Path(start=start, end=end, weight=weight, timestamp=timestamp, factor_type=factor_type)
        )

    def _insert_node(self, exchange: str, currency: str) -> Node:
        node = Node(exchange=exchange, currency=currency, index=len(self._nodes))
        self._node_index[node.key] = node.index
        self._nodes.append(node)
        return node

    # -------------------------------------------------------------------------
    # BEST RATE
    # -------------------------------------------------------------------------

    def get_top_result(self, request: ExchangeRateRequest) -> TopRateResult:
        """Лучший курс и путь source → destination.

        Args:
            request: ExchangeRateRequest (нормализует вызывающий)

        Returns:
            TopRateResult: found=True с OptimalRateWithPath, либо
            PATH_NOT_FOUND / INVALID_PATH

        Raises:
            GraphIntegrityViolation: путь ссылается на отсутствующее ребро
                или next-hop цепочка не сходится (GraphError.CRITICAL)
        """
        start_index = self._node_index.get(request.source_key)
        end_index = self._node_index.get(request.destination_key)

        if start_index is None or end_index is None:
            return self._error_result(
                GraphError.PATH_NOT_FOUND,
                f"unknown node: source={request.source_key}, destination={request.destination_key}",
            )

        hops = self._get_top_hops(start_index, end_index)

        if not hops:
            return self._error_result(
                GraphError.PATH_NOT_FOUND,
                f"no path {request.source_key} -> {request.destination_key}",
            )

        # Запрос вида "KRAKEN BTC KRAKEN BTC"
        if len(hops) == 1:
            return self._error_result(
                GraphError.INVALID_PATH,
                f"source and destination resolve to the same node {request.source_key}",
            )

        rate = 1.0
        pairs: list[ExchangeCurrencyPair] = []
        for start, end in zip(hops, hops[1:]):
            slot = self._path_slot.get((start, end))
            if slot is None:
                logger.error("graph_integrity_violation", start=start, end=end)
                raise GraphIntegrityViolation(f"path {start} -> {end} is missing from the edge set")
            rate *= self._paths[slot].weight
            pairs.append(self._nodes[start].pair)
        pairs.append(self._nodes[end_index].pair)

        optimal = OptimalRateWithPath(rate=rate, path=tuple(pairs))
        logger.debug(
            "best_rate_computed",
            source=request.source_key,
            destination=request.destination_key,
            rate=rate,
            hops=optimal.hop_count,
        )

        return TopRateResult(
            found=True,
            error=None,
            optimal=optimal,
            details=f"rate={rate} via {optimal.hop_count} hops",
        )

    def _get_top_hops(self, start_index: int, end_index: int) -> list[int]:
        """Индексы вершин лучшего пути (пересчёт матриц с нуля)."""
        matrices = relax_best_rates(
            len(self._nodes),
            ((path.start, path.end, path.weight) for path in self._paths),
        )
        try:
            return reconstruct_hops(matrices, start_index, end_index)
        except PathReconstructionError as e:
            logger.error("graph_integrity_violation", reason=str(e))
            raise GraphIntegrityViolation(str(e)) from e

    def _error_result(self, error: GraphError, details: str) -> TopRateResult:
        return TopRateResult(found=False, error=error, optimal=None, details=details)

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Полный сброс: вершины и рёбра удаляются, index снова с нуля."""
        logger.info("graph_cleared", nodes=len(self._nodes), paths=len(self._paths))
        self._nodes.clear()
        self._node_index.clear()
        self._paths.clear()
        self._path_slot.clear()

    def get_nodes(self) -> list[Node]:
        """Снапшот вершин в порядке index."""
        return list(self._nodes)

    def get_paths(self) -> list[Path]:
        """Снапшот рёбер в порядке вставки."""
        return list(self._paths)

    def get_forward_backward_factor_of_existing_paths(self) -> tuple[list[float], list[float]]:
        """Веса рёбер, разделённые по Forward / Backward (FilledUp* исключены).

        Returns:
            (forward weights, backward weights)
        """
        forward: list[float] = []
        backward: list[float] = []
        for path in self._paths:
            if path.factor_type == Factor.FORWARD:
                forward.append(path.weight)
            elif path.factor_type == Factor.BACKWARD:
                backward.append(path.weight)
        return forward, backward
