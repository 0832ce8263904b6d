"""
Rate Relaxation — All-pairs best rate (max-product Floyd–Warshall)

Модуль вычисляет лучший достижимый курс между всеми парами вершин:
- "Расстояние" — ПРОИЗВЕДЕНИЕ весов рёбер вдоль пути (максимизируется)
- Параллельная next-hop матрица для реконструкции пути
- Матрицы плоские, индексация i * n + j

ФОРМУЛЫ:
    rate[i][j] = weight(i → j), 0.0 если ребра нет
    next[i][j] = j для прямых рёбер, None иначе

    for k, i, j (по возрастанию):
        if rate[i][j] < rate[i][k] * rate[k][j]:
            rate[i][j] = rate[i][k] * rate[k][j]
            next[i][j] = next[i][k]

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Замена только при строгом улучшении (<): среди равных путей остаётся
   первый найденный (детерминированный tie-break по порядку итерации)
2. Порядок итерации фиксирован: k, затем i, затем j по возрастанию
3. Матрицы пересчитываются с нуля на каждый запрос: O(n³) время, O(n²) память
"""

from dataclasses import dataclass
from typing import Iterable

from src.core.math.numerical_safeguards import validate_positive


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PathReconstructionError(Exception):
    """
    next-hop цепочка не достигает destination за size шагов.

    Возможно только при повреждённых матрицах; вызывающая сторона должна
    трактовать это как нарушение целостности графа.
    """


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class RelaxationMatrices:
    """Результат relaxation: плоские матрицы rate и next_hop размера size × size."""

    size: int
    rate: list[float]
    next_hop: list[int | None]

    def best_rate(self, start: int, end: int) -> float:
        """Лучший курс start → end (0.0 если пути нет)"""
        return self.rate[start * self.size + end]

    def next_of(self, start: int, end: int) -> int | None:
        """Следующая вершина после start на лучшем пути к end"""
        return self.next_hop[start * self.size + end]


# =============================================================================
# RELAXATION
# =============================================================================


def relax_best_rates(size: int, edges: Iterable[tuple[int, int, float]]) -> RelaxationMatrices:
    """
    Max-product Floyd–Warshall по всем парам вершин.

    Args:
        size: Количество вершин n (индексы 0..n-1)
        edges: Рёбра (start, end, weight) в порядке хранения

    Returns:
        RelaxationMatrices с лучшими курсами и next-hop матрицей

    Raises:
        ValueError: Если size < 0, индекс вне диапазона или weight невалиден
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")

    rate: list[float] = [0.0] * (size * size)
    next_hop: list[int | None] = [None] * (size * size)

    for start, end, weight in edges:
        if not (0 <= start < size and 0 <= end < size):
            raise ValueError(f"edge ({start}, {end}) is out of range for size {size}")
        validate_positive(weight, "weight")
        rate[start * size + end] = weight
        next_hop[start * size + end] = end

    for k in range(size):
        row_k = k * size
        for i in range(size):
            row_i = i * size
            # Нулевой rate[i][k] не может дать улучшения ни для одного j
            if rate[row_i + k] == 0.0:
                continue
            for j in range(size):
                candidate = rate[row_i + k] * rate[row_k + j]
                if rate[row_i + j] < candidate:
                    rate[row_i + j] = candidate
                    next_hop[row_i + j] = next_hop[row_i + k]

    return RelaxationMatrices(size=size, rate=rate, next_hop=next_hop)


# =============================================================================
# PATH RECONSTRUCTION
# =============================================================================


def reconstruct_hops(matrices: RelaxationMatrices, start: int, end: int) -> list[int]:
    """
    Реконструкция лучшего пути start → end по next-hop матрице.

    Args:
        matrices: Результат relax_best_rates
        start: Index начальной вершины
        end: Index конечной вершины

    Returns:
        Индексы вершин от start до end включительно;
        [] если пути нет; [start] если start == end и next[start][start] определён

    Raises:
        PathReconstructionError: Если цепочка не сходится за size шагов
    """
    if matrices.next_of(start, end) is None:
        return []

    hops = [start]
    current = start
    while current != end:
        following = matrices.next_of(current, end)
        if following is None or len(hops) >= matrices.size:
            raise PathReconstructionError(
                f"next-hop chain {start} -> {end} broke at {current} after {len(hops)} hops"
            )
        current = following
        hops.append(current)

    return hops
