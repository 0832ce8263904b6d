"""
Numerical Safeguards — Float primitives для курсов

Модуль обеспечивает корректность float-операций над курсами:
- Проверка валидности float (не NaN, не Inf)
- Epsilon-сравнения для тестов и диагностики
- Строгая проверка произведения курсов относительно arbitrage bound

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не попадают в граф (валидация до вставки)
2. Arbitrage bound проверяется строгим сравнением (product > bound)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final, Iterable

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Граница произведения курсов для 2-цикла (forward × backward)
ARBITRAGE_BOUND: Final[float] = 1.0


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_valid_rate(value: float) -> bool:
    """
    Проверка, что значение пригодно как курс: finite и строго > 0.

    Examples:
        >>> is_valid_rate(1000.0)
        True
        >>> is_valid_rate(0.0)
        False
        >>> is_valid_rate(float('inf'))
        False
    """
    return is_valid_float(value) and value > 0.0


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# ARBITRAGE BOUND
# =============================================================================


def product_exceeds(a: float, b: float, bound: float = ARBITRAGE_BOUND) -> bool:
    """
    Строгая проверка a × b > bound.

    Произведение ровно bound допустимо (1000.0 × 0.001 = 1.0 не превышает 1).

    Examples:
        >>> product_exceeds(1000.0, 0.0009)
        False
        >>> product_exceeds(1000.0, 1.1)
        True
        >>> product_exceeds(1000.0, 0.001)
        False
    """
    return a * b > bound


def any_product_exceeds(
    existing: Iterable[float],
    factor: float,
    bound: float = ARBITRAGE_BOUND,
) -> bool:
    """
    True если хотя бы один existing × factor > bound.

    Args:
        existing: Веса уже существующих рёбер
        factor: Новый курс
        bound: Граница произведения

    Returns:
        True при первом превышении (short-circuit)
    """
    return any(product_exceeds(weight, factor, bound) for weight in existing)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение finite и строго положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
