"""
Core math modules

Численные примитивы для курсов и all-pairs best-rate relaxation.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    ARBITRAGE_BOUND,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    any_product_exceeds,
    is_close,
    is_valid_float,
    is_valid_rate,
    product_exceeds,
    validate_positive,
)

# Rate Relaxation
from src.core.math.rate_relaxation import (
    PathReconstructionError,
    RelaxationMatrices,
    reconstruct_hops,
    relax_best_rates,
)

__all__ = [
    # Numerical Safeguards: constants
    "ARBITRAGE_BOUND",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards: checks
    "is_valid_float",
    "is_valid_rate",
    "is_close",
    "product_exceeds",
    "any_product_exceeds",
    "validate_positive",
    # Rate Relaxation
    "RelaxationMatrices",
    "PathReconstructionError",
    "relax_best_rates",
    "reconstruct_hops",
]
