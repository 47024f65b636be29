'''Sensitivity grid engine with pure numpy functions.'''

from sensitivity.engine.grid import (
    compute_amortization_rate,
    compute_expected_expense,
    percentage_labels,
    run_sensitivity,
    variation_fractions,
)

__all__ = [
    'compute_amortization_rate',
    'compute_expected_expense',
    'percentage_labels',
    'run_sensitivity',
    'variation_fractions',
]
