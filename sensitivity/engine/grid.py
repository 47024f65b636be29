"""
Sensitivity grid engine.

Pure numpy functions, no I/O. Capex and LOM ounces are perturbed over the
same symmetric set of fractions; every (capex, ounces) pair yields an
amortization rate, and every rate times the ounces mined yields an expected
expense.

Key functions:
  run_sensitivity: Main entry point, builds both grids and their labels
  variation_fractions: Evenly spaced sweep fractions
  percentage_labels: Axis labels for the fractions
  compute_amortization_rate: capex / ounces, NaN where ounces are zero
  compute_expected_expense: amortization rate * ounces mined
"""

import logging
from typing import Tuple

import numpy as np

from sensitivity.domain.types import SensitivityResult
from sensitivity.scenarios.config import SweepConfig

logger = logging.getLogger(__name__)

# Decimal places kept before truncating a percentage label. Enough to drop
# binary representation noise (0.12 * 100 == 12.000000000000002) without
# hiding real fractional percentages.
_LABEL_PRECISION = 9


def variation_fractions(config: SweepConfig) -> np.ndarray:
  """
  Compute the 2 * steps + 1 sweep fractions over [-variation, +variation].

  Fractions are built as variation * k / steps for k in -steps..steps, so
  both endpoints are exact and the centre is exactly zero.

  Args:
    config: Sweep range and step count

  Returns:
    1-D array of fractions in ascending order
  """
  if config.steps == 0:
    return np.zeros(1)
  k = np.arange(-config.steps, config.steps + 1, dtype=float)
  return config.variation * k / config.steps


def percentage_labels(fractions: np.ndarray) -> Tuple[str, ...]:
  """
  Format fractions as integer percentage labels, truncating toward zero.

  Args:
    fractions: Sweep fractions (e.g. -0.2, 0.04)

  Returns:
    Tuple of labels such as ('-20%', '4%')
  """
  return tuple(
      f'{int(round(float(f) * 100, _LABEL_PRECISION))}%' for f in fractions)


def compute_amortization_rate(capex, ounces) -> np.ndarray:
  """
  Divide capex by ounces, broadcasting, with NaN where ounces are zero.

  Args:
    capex: Capex value(s)
    ounces: LOM ounce value(s)

  Returns:
    Array of amortization rates ($/ounce)

  Raises:
    FloatingPointError: If a rate overflows
  """
  capex = np.asarray(capex, dtype=float)
  ounces = np.asarray(ounces, dtype=float)
  shape = np.broadcast_shapes(capex.shape, ounces.shape)
  out = np.full(shape, np.nan)
  with np.errstate(over='raise'):
    np.divide(capex, ounces, out=out, where=ounces != 0)
  return out


def compute_expected_expense(amortization_rate, ounces_mined) -> np.ndarray:
  """
  Multiply amortization rate(s) by the ounces mined.

  NaN rates stay NaN; with zero ounces mined every defined cell is 0.0.

  Raises:
    FloatingPointError: If an expense overflows
  """
  with np.errstate(over='raise'):
    return np.multiply(np.asarray(amortization_rate, dtype=float),
                       float(ounces_mined))


def run_sensitivity(
    base_capex: float,
    base_ounces: float,
    ounces_mined: float,
    config: SweepConfig = SweepConfig(),
) -> SensitivityResult:
  """
  Build the amortization and expense grids for one project.

  Args:
    base_capex: Unperturbed future capex ($)
    base_ounces: Unperturbed LOM ounces
    ounces_mined: Ounces mined, multiplied into every amortization cell
    config: Sweep range and step count

  Returns:
    SensitivityResult with rows following capex variation and columns
    following ounce variation

  Raises:
    FloatingPointError: If a perturbed input or a grid cell overflows
  """
  fractions = variation_fractions(config)
  labels = percentage_labels(fractions)

  with np.errstate(over='raise'):
    capex_variants = float(base_capex) * (1.0 + fractions)
    ounce_variants = float(base_ounces) * (1.0 + fractions)

  amortization = compute_amortization_rate(capex_variants[:, np.newaxis],
                                           ounce_variants[np.newaxis, :])
  expense = compute_expected_expense(amortization, ounces_mined)

  n_undefined = int(np.isnan(amortization).sum())
  if n_undefined:
    logger.debug('%d of %d amortization cells undefined (zero ounces)',
                 n_undefined, amortization.size)

  return SensitivityResult(
      amortization=amortization,
      expense=expense,
      labels=labels,
      fractions=fractions,
  )
