import math

import numpy as np
import pytest

from sensitivity.engine.grid import compute_amortization_rate
from sensitivity.engine.grid import compute_expected_expense
from sensitivity.engine.grid import percentage_labels
from sensitivity.engine.grid import run_sensitivity
from sensitivity.engine.grid import variation_fractions
from sensitivity.scenarios.config import SweepConfig


class TestVariationFractions:
  """Tests for variation_fractions function."""

  def test_default_sweep(self):
    """Eleven points from -20% to +20% in 4% increments."""
    fractions = variation_fractions(SweepConfig())

    expected = [-0.20, -0.16, -0.12, -0.08, -0.04, 0.0,
                0.04, 0.08, 0.12, 0.16, 0.20]
    assert fractions == pytest.approx(expected, abs=1e-12)

  def test_endpoints_and_center(self):
    fractions = variation_fractions(SweepConfig(variation=0.3, steps=7))

    assert len(fractions) == 15
    assert fractions[0] == pytest.approx(-0.3)
    assert fractions[-1] == pytest.approx(0.3)
    assert fractions[7] == 0.0

  def test_symmetric(self):
    fractions = variation_fractions(SweepConfig(variation=0.2, steps=5))

    np.testing.assert_array_equal(fractions, -fractions[::-1])

  def test_zero_steps(self):
    """Zero steps gives the unperturbed point only."""
    fractions = variation_fractions(SweepConfig(variation=0.2, steps=0))

    np.testing.assert_array_equal(fractions, [0.0])


class TestPercentageLabels:
  """Tests for percentage_labels function."""

  def test_default_labels(self):
    labels = percentage_labels(variation_fractions(SweepConfig()))

    assert labels == ('-20%', '-16%', '-12%', '-8%', '-4%', '0%', '4%',
                      '8%', '12%', '16%', '20%')

  def test_truncates_toward_zero(self):
    """12.5% becomes 12%, -12.5% becomes -12% (not rounded)."""
    labels = percentage_labels(np.array([-0.125, -0.005, 0.125, 0.999]))

    assert labels == ('-12%', '0%', '12%', '99%')

  def test_negative_zero(self):
    assert percentage_labels(np.array([-0.0])) == ('0%',)

  def test_representation_noise_ignored(self):
    """Values a hair below an integer percent keep the integer label."""
    labels = percentage_labels(np.array([0.07999999999999999,
                                         -0.07999999999999999]))

    assert labels == ('8%', '-8%')


class TestComputeAmortizationRate:
  """Tests for compute_amortization_rate function."""

  def test_scalar(self):
    assert float(compute_amortization_rate(1_000_000.0, 10_000.0)) == 100.0

  def test_zero_ounces_is_nan(self):
    assert math.isnan(float(compute_amortization_rate(1_000.0, 0.0)))

  def test_broadcast(self):
    rates = compute_amortization_rate(
        np.array([[100.0], [200.0]]), np.array([[10.0, 0.0, 20.0]]))

    assert rates.shape == (2, 3)
    assert rates[0, 0] == 10.0
    assert rates[1, 2] == 10.0
    assert np.isnan(rates[:, 1]).all()

  def test_overflow_raises(self):
    with pytest.raises(FloatingPointError):
      compute_amortization_rate(1e308, 1e-10)


class TestComputeExpectedExpense:
  """Tests for compute_expected_expense function."""

  def test_scalar(self):
    assert float(compute_expected_expense(100.0, 500.0)) == 50_000.0

  def test_nan_propagates(self):
    assert math.isnan(float(compute_expected_expense(float('nan'), 500.0)))

  def test_zero_ounces_mined(self):
    assert float(compute_expected_expense(123.4, 0.0)) == 0.0


class TestRunSensitivity:
  """Tests for run_sensitivity function."""

  def test_shape_and_labels(self):
    config = SweepConfig(variation=0.2, steps=5)
    result = run_sensitivity(1_000_000, 10_000, 500, config)

    assert len(result.labels) == 11
    assert result.amortization.shape == (11, 11)
    assert result.expense.shape == (11, 11)

  @pytest.mark.parametrize('steps', [0, 1, 3, 8])
  def test_size_follows_steps(self, steps):
    result = run_sensitivity(500.0, 20.0, 3.0, SweepConfig(steps=steps))

    n = 2 * steps + 1
    assert len(result.labels) == n
    assert result.amortization.shape == (n, n)

  def test_center_cell(self):
    """Unperturbed cell: 1,000,000 / 10,000 = 100 $/oz, x 500 = 50,000."""
    result = run_sensitivity(1_000_000, 10_000, 500)

    assert result.labels[5] == '0%'
    assert result.amortization[5, 5] == pytest.approx(100.0)
    assert result.expense[5, 5] == pytest.approx(50_000.0)

  def test_corner_cells(self):
    """Rows follow capex, columns follow ounces.

    Top-left: 800,000 / 8,000 = 100.
    Top-right: 800,000 / 12,000 = 66.67.
    Bottom-left: 1,200,000 / 8,000 = 150.
    """
    result = run_sensitivity(1_000_000, 10_000, 500)

    assert result.amortization[0, 0] == pytest.approx(100.0)
    assert result.amortization[0, -1] == pytest.approx(66.6667, abs=1e-4)
    assert result.amortization[-1, 0] == pytest.approx(150.0)

  def test_expense_is_rate_times_ounces_mined(self):
    result = run_sensitivity(3_141_592, 27_182, 1_618)

    np.testing.assert_array_equal(result.expense,
                                  result.amortization * 1_618.0)

  def test_deterministic(self):
    first = run_sensitivity(987_654.321, 12_345.678, 4_321.0)
    second = run_sensitivity(987_654.321, 12_345.678, 4_321.0)

    assert first.amortization.tobytes() == second.amortization.tobytes()
    assert first.expense.tobytes() == second.expense.tobytes()
    assert first.labels == second.labels

  def test_zero_base_ounces(self):
    """Every ounce variant is zero, so every cell is undefined."""
    result = run_sensitivity(1_000_000, 0, 500)

    assert np.isnan(result.amortization).all()
    assert np.isnan(result.expense).all()

  def test_full_variation_zeroes_first_column(self):
    """At -100% the ounce variant is zero; only that column is undefined."""
    result = run_sensitivity(1_000_000, 10_000, 500,
                             SweepConfig(variation=1.0, steps=5))

    assert result.labels[0] == '-100%'
    assert np.isnan(result.amortization[:, 0]).all()
    assert np.isnan(result.expense[:, 0]).all()
    assert np.isfinite(result.amortization[:, 1:]).all()

  def test_zero_ounces_mined(self):
    """Expenses are zero, not undefined."""
    result = run_sensitivity(1_000_000, 10_000, 0)

    assert (result.expense == 0.0).all()
    assert np.isfinite(result.amortization).all()

  def test_overflow_raises(self):
    with pytest.raises(FloatingPointError):
      run_sensitivity(1e308, 10_000, 500)

  def test_result_is_read_only(self):
    result = run_sensitivity(1_000_000, 10_000, 500)

    with pytest.raises(ValueError):
      result.amortization[0, 0] = 1.0
