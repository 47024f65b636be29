from unittest import mock

import pytest

from sensitivity.run import artifact_paths
from sensitivity.run import run_project
from sensitivity.scenarios.config import ReportConfig
from sensitivity.scenarios.config import SweepConfig


class TestArtifactPaths:

  def test_names(self, tmp_path, alpha_record):
    paths = artifact_paths(alpha_record, tmp_path,
                           ReportConfig(image_format='svg'))

    assert paths['workbook'].name == 'Alpha_sensitivity_analysis.xlsx'
    assert paths['amortization'].name == 'Alpha_amortization_sensitivity.svg'
    assert paths['expense'].name == 'Alpha_expense_sensitivity.svg'


class TestRunProject:
  """Tests for run_project function."""

  def test_writes_all_artifacts(self, tmp_path, alpha_record, fast_report):
    outcome = run_project(alpha_record, tmp_path, report=fast_report)

    project_dir = tmp_path / 'Alpha'
    assert outcome.ok
    assert outcome.artifacts == [
        project_dir / 'Alpha_sensitivity_analysis.xlsx',
        project_dir / 'Alpha_amortization_sensitivity.png',
        project_dir / 'Alpha_expense_sensitivity.png',
    ]
    assert all(p.exists() for p in outcome.artifacts)
    assert outcome.result.center() == pytest.approx((100.0, 50_000.0))

  def test_uses_sweep_config(self, tmp_path, alpha_record, fast_report):
    outcome = run_project(alpha_record,
                          tmp_path,
                          config=SweepConfig(variation=0.1, steps=2),
                          report=fast_report)

    assert outcome.result.labels == ('-10%', '-5%', '0%', '5%', '10%')

  def test_creates_nested_output_dir(self, tmp_path, alpha_record,
                                     fast_report):
    outcome = run_project(alpha_record, tmp_path / 'a' / 'b',
                          report=fast_report)

    assert (tmp_path / 'a' / 'b' / 'Alpha').is_dir()
    assert len(outcome.artifacts) == 3

  def test_export_failure_propagates(self, tmp_path, alpha_record,
                                     fast_report):
    with mock.patch('sensitivity.run.render_heatmap',
                    side_effect=OSError('disk full')):
      with pytest.raises(OSError, match='disk full'):
        run_project(alpha_record, tmp_path, report=fast_report)
