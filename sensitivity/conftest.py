from pathlib import Path

import pandas as pd
import pytest

from sensitivity.domain.types import ProjectRecord
from sensitivity.scenarios.config import ReportConfig


def write_input_workbook(path: Path, rows: list[dict]) -> Path:
  """Helper to write an input workbook with the given project rows."""
  columns = ['Project', 'Future_Capex', 'LOM_Ounces', 'Ounces_Mined']
  pd.DataFrame(rows, columns=columns).to_excel(path, index=False)
  return path


@pytest.fixture
def alpha_record() -> ProjectRecord:
  """Project whose unperturbed rate is $100/oz and expense $50,000."""
  return ProjectRecord(name='Alpha',
                       future_capex=1_000_000.0,
                       lom_ounces=10_000.0,
                       ounces_mined=500.0,
                       row=2)


@pytest.fixture
def beta_record() -> ProjectRecord:
  return ProjectRecord(name='Beta',
                       future_capex=2_500_000.0,
                       lom_ounces=50_000.0,
                       ounces_mined=12_345.0,
                       row=3)


@pytest.fixture
def fast_report() -> ReportConfig:
  """Low-resolution images to keep rendering quick."""
  return ReportConfig(dpi=20)


@pytest.fixture
def projects_xlsx(tmp_path: Path) -> Path:
  """Input workbook with two valid projects."""
  return write_input_workbook(tmp_path / 'projects.xlsx', [
      {
          'Project': 'Alpha',
          'Future_Capex': 1_000_000,
          'LOM_Ounces': 10_000,
          'Ounces_Mined': 500,
      },
      {
          'Project': 'Beta',
          'Future_Capex': 2_500_000,
          'LOM_Ounces': 50_000,
          'Ounces_Mined': 12_345,
      },
  ])


@pytest.fixture
def input_workbook():
  """Factory fixture: input_workbook(path, rows) writes an input file."""
  return write_input_workbook
