"""
Project input loader.

Reads project rows from the first worksheet of an Excel workbook (header on
row 1) and turns them into validated ProjectRecords.

Usage:
  records = read_projects(Path('projects.xlsx'))
  for record in records:
    print(record.name, record.future_capex)
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from sensitivity.domain.types import ProjectRecord
from sensitivity.errors import InputValidationError
from sensitivity.errors import NoValidRowsError

logger = logging.getLogger(__name__)

PROJECT_COLUMN = 'Project'
NUMERIC_COLUMNS = ('Future_Capex', 'LOM_Ounces', 'Ounces_Mined')
REQUIRED_COLUMNS = (PROJECT_COLUMN,) + NUMERIC_COLUMNS

# Data starts on spreadsheet row 2 (row 1 is the header).
_FIRST_DATA_ROW = 2


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
  """
  Check that every required column is present.

  Raises:
    InputValidationError: Naming the missing columns
  """
  missing = [c for c in cols if c not in df.columns]
  if missing:
    raise InputValidationError(
        f'Missing required columns in the Excel file: {", ".join(missing)}. '
        f'Expected columns: {", ".join(REQUIRED_COLUMNS)}')


def _project_name(value) -> Optional[str]:
  '''Return the stripped project name, or None when blank.'''
  if value is None or pd.isna(value):
    return None
  name = str(value).strip()
  return name or None


def records_from_frame(df: pd.DataFrame) -> List[ProjectRecord]:
  """
  Validate rows of an input DataFrame and build ProjectRecords.

  Rows with a missing or non-numeric value in a numeric column, or with a
  blank project name, are skipped with a warning. Row order is preserved.

  Args:
    df: Raw input table with the required columns

  Returns:
    List of ProjectRecords, one per surviving row

  Raises:
    InputValidationError: If required columns are missing
    NoValidRowsError: If no row survives validation
  """
  df = df.rename(columns=lambda c: str(c).strip())
  require_columns(df, REQUIRED_COLUMNS)

  numeric = df.loc[:, list(NUMERIC_COLUMNS)].apply(pd.to_numeric,
                                                   errors='coerce')

  records: List[ProjectRecord] = []
  for pos in range(len(df)):
    row_number = pos + _FIRST_DATA_ROW
    values = numeric.iloc[pos]

    if values.isna().any():
      bad = [c for c in NUMERIC_COLUMNS if pd.isna(values[c])]
      logger.warning(
          'Row %d contains invalid numeric data (%s). Skipping this project.',
          row_number, ', '.join(bad))
      continue

    name = _project_name(df[PROJECT_COLUMN].iloc[pos])
    if name is None:
      logger.warning('Row %d is missing a project name. Skipping this project.',
                     row_number)
      continue

    records.append(
        ProjectRecord(
            name=name,
            future_capex=float(values['Future_Capex']),
            lom_ounces=float(values['LOM_Ounces']),
            ounces_mined=float(values['Ounces_Mined']),
            row=row_number,
        ))

  if not records:
    raise NoValidRowsError('No valid data rows found after cleaning.')

  logger.debug('Validated %d of %d rows', len(records), len(df))
  return records


def read_projects(path: Path) -> List[ProjectRecord]:
  """
  Read and validate projects from the first worksheet of a workbook.

  Args:
    path: Path to the input .xlsx file

  Returns:
    List of ProjectRecords in input row order

  Raises:
    FileNotFoundError: If the workbook does not exist
    InputValidationError: If required columns are missing
    NoValidRowsError: If no row survives validation
  """
  path = Path(path)
  if not path.exists():
    raise FileNotFoundError(f'Input file not found: {path}')

  logger.info('Reading projects from: %s', path)
  df = pd.read_excel(path, sheet_name=0, engine='openpyxl')
  return records_from_frame(df)
