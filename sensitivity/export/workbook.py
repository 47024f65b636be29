"""
Excel workbook writer for one project's sensitivity grids.

Sheets:
  Amortization Rates: capex variation down, ounce variation across
  Expected Expenses: same layout as the amortization sheet
  Input Summary: the four inputs of the project
"""

import logging
import math
from pathlib import Path
from typing import Sequence

import numpy as np
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from sensitivity.domain.types import ProjectRecord
from sensitivity.domain.types import SensitivityResult

logger = logging.getLogger(__name__)

AMORTIZATION_SHEET = 'Amortization Rates'
EXPENSE_SHEET = 'Expected Expenses'
SUMMARY_SHEET = 'Input Summary'
CORNER_HEADER = 'Future Capex / LOM Ounces'

GRID_NUMBER_FORMAT = '0.00'
SUMMARY_NUMBER_FORMAT = '#,##0.00'

LIGHT_GREY = 'D3D3D3'
header_fill = PatternFill(start_color=LIGHT_GREY,
                          end_color=LIGHT_GREY,
                          fill_type='solid')
header_font = Font(bold=True)


def _style_header(ws: Worksheet, row: int, column: int) -> None:
  cell = ws.cell(row=row, column=column)
  cell.font = header_font
  cell.fill = header_fill


def _fit_columns(ws: Worksheet, min_width: int = 10) -> None:
  '''Widen each column to its longest rendered value.'''
  for column_cells in ws.columns:
    longest = max(
        (len(str(c.value)) for c in column_cells if c.value is not None),
        default=0,
    )
    letter = get_column_letter(column_cells[0].column)
    ws.column_dimensions[letter].width = max(min_width, longest + 2)


def _write_grid(ws: Worksheet, matrix: np.ndarray,
                labels: Sequence[str]) -> None:
  '''
  Write a labelled N x N grid starting at A1.

  Undefined (NaN) cells are left blank.
  '''
  ws.cell(row=1, column=1, value=CORNER_HEADER)
  _style_header(ws, 1, 1)

  for k, label in enumerate(labels):
    ws.cell(row=1, column=k + 2, value=label)
    _style_header(ws, 1, k + 2)
    ws.cell(row=k + 2, column=1, value=label)
    _style_header(ws, k + 2, 1)

  for i in range(len(labels)):
    for j in range(len(labels)):
      value = float(matrix[i, j])
      cell = ws.cell(row=i + 2, column=j + 2)
      cell.value = None if math.isnan(value) else value
      cell.number_format = GRID_NUMBER_FORMAT

  ws.freeze_panes = 'B2'
  _fit_columns(ws)


def _write_summary(ws: Worksheet, record: ProjectRecord) -> None:
  ws.cell(row=1, column=1, value='Parameter')
  ws.cell(row=1, column=2, value='Value')
  _style_header(ws, 1, 1)
  _style_header(ws, 1, 2)

  ws.cell(row=2, column=1, value='Project')
  ws.cell(row=2, column=2, value=record.name)

  rows = [
      ('Future Capex', record.future_capex),
      ('LOM Ounces', record.lom_ounces),
      ('Ounces Mined', record.ounces_mined),
  ]
  for offset, (label, value) in enumerate(rows, start=3):
    ws.cell(row=offset, column=1, value=label)
    cell = ws.cell(row=offset, column=2, value=value)
    cell.number_format = SUMMARY_NUMBER_FORMAT

  _fit_columns(ws)


def write_workbook(result: SensitivityResult, record: ProjectRecord,
                   path: Path) -> Path:
  """
  Write the amortization, expense and input summary sheets to `path`.

  Args:
    result: Sensitivity grids for the project
    record: Project inputs, written to the summary sheet
    path: Destination .xlsx file (parent directory must exist)

  Returns:
    The written path
  """
  wb = Workbook()
  amort_ws = wb.active
  amort_ws.title = AMORTIZATION_SHEET
  _write_grid(amort_ws, result.amortization, result.labels)

  _write_grid(wb.create_sheet(EXPENSE_SHEET), result.expense, result.labels)
  _write_summary(wb.create_sheet(SUMMARY_SHEET), record)

  path = Path(path)
  wb.save(path)
  logger.info('  Excel results saved to: %s', path)
  return path
