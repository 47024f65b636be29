'''
Domain types for the sensitivity sweep.

These dataclasses are the typed interfaces between the input loader, the
grid engine, the exporters and the batch runner.
'''

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

ROW_AXIS_NAME = 'Future Capex'
COLUMN_AXIS_NAME = 'LOM Ounces'


@dataclass(frozen=True)
class ProjectRecord:
  '''
  One validated input row.

  Attributes:
    name: Project name, also used for the output folder and file names
    future_capex: Base future capital expenditure ($)
    lom_ounces: Base life-of-mine ounces
    ounces_mined: Ounces actually mined, used for the expected expense
    row: Spreadsheet row the record was read from (None when built in code)
  '''
  name: str
  future_capex: float
  lom_ounces: float
  ounces_mined: float
  row: Optional[int] = None

  def __post_init__(self):
    if not self.name or not str(self.name).strip():
      raise ValueError('Project name must be non-empty')


@dataclass(frozen=True)
class SensitivityResult:
  '''
  Amortization and expense grids for one project.

  Row i follows the capex variation, column j the ounce variation. Both
  matrices share `labels` on both axes. Undefined cells (zero ounces) are
  NaN in both matrices.

  Attributes:
    amortization: N x N amortization rates ($/ounce)
    expense: N x N expected expenses ($)
    labels: Percentage labels, one per sweep point
    fractions: Sweep fractions the labels were derived from
  '''
  amortization: np.ndarray
  expense: np.ndarray
  labels: Tuple[str, ...]
  fractions: np.ndarray

  def __post_init__(self):
    n = len(self.labels)
    for name in ('amortization', 'expense'):
      matrix = getattr(self, name)
      if matrix.shape != (n, n):
        raise ValueError(
            f'{name} matrix shape {matrix.shape} does not match '
            f'{n} labels')
      matrix.flags.writeable = False
    self.fractions.flags.writeable = False

  @property
  def size(self) -> int:
    return len(self.labels)

  def _table(self, matrix: np.ndarray) -> pd.DataFrame:
    df = pd.DataFrame(matrix.copy(),
                      index=list(self.labels),
                      columns=list(self.labels))
    df.index.name = ROW_AXIS_NAME
    df.columns.name = COLUMN_AXIS_NAME
    return df

  def amortization_table(self) -> pd.DataFrame:
    '''Amortization matrix as a DataFrame labelled on both axes.'''
    return self._table(self.amortization)

  def expense_table(self) -> pd.DataFrame:
    '''Expense matrix as a DataFrame labelled on both axes.'''
    return self._table(self.expense)

  def center(self) -> Tuple[float, float]:
    '''Return (amortization, expense) at the unperturbed 0% / 0% cell.'''
    mid = self.size // 2
    return float(self.amortization[mid, mid]), float(self.expense[mid, mid])


@dataclass
class ProjectOutcome:
  '''
  Result of processing one project in a batch.

  Exactly one of `result` and `error` is set.

  Attributes:
    record: The input record
    result: Sensitivity grids when the project succeeded
    error: Failure message when the project failed
    artifacts: Files written for the project, in write order
  '''
  record: ProjectRecord
  result: Optional[SensitivityResult] = None
  error: Optional[str] = None
  artifacts: List[Path] = field(default_factory=list)

  @property
  def ok(self) -> bool:
    return self.error is None
