'''
Annotated heatmaps of the sensitivity grids.

Rows follow the capex variation (y axis), columns the LOM ounce variation
(x axis). Undefined cells are masked and annotated as "NaN".
'''

import logging
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap
import numpy as np
import seaborn as sns

from sensitivity.domain.types import ProjectRecord

logger = logging.getLogger(__name__)

X_LABEL = 'LOM Ounces Variation'
Y_LABEL = 'Future Capex Variation'
FIGSIZE = (12, 10)

CMAP = LinearSegmentedColormap.from_list('yellow_steelblue',
                                         ['lightyellow', 'steelblue'])
UNDEFINED_COLOR = '#E0E0E0'


def amortization_title(record: ProjectRecord) -> str:
  return f'Amortization Rate Sensitivity Analysis: {record.name} ($/ounce)'


def expense_title(record: ProjectRecord) -> str:
  return (f'Expected Expense Sensitivity: {record.name} '
          f'({record.ounces_mined:,.0f} Ounces Mined)')


def _annotations(matrix: np.ndarray) -> np.ndarray:
  '''Cell text: two decimals, "NaN" for undefined cells.'''
  return np.array([['NaN' if np.isnan(v) else f'{v:.2f}' for v in row]
                   for row in matrix])


def render_heatmap(
    matrix: np.ndarray,
    labels: Sequence[str],
    title: str,
    path: Path,
    dpi: int = 300,
) -> Path:
  '''
  Render one grid as an annotated heatmap image.

  Annotation text is white on cells above the mean of the defined cells
  and black elsewhere.

  Args:
    matrix: N x N grid (row = capex variation, column = ounce variation)
    labels: Axis labels shared by rows and columns
    title: Figure title
    path: Output image path; the suffix selects the format
    dpi: Image resolution

  Returns:
    The written path
  '''
  matrix = np.asarray(matrix, dtype=float)
  undefined = np.isnan(matrix)
  mean = float(np.nanmean(matrix)) if not undefined.all() else np.nan
  annotations = _annotations(matrix)
  # seaborn cannot derive a colour range from a fully masked grid
  color_range = {'vmin': 0.0, 'vmax': 1.0} if undefined.all() else {}

  fig, ax = plt.subplots(figsize=FIGSIZE)
  try:
    ax.set_facecolor(UNDEFINED_COLOR)
    sns.heatmap(
        matrix,
        mask=undefined,
        cmap=CMAP,
        annot=False,
        cbar=not undefined.all(),
        xticklabels=list(labels),
        yticklabels=list(labels),
        linewidths=0.5,
        linecolor='white',
        ax=ax,
        **color_range,
    )

    n_rows, n_cols = matrix.shape
    for i in range(n_rows):
      for j in range(n_cols):
        value = matrix[i, j]
        dark_cell = not undefined[i, j] and value > mean
        ax.text(j + 0.5,
                i + 0.5,
                annotations[i, j],
                ha='center',
                va='center',
                fontsize=9,
                color='white' if dark_cell else 'black')

    ax.set_title(title)
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
    plt.setp(ax.get_yticklabels(), rotation=0)

    fig.tight_layout()
    path = Path(path)
    fig.savefig(path, dpi=dpi)
  finally:
    plt.close(fig)

  logger.info('  Heatmap saved to: %s', path)
  return path
