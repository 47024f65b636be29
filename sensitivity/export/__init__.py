'''Writers for the per-project workbook and heatmap images.'''

from sensitivity.export.heatmap import amortization_title
from sensitivity.export.heatmap import expense_title
from sensitivity.export.heatmap import render_heatmap
from sensitivity.export.workbook import write_workbook

__all__ = [
    'amortization_title',
    'expense_title',
    'render_heatmap',
    'write_workbook',
]
