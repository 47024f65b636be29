'''
Single-project sensitivity entrypoint.

This module runs one project end to end. It:
1. Creates the project's output folder (named after the project)
2. Builds the amortization and expense grids
3. Writes the Excel workbook
4. Renders the amortization and expense heatmaps

Usage:
  from sensitivity.domain.types import ProjectRecord
  from sensitivity.run import run_project

  record = ProjectRecord('Alpha', 1_000_000, 10_000, 500)
  outcome = run_project(record, Path('results'))
  print(outcome.artifacts)
'''

import logging
from pathlib import Path
from typing import Dict

from sensitivity.domain.types import ProjectOutcome
from sensitivity.domain.types import ProjectRecord
from sensitivity.engine.grid import run_sensitivity
from sensitivity.export.heatmap import amortization_title
from sensitivity.export.heatmap import expense_title
from sensitivity.export.heatmap import render_heatmap
from sensitivity.export.workbook import write_workbook
from sensitivity.scenarios.config import ReportConfig
from sensitivity.scenarios.config import SweepConfig

logger = logging.getLogger(__name__)


def artifact_paths(record: ProjectRecord, project_dir: Path,
                   report: ReportConfig) -> Dict[str, Path]:
  '''File names for a project's workbook and heatmaps.'''
  name = record.name
  return {
      'workbook':
          project_dir / f'{name}_sensitivity_analysis.{report.workbook_suffix}',
      'amortization':
          project_dir / f'{name}_amortization_sensitivity.{report.image_format}',
      'expense':
          project_dir / f'{name}_expense_sensitivity.{report.image_format}',
  }


def run_project(
    record: ProjectRecord,
    output_dir: Path,
    config: SweepConfig = SweepConfig(),
    report: ReportConfig = ReportConfig(),
) -> ProjectOutcome:
  '''
  Compute and export the sensitivity grids for one project.

  Args:
    record: Validated project inputs
    output_dir: Base output directory; a subfolder named after the project
      is created inside it
    config: Sweep range and step count
    report: Export settings

  Returns:
    Successful ProjectOutcome with the grids and written files

  Raises:
    OSError: If the project folder or an artifact cannot be written
    FloatingPointError: If a grid value overflows
  '''
  logger.info('Processing Project: %s', record.name)
  logger.info('  Future Capex: $%s', f'{record.future_capex:,.2f}')
  logger.info('  LOM Ounces: %s', f'{record.lom_ounces:,.2f}')
  logger.info('  Ounces Mined: %s', f'{record.ounces_mined:,.2f}')

  project_dir = Path(output_dir) / record.name
  project_dir.mkdir(parents=True, exist_ok=True)

  result = run_sensitivity(
      base_capex=record.future_capex,
      base_ounces=record.lom_ounces,
      ounces_mined=record.ounces_mined,
      config=config,
  )

  paths = artifact_paths(record, project_dir, report)
  outcome = ProjectOutcome(record=record, result=result)

  outcome.artifacts.append(write_workbook(result, record, paths['workbook']))
  outcome.artifacts.append(
      render_heatmap(result.amortization,
                     result.labels,
                     amortization_title(record),
                     paths['amortization'],
                     dpi=report.dpi))
  outcome.artifacts.append(
      render_heatmap(result.expense,
                     result.labels,
                     expense_title(record),
                     paths['expense'],
                     dpi=report.dpi))

  logger.info('  Sensitivity analysis completed for %s', record.name)
  return outcome
