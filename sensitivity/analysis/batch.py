'''
Batch sensitivity analysis for every project in an input workbook.

This module provides tools to:
1. Read and validate project rows from an Excel workbook
2. Run the capex / LOM ounces sweep for each project in input order
3. Write a workbook and two heatmaps per project, isolating failures

Usage (CLI):
  # Explicit paths
  python -m sensitivity.analysis.batch \
    --input projects.xlsx \
    --output-dir results

  # Wider sweep, summary CSV
  python -m sensitivity.analysis.batch \
    --input projects.xlsx \
    --output-dir results \
    --variation 0.30 --steps 6 \
    --summary results/summary.csv \
    -v

  # Prompt for the input file and output folder
  python -m sensitivity.analysis.batch

Usage (Python API):
  from sensitivity.analysis.batch import run_batch
  from sensitivity.data_loader import read_projects
  from sensitivity.scenarios.config import SweepConfig

  records = read_projects(Path('projects.xlsx'))
  outcomes = run_batch(records, Path('results'), SweepConfig())
'''

import argparse
import logging
from pathlib import Path
import sys
import traceback
from typing import List, Optional, Sequence

import pandas as pd

from sensitivity.data_loader import read_projects
from sensitivity.domain.types import ProjectOutcome
from sensitivity.domain.types import ProjectRecord
from sensitivity.errors import InputValidationError
from sensitivity.prompts import get_file_path
from sensitivity.prompts import get_save_path
from sensitivity.run import run_project
from sensitivity.scenarios.config import ReportConfig
from sensitivity.scenarios.config import SweepConfig

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_PROJECT_FAILURES = 2


def run_batch(
    records: Sequence[ProjectRecord],
    output_dir: Path,
    config: SweepConfig = SweepConfig(),
    report: ReportConfig = ReportConfig(),
) -> List[ProjectOutcome]:
  '''
  Run the sensitivity sweep for each project, in order.

  Each record gets exactly one attempt. A failure in one project (overflow,
  folder creation, export I/O) is logged with the project name and does not
  stop the remaining projects.

  Args:
    records: Validated project records
    output_dir: Base output directory
    config: Sweep range and step count
    report: Export settings

  Returns:
    One ProjectOutcome per record, in input order
  '''
  outcomes: List[ProjectOutcome] = []
  logger.info('Processing %d projects...', len(records))

  for i, record in enumerate(records, 1):
    logger.info('')
    logger.info('[%d/%d] %s', i, len(records), record.name)

    try:
      outcome = run_project(record, output_dir, config=config, report=report)
    except Exception as e:  # pylint: disable=broad-except
      logger.warning('Error processing project %s: %s', record.name, str(e))
      logger.debug('%s', traceback.format_exc())
      outcome = ProjectOutcome(record=record, error=f'{type(e).__name__}: {e}')

    outcomes.append(outcome)

  return outcomes


def summarize(outcomes: Sequence[ProjectOutcome]) -> pd.DataFrame:
  '''
  Flatten batch outcomes into one row per project.

  Columns: project, row, status, error, center_amortization,
  center_expense, n_artifacts.
  '''
  rows = []
  for outcome in outcomes:
    center_amort, center_expense = (outcome.result.center()
                                    if outcome.result is not None else
                                    (float('nan'), float('nan')))
    rows.append({
        'project': outcome.record.name,
        'row': outcome.record.row,
        'status': 'ok' if outcome.ok else 'failed',
        'error': outcome.error,
        'center_amortization': center_amort,
        'center_expense': center_expense,
        'n_artifacts': len(outcome.artifacts),
    })
  return pd.DataFrame(rows,
                      columns=[
                          'project', 'row', 'status', 'error',
                          'center_amortization', 'center_expense',
                          'n_artifacts'
                      ])


def _print_summary(df: pd.DataFrame) -> None:
  '''Log a summary block for a finished batch.'''
  failed = df[df['status'] == 'failed']

  logger.info('')
  logger.info('=' * 70)
  logger.info('Batch Summary')
  logger.info('=' * 70)
  logger.info('Projects processed: %d', len(df))
  logger.info('Succeeded: %d', len(df) - len(failed))
  logger.info('Failed: %d', len(failed))

  for _, row in failed.iterrows():
    logger.info('  %s: %s', row['project'], row['error'])

  logger.info('=' * 70)


def _sweep_config(args: argparse.Namespace) -> SweepConfig:
  '''Build the sweep config from --config, then flag overrides.'''
  config = (SweepConfig.from_file(args.config)
            if args.config is not None else SweepConfig())
  overrides = config.to_dict()
  if args.variation is not None:
    overrides['variation'] = args.variation
  if args.steps is not None:
    overrides['steps'] = args.steps
  return SweepConfig.from_dict(overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
  '''CLI entrypoint for batch sensitivity analysis.'''
  parser = argparse.ArgumentParser(
      description=('Batch sensitivity analysis for amortization rate and '
                   'expected expenses'),
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog=__doc__,
  )

  parser.add_argument('--input',
                      type=Path,
                      help='Input Excel file (prompted for when omitted)')

  parser.add_argument('--output-dir',
                      type=Path,
                      help='Folder for results (prompted for when omitted)')

  parser.add_argument('--config',
                      type=Path,
                      help='JSON file with sweep settings (variation, steps)')

  parser.add_argument('--variation',
                      type=float,
                      help='Sweep half-width as a fraction (default: 0.20)')

  parser.add_argument('--steps',
                      type=int,
                      help='Sweep points on each side of zero (default: 5)')

  parser.add_argument('--image-format',
                      type=str,
                      default='png',
                      help='Heatmap image format (default: png)')

  parser.add_argument('--dpi',
                      type=int,
                      default=300,
                      help='Heatmap resolution (default: 300)')

  parser.add_argument('--summary',
                      type=Path,
                      help='Optional CSV file for the batch summary')

  parser.add_argument('-v',
                      '--verbose',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args(argv)

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  try:
    config = _sweep_config(args)
    report = ReportConfig(image_format=args.image_format, dpi=args.dpi)
  except (OSError, ValueError) as e:
    logger.error('Invalid configuration: %s', e)
    return EXIT_INPUT_ERROR

  print('Batch Sensitivity Analysis for Amortization Rate and Expected Expenses')
  print('-' * 68)

  input_path = args.input
  if input_path is None:
    input_path = get_file_path('Enter the path to your input Excel file: ')
    if input_path is None:
      print('Operation cancelled.')
      return EXIT_INPUT_ERROR

  try:
    records = read_projects(input_path)
  except (InputValidationError, OSError) as e:
    logger.error('%s', e)
    return EXIT_INPUT_ERROR

  output_dir = args.output_dir
  if output_dir is None:
    output_dir = get_save_path()

  logger.info('Sweep: +/-%.0f%% in %d steps per side', config.variation * 100,
              config.steps)

  outcomes = run_batch(records, output_dir, config=config, report=report)
  summary = summarize(outcomes)

  if args.summary:
    args.summary.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(args.summary, index=False)
    logger.info('Saved summary to %s', args.summary)

  _print_summary(summary)
  logger.info('Batch processing completed!')

  if all(o.ok for o in outcomes):
    return EXIT_OK
  return EXIT_PROJECT_FAILURES


if __name__ == '__main__':
  sys.exit(main())
