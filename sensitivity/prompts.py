"""
Interactive prompts for the input workbook and the output folder.

Used by the batch CLI when --input or --output-dir is not given.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def get_file_path(prompt: str,
                  input_fn: Optional[InputFn] = None) -> Optional[Path]:
  """
  Ask for an existing file until one is given.

  Args:
    prompt: Text shown to the user
    input_fn: Line reader (defaults to builtin input)

  Returns:
    Path to the file, or None if the user entered an empty line
  """
  input_fn = input_fn or input
  while True:
    answer = input_fn(prompt).strip()
    if not answer:
      return None

    path = Path(answer)
    if path.exists():
      return path
    print(f"Error: File '{answer}' does not exist.")


def get_save_path(input_fn: Optional[InputFn] = None) -> Path:
  """
  Ask for the folder to save results in.

  An empty answer selects the current directory. A missing folder is
  created after confirmation.

  Args:
    input_fn: Line reader (defaults to builtin input)

  Returns:
    Path to an existing directory
  """
  input_fn = input_fn or input
  while True:
    answer = input_fn('\nEnter the folder path to save results '
                      '(or press Enter to use current directory): ').strip()
    if not answer:
      return Path.cwd()

    save_dir = Path(answer)
    if save_dir.is_dir():
      return save_dir

    create = input_fn(
        f"Directory '{answer}' doesn't exist. Create it? (y/n): ").strip()
    if create.lower() != 'y':
      print('Please enter a valid directory path.')
      continue

    try:
      save_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
      print(f'Error creating directory: {e}')
      continue

    logger.info('Created directory: %s', save_dir)
    return save_dir
