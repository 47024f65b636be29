"""Exceptions raised while reading and validating project input."""


class InputValidationError(ValueError):
  """Input workbook cannot be used (e.g. required columns are missing)."""


class NoValidRowsError(InputValidationError):
  """Every data row was skipped during validation."""
