"""Domain types for the sensitivity sweep."""

from sensitivity.domain.types import ProjectOutcome
from sensitivity.domain.types import ProjectRecord
from sensitivity.domain.types import SensitivityResult

__all__ = [
    'ProjectOutcome',
    'ProjectRecord',
    'SensitivityResult',
]
