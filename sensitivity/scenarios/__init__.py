'''Sweep and report configuration.'''

from sensitivity.scenarios.config import ReportConfig
from sensitivity.scenarios.config import SweepConfig

__all__ = ['ReportConfig', 'SweepConfig']
