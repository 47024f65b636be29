"""
Sweep configuration for sensitivity runs.

SweepConfig and ReportConfig are serializable (JSON-friendly) values passed
explicitly into the engine and the exporters, so a run can be reproduced from
the saved configuration alone.
"""

from dataclasses import asdict
from dataclasses import dataclass
import json
import math
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SweepConfig:
  """
  Perturbation range applied to both capex and LOM ounces.

  Attributes:
    variation: Half-width of the sweep as a fraction (0.20 = +/-20%)
    steps: Number of points on each side of zero; the grid has
      2 * steps + 1 points per axis
  """
  variation: float = 0.20
  steps: int = 5

  def __post_init__(self):
    if isinstance(self.steps, bool) or not isinstance(self.steps, int):
      raise ValueError(f'steps must be an integer, got {self.steps!r}')
    if self.steps < 0:
      raise ValueError(f'steps must be >= 0, got {self.steps}')
    if not math.isfinite(self.variation) or self.variation < 0:
      raise ValueError(
          f'variation must be a finite value >= 0, got {self.variation}')

  @property
  def n_points(self) -> int:
    """Number of sweep points per axis."""
    return self.steps * 2 + 1

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'SweepConfig':
    """Create from dictionary, ignoring keys that are not sweep fields."""
    known = {k: data[k] for k in ('variation', 'steps') if k in data}
    if 'variation' in known:
      known['variation'] = float(known['variation'])
    return cls(**known)

  @classmethod
  def from_json(cls, json_str: str) -> 'SweepConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))

  @classmethod
  def from_file(cls, path: Path) -> 'SweepConfig':
    """Load from a JSON file."""
    return cls.from_json(Path(path).read_text(encoding='utf-8'))


@dataclass(frozen=True)
class ReportConfig:
  """
  Settings for the per-project export artifacts.

  Attributes:
    image_format: Heatmap file extension understood by matplotlib
    dpi: Heatmap resolution
    workbook_suffix: Spreadsheet file extension
  """
  image_format: str = 'png'
  dpi: int = 300
  workbook_suffix: str = 'xlsx'

  def __post_init__(self):
    if self.dpi <= 0:
      raise ValueError(f'dpi must be > 0, got {self.dpi}')

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)
