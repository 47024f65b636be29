'''
Amortization sensitivity sweep for mining projects.

For every project in an input workbook, future capex and life-of-mine (LOM)
ounces are perturbed over a symmetric percentage range. Each combination
yields an amortization rate ($/ounce) and an expected expense for the
ounces mined, reported as an Excel workbook and two heatmaps per project.

Usage:
  from sensitivity.engine.grid import run_sensitivity
  from sensitivity.scenarios.config import SweepConfig

  result = run_sensitivity(
    base_capex=1_000_000,
    base_ounces=10_000,
    ounces_mined=500,
    config=SweepConfig(variation=0.20, steps=5),
  )
  print(result.amortization_table())
'''
