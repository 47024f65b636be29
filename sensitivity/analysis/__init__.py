'''
Batch analysis built on the sensitivity engine.

Note: To avoid RuntimeWarning when using -m flag, import directly:
  from sensitivity.analysis.batch import run_batch
'''
