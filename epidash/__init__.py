"""School disease simulation dashboard (epidash) package.

Modules:
  paths: data directory configuration & scenario file discovery
  catalog: result-set identifiers -> scenario descriptors
  data: concurrent CSV loading into a per-scenario row store
  selection: intervention parameters & mutual-exclusivity controller
  resolve: parameter selections -> scenario key
  columns: column naming convention of the simulation exports
  series: chart-ready series & summary statistics
  plots: interactive Plotly figures
"""

from . import paths, catalog, columns, data, selection, resolve, series, plots  # noqa: F401

__all__ = [
    "paths",
    "catalog",
    "columns",
    "data",
    "selection",
    "resolve",
    "series",
    "plots",
]
