"""
grid/
-----
Core data layer.  Public API:

    from grid import Cell, GridModel, ResultSummary
"""

from grid.cell   import Cell
from grid.model  import GridModel
from grid.result import ResultSummary

__all__ = [
    "Cell",
    "GridModel",
    "ResultSummary",
]
