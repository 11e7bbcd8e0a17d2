"""
Border Crossing Analysis

Descriptive statistics and charts for monthly US land-border crossing counts,
following the Functional Core, Imperative Shell architecture.

Structure:
- analysis/ : Functional Core (pure filtering and aggregation)
- data/     : Imperative Shell (download, CSV reading)
- plotting/ : plotly figure builders
- reports/  : HTML/CSV report output
"""

__version__ = "0.1.0"
