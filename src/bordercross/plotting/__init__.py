"""
Border Crossing Plotting Package (Functional Core)

Pure plotting functions only – no file I/O, no side effects.
Every public function accepts ``BorderAnalysis`` results and returns a
``plotly.graph_objects.Figure``.

Modules:
    series: Monthly line per border, cross-border yearly comparison, and
            4-year period bars.
"""

from .series import plot_monthly, plot_periods, plot_yearly_comparison

__all__ = [
    'plot_monthly',
    'plot_periods',
    'plot_yearly_comparison',
]
