"""
Border Crossing Reports Package (Imperative Shell)

Orchestrates analysis, plot generation, and HTML/CSV output.
No analysis logic lives here. This package calls the functional core
(src/bordercross/analysis/) and plotting (src/bordercross/plotting/).

Modules:
    generators: ReportGenerator class and generate_reports() convenience
                function for producing the chart and table files.
"""

from .generators import (
    ReportGenerator,
    generate_reports,
    summary_table,
)

__all__ = [
    'ReportGenerator',
    'generate_reports',
    'summary_table',
]
