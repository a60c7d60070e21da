"""
Analysis Module

Visualization and reporting for the Venice listings report

Modules:
- visualization: Reusable chart and map utilities
- reports: The narrative report (figures, maps, markdown)
"""

__version__ = "1.0.0"
