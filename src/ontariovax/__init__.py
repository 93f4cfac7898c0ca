"""
Ontariovax: COVID-19 outcomes by vaccination status.

This package joins Ontario's daily cases and hospitalization datasets by
date, re-expresses hospitalizations per 100,000 of each vaccination
cohort, and exports day reports, a navigation index and chart series.
"""

from importlib.metadata import version

__version__ = version("ontariovax")

__all__ = ["__version__"]
