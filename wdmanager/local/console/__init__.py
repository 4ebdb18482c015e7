"""
This module initializes the console package, exposing the functions that
print artifact status and update summaries.
"""

from .handler import display_status, display_results

__all__ = ["display_status", "display_results"]
