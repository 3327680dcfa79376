# File: helpers/__init__.py
"""View helpers for the homework progress engine.

Submodules:
    - report_helpers: List filters, timeline, analytics, export rows and
      JSON-ready serialization of a ProgressReport

Usage:
    from .helpers import report_helpers
    from .helpers.report_helpers import build_timeline
"""

from . import report_helpers

__all__ = ["report_helpers"]
