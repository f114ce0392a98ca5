"""Rich rendering for the CLI."""

from .report_display import render_catalog
from .report_display import render_outcomes
from .report_display import render_report
from .report_display import render_shadowed

__all__ = ["render_catalog", "render_outcomes", "render_report", "render_shadowed"]
