"""Crash domain - crash report model, severity and category."""

from .report import (
    CrashReport,
    category_for_context,
    category_for_exception,
    format_stack_trace,
    severity_for_exception,
)
from .value_objects import CrashCategory, CrashSeverity

__all__: list[str] = [
    "CrashReport",
    "CrashSeverity",
    "CrashCategory",
    "format_stack_trace",
    "severity_for_exception",
    "category_for_exception",
    "category_for_context",
]
