"""Crash reporting application service."""

from .service import CrashReportingService

__all__ = ["CrashReportingService"]
