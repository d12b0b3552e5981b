"""Domain ports for outbound telemetry concerns."""

from .crash_reporting_port import CrashReportingBackendPort
from .observer_port import AnalyticsObserver
from .telemetry_port import TelemetryBackendPort

__all__ = [
    "TelemetryBackendPort",
    "CrashReportingBackendPort",
    "AnalyticsObserver",
]
