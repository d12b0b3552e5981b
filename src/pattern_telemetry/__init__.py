"""Pattern Telemetry - Root Package.

This package provides the analytics and crash-reporting pipeline used by the
Design Patterns Tower Defense learning application. Events and crash reports
are processed in-process and handed to opaque telemetry backends.

Key Components:
    - domain: Event and crash report models, exceptions and backend ports
    - application: Analytics and crash reporting services
    - infrastructure: Strategies, observer bus, handler chain, backends, logging
    - config: Typed configuration schemas, loader and manager

Architecture:
    The pipeline follows the same layered separation as the rest of the
    application: the domain layer has no dependency on infrastructure, and
    every collaborator is constructed by the composition root in
    ``pattern_telemetry.bootstrap`` rather than reached through globals.
"""

from ._version import __version__

__author__ = "Design Patterns Tower Defense Team"
__package_name__ = "pattern-telemetry"

"""
Usage:
    >>> from pattern_telemetry.bootstrap import TelemetryPipeline
    >>> pipeline = TelemetryPipeline.from_config()
    >>> await pipeline.analytics.publish(AnalyticsEvent.pattern_learned(...))
"""
