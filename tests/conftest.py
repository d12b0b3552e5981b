import pytest
from unittest.mock import AsyncMock, Mock

from pattern_telemetry.domain.analytics.event_types import AnalyticsEventType
from pattern_telemetry.domain.analytics.events import AnalyticsEvent
from pattern_telemetry.domain.base.ports import CrashReportingBackendPort, TelemetryBackendPort
from pattern_telemetry.infrastructure.backends import (
    InMemoryCrashReportingBackend,
    InMemoryTelemetryBackend,
)
from pattern_telemetry.infrastructure.events.publisher import ObserverBus
from pattern_telemetry.infrastructure.strategies.registration import (
    create_default_strategy_registry,
)


@pytest.fixture
def telemetry_backend():
    """In-memory telemetry backend recording sent events."""
    return InMemoryTelemetryBackend()


@pytest.fixture
def crash_backend():
    """In-memory crash backend recording reports."""
    return InMemoryCrashReportingBackend()


@pytest.fixture
def mock_telemetry_backend():
    backend = Mock(spec=TelemetryBackendPort)
    backend.log_event = AsyncMock(return_value=True)
    backend.set_user_id = AsyncMock()
    backend.set_user_property = AsyncMock()
    backend.reset_analytics_data = AsyncMock()
    return backend


@pytest.fixture
def mock_crash_backend():
    backend = Mock(spec=CrashReportingBackendPort)
    backend.record_error = AsyncMock(return_value=True)
    backend.log = AsyncMock()
    backend.set_custom_key = AsyncMock()
    backend.set_user_identifier = AsyncMock()
    backend.send_unsent_reports = AsyncMock()
    return backend


@pytest.fixture
def strategy_registry():
    return create_default_strategy_registry()


@pytest.fixture
def observer_bus():
    return ObserverBus()


@pytest.fixture
def pattern_event():
    """Pattern learning event with an out-of-range learning time."""
    return AnalyticsEvent(
        name="pattern_learned",
        event_type=AnalyticsEventType.PATTERN_LEARNING,
        parameters={
            "pattern_name": "Observer",
            "pattern_category": "behavioral",
            "completed": True,
            "time_spent_seconds": 9999,
        },
    )
