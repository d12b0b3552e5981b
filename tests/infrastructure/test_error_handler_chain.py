"""Tests for the error handler chain and the concrete handlers."""

from unittest.mock import AsyncMock, Mock

import pytest

from pattern_telemetry.domain.crash import CrashCategory, CrashReport, CrashSeverity
from pattern_telemetry.infrastructure.error import (
    DEFAULT_HANDLER_NAME,
    CriticalErrorHandler,
    EducationalContentErrorHandler,
    ErrorHandler,
    ErrorHandlerChain,
    GameLogicErrorHandler,
    GeneralErrorHandler,
    NetworkErrorHandler,
    UIErrorHandler,
    create_minimal_chain,
    create_standard_chain,
)


def _handler(name, matches=True):
    handler = Mock(spec=ErrorHandler)
    handler.name = name
    handler.can_handle.return_value = matches
    handler.handle_error = AsyncMock()
    return handler


def _report(**kwargs):
    return CrashReport(exception=ValueError("boom"), **kwargs)


class TestErrorHandlerChain:
    """Test routing through the chain."""

    @pytest.mark.asyncio
    async def test_first_matching_handler_only(self, mock_crash_backend):
        """Test that at most one handler receives a report."""
        first = _handler("first", matches=False)
        second = _handler("second")
        third = _handler("third")
        chain = ErrorHandlerChain(mock_crash_backend).add_handler(first).add_handler(second).add_handler(third)

        report = _report()
        assert await chain.handle(report) == "second"

        second.handle_error.assert_awaited_once_with(report)
        first.handle_error.assert_not_awaited()
        third.handle_error.assert_not_awaited()
        third.can_handle.assert_not_called()
        mock_crash_backend.record_error.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_default_handler_when_nothing_matches(self, mock_crash_backend):
        """Test that the built-in default forwards to the backend."""
        chain = ErrorHandlerChain(mock_crash_backend).add_handler(_handler("never", matches=False))

        assert await chain.handle(_report()) == DEFAULT_HANDLER_NAME
        mock_crash_backend.record_error.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_chain_uses_default(self, crash_backend):
        chain = ErrorHandlerChain(crash_backend)
        assert await chain.handle(_report()) == DEFAULT_HANDLER_NAME
        assert len(crash_backend.errors) == 1

    @pytest.mark.asyncio
    async def test_raising_predicate_counts_as_no_match(self, mock_crash_backend):
        broken = _handler("broken")
        broken.can_handle.side_effect = RuntimeError("predicate failed")
        fallback = _handler("fallback")
        chain = ErrorHandlerChain(mock_crash_backend).add_handler(broken).add_handler(fallback)

        assert await chain.handle(_report()) == "fallback"

    @pytest.mark.asyncio
    async def test_failing_handler_is_swallowed(self, mock_crash_backend):
        """Test that a handler exception does not escape and does not fall through."""
        failing = _handler("failing")
        failing.handle_error.side_effect = RuntimeError("handler failed")
        after = _handler("after")
        chain = ErrorHandlerChain(mock_crash_backend).add_handler(failing).add_handler(after)

        assert await chain.handle(_report()) == "failing"
        after.handle_error.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_default_handler_backend_failure_swallowed(self, mock_crash_backend):
        mock_crash_backend.record_error.side_effect = ConnectionError("offline")
        chain = ErrorHandlerChain(mock_crash_backend)
        assert await chain.handle(_report()) == DEFAULT_HANDLER_NAME

    def test_add_handler_is_fluent(self, mock_crash_backend):
        chain = ErrorHandlerChain(mock_crash_backend)
        assert chain.add_handler(_handler("a")) is chain
        assert chain.handler_count == 1
        chain.clear()
        assert chain.handlers == ()


class TestChainFactories:
    """Test preconfigured chains."""

    def test_standard_chain_order(self, crash_backend):
        chain = create_standard_chain(crash_backend)
        assert [h.name for h in chain.handlers] == [
            "CriticalErrorHandler",
            "GameLogicErrorHandler",
            "EducationalContentErrorHandler",
            "UIErrorHandler",
            "NetworkErrorHandler",
            "GeneralErrorHandler",
        ]

    def test_minimal_chain_order(self, crash_backend):
        chain = create_minimal_chain(crash_backend)
        assert [h.name for h in chain.handlers] == ["CriticalErrorHandler", "GeneralErrorHandler"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "report, expected",
        [
            (CrashReport.from_unhandled(RuntimeError("x")), "CriticalErrorHandler"),
            (CrashReport.game_logic_error("spawn", ValueError("x")), "GameLogicErrorHandler"),
            (CrashReport.pattern_learning_error("Observer", ValueError("x")), "EducationalContentErrorHandler"),
            (CrashReport.ui_rendering_error("Card", ValueError("x")), "UIErrorHandler"),
            (CrashReport.network_error("/api", ConnectionError()), "NetworkErrorHandler"),
            (CrashReport.from_exception(KeyError("x")), "GeneralErrorHandler"),
        ],
    )
    async def test_standard_chain_routing(self, crash_backend, report, expected):
        """Test that each kind of report reaches its handler and never the default."""
        chain = create_standard_chain(crash_backend)
        assert await chain.handle(report) == expected
        assert len(crash_backend.errors) == 1


class TestHandlers:
    """Test what the concrete handlers send to the backend."""

    @pytest.mark.asyncio
    async def test_critical_handler_is_fatal_and_flushes(self, crash_backend):
        handler = CriticalErrorHandler(crash_backend)
        report = _report(severity=CrashSeverity.CRITICAL, reason="out of memory")

        assert handler.can_handle(report)
        await handler.handle_error(report)

        recorded = crash_backend.errors[0]
        assert recorded["fatal"] is True
        assert recorded["reason"] == "CRITICAL: out of memory"
        assert recorded["context"]["handler"] == "CriticalErrorHandler"
        assert crash_backend.custom_keys["immediate_attention"] is True
        assert crash_backend.flush_count == 1

    @pytest.mark.asyncio
    async def test_game_logic_handler_limits_state_keys(self, crash_backend):
        state = {f"key{i}": i for i in range(8)}
        report = CrashReport.game_logic_error("spawn_wave", ValueError("x"), game_state=state)
        await GameLogicErrorHandler(crash_backend).handle_error(report)

        game_keys = [k for k in crash_backend.custom_keys if k.startswith("game_key")]
        assert game_keys == [f"game_key{i}" for i in range(5)]
        assert crash_backend.custom_keys["game_state_available"] is True

    @pytest.mark.asyncio
    async def test_educational_handler_matches_context(self, crash_backend):
        report = _report(category=CrashCategory.RUNTIME, context={"pattern_name": "Observer"})
        handler = EducationalContentErrorHandler(crash_backend)
        assert handler.can_handle(report)

        await handler.handle_error(report)
        assert crash_backend.errors[0]["fatal"] is False
        assert crash_backend.custom_keys["pattern_name"] == "Observer"

    @pytest.mark.asyncio
    async def test_ui_handler_never_fatal(self, crash_backend):
        report = _report(severity=CrashSeverity.CRITICAL, category=CrashCategory.UI, user_actions=("tap",))
        await UIErrorHandler(crash_backend).handle_error(report)
        assert crash_backend.errors[0]["fatal"] is False
        assert crash_backend.custom_keys["last_user_action"] == "tap"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code, expected", [(0, True), (503, True), (404, False)])
    async def test_network_handler_connectivity(self, crash_backend, status_code, expected):
        report = CrashReport.network_error("/api", ConnectionError(), status_code=status_code)
        await NetworkErrorHandler(crash_backend).handle_error(report)
        assert crash_backend.custom_keys["connectivity_issue"] is expected

    @pytest.mark.asyncio
    async def test_general_handler_accepts_everything(self, crash_backend):
        handler = GeneralErrorHandler(crash_backend)
        report = _report()
        assert handler.can_handle(report)
        await handler.handle_error(report)
        assert crash_backend.custom_keys["handler_type"] == "fallback"

    @pytest.mark.asyncio
    async def test_rejected_report_is_logged_not_raised(self):
        from pattern_telemetry.infrastructure.backends import InMemoryCrashReportingBackend

        backend = InMemoryCrashReportingBackend(accept=False)
        await GeneralErrorHandler(backend).handle_error(_report())
        assert backend.errors == []
