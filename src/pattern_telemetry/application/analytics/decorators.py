"""
Performance tracking decorator.

Wraps a sync or async callable and publishes a performance measurement
event with the elapsed time and whether the call succeeded. The wrapped
call's result or exception is passed through unchanged.

Usage:
    @track_performance(analytics_service, "load_level")
    async def load_level(level_id):
        ...
"""
import asyncio
import functools
import inspect
import time
from typing import Any, Callable, Coroutine, Optional, Set

from pattern_telemetry.application.analytics.service import AnalyticsService
from pattern_telemetry.domain.analytics.events import AnalyticsEvent

# Publish tasks started from sync callables running inside an event loop
_pending_tasks: Set["asyncio.Task[Any]"] = set()


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def _dispatch(coro: Coroutine[Any, Any, Any]) -> None:
    """Run a publish coroutine from synchronous code."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(coro)
        return
    task = loop.create_task(coro)
    _pending_tasks.add(task)
    task.add_done_callback(_pending_tasks.discard)


def track_performance(service: AnalyticsService, operation: Optional[str] = None):
    """
    Decorator publishing a performance event for every call.

    Args:
        service: Analytics service events are published through
        operation: Operation name; defaults to the callable's qualified name

    Returns:
        Decorator for sync and async callables
    """
    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = time.perf_counter()
                success = False
                try:
                    result = await func(*args, **kwargs)
                    success = True
                    return result
                finally:
                    await service.publish(
                        AnalyticsEvent.performance_measurement(name, _elapsed_ms(start), success)
                    )

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = time.perf_counter()
            success = False
            try:
                result = func(*args, **kwargs)
                success = True
                return result
            finally:
                _dispatch(
                    service.publish(
                        AnalyticsEvent.performance_measurement(name, _elapsed_ms(start), success)
                    )
                )

        return sync_wrapper

    return decorator
