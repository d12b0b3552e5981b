"""Crash report handling - handlers and the chain that routes reports to them."""

from .handler_chain import (
    DEFAULT_HANDLER_NAME,
    ErrorHandlerChain,
    create_minimal_chain,
    create_standard_chain,
)
from .handlers import (
    CriticalErrorHandler,
    EducationalContentErrorHandler,
    ErrorHandler,
    GameLogicErrorHandler,
    GeneralErrorHandler,
    NetworkErrorHandler,
    UIErrorHandler,
)

__all__ = [
    "ErrorHandlerChain",
    "DEFAULT_HANDLER_NAME",
    "create_standard_chain",
    "create_minimal_chain",
    "ErrorHandler",
    "CriticalErrorHandler",
    "GameLogicErrorHandler",
    "EducationalContentErrorHandler",
    "UIErrorHandler",
    "NetworkErrorHandler",
    "GeneralErrorHandler",
]
