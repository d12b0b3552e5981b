"""Crash report value objects - severity and category."""
from enum import Enum


class CrashSeverity(str, Enum):
    """Crash severity levels."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        return _SEVERITY_LEVELS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


_SEVERITY_LEVELS = {
    CrashSeverity.LOW: 1,
    CrashSeverity.MODERATE: 2,
    CrashSeverity.HIGH: 3,
    CrashSeverity.CRITICAL: 4,
}


class CrashCategory(str, Enum):
    """Crash categories for the learning application."""
    EDUCATIONAL = "educational"
    GAME_LOGIC = "game_logic"
    UI = "ui"
    NETWORK = "network"
    STORAGE = "storage"
    RUNTIME = "runtime"
    SECURITY = "security"
    PERFORMANCE = "performance"
    GENERAL = "general"

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]


_CATEGORY_NAMES = {
    CrashCategory.EDUCATIONAL: "Educational Content",
    CrashCategory.GAME_LOGIC: "Game Logic",
    CrashCategory.UI: "User Interface",
    CrashCategory.NETWORK: "Network",
    CrashCategory.STORAGE: "Storage",
    CrashCategory.RUNTIME: "Runtime",
    CrashCategory.SECURITY: "Security",
    CrashCategory.PERFORMANCE: "Performance",
    CrashCategory.GENERAL: "General",
}
