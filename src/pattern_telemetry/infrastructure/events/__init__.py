"""Observer broadcast bus."""

from .publisher import ObserverBus

__all__ = ["ObserverBus"]
