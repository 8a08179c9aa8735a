"""Session model: focus rotation and the aggregate application state."""

from .focus import Focus
from .state import ApplicationState

__all__ = ["ApplicationState", "Focus"]
