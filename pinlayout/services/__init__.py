"""Layout resolution, convergence and persistence services."""

from .convergence import PaneConvergence
from .layout_service import LayoutAutomation
from .persistence import LayoutPersistence, PersistResult
from .resolver import LayoutResolver, ResolutionState, resolve

__all__ = [
    "LayoutAutomation",
    "LayoutPersistence",
    "LayoutResolver",
    "PaneConvergence",
    "PersistResult",
    "ResolutionState",
    "resolve",
]
