"""Interactive runtime: controller state machine, screen, terminal, and loop."""

from .controller import AppController, AppState, Mode
from .events import Event, KeyPress, Quit, Resize
from .loop import iter_events, run_app

__all__ = [
    "AppController",
    "AppState",
    "Event",
    "KeyPress",
    "Mode",
    "Quit",
    "Resize",
    "iter_events",
    "run_app",
]
