"""Client session state.

- AutocompleteController: ticker text box, debounce timer, suggestion list
- SessionCoordinator: search / lookup / feed flows on one asyncio loop
- FlowState: immutable result/error/loading triple per flow
"""

from .autocomplete import AutocompleteController, LoopScheduler
from .coordinator import SessionCoordinator
from .state import FlowState

__all__ = [
    "AutocompleteController",
    "LoopScheduler",
    "SessionCoordinator",
    "FlowState",
]
