"""Named command registry for tree item actions."""
from typing import Any, Callable, Dict, List

from ..logging import get_logger

logger = get_logger(__name__)


class CommandRegistry:
    """Maps command names to handlers.

    Tree items carry a command name plus arguments; the host UI executes
    it when the item is activated.
    """

    def __init__(self):
        self._handlers: Dict[str, Callable[..., Any]] = {}

    def register(self, name: str, handler: Callable[..., Any]) -> Callable[[], None]:
        """Register a handler and return a callable that unregisters it.

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._handlers:
            raise ValueError(f"Command already registered: {name}")
        self._handlers[name] = handler
        logger.debug(f"Registered command: {name}")

        def unregister() -> None:
            if self._handlers.get(name) is handler:
                del self._handlers[name]

        return unregister

    def execute(self, name: str, *args: Any) -> Any:
        """Run a registered command.

        Raises:
            KeyError: If no handler is registered under ``name``
        """
        try:
            handler = self._handlers[name]
        except KeyError:
            raise KeyError(f"Unknown command: {name}") from None
        return handler(*args)

    @property
    def names(self) -> List[str]:
        return list(self._handlers)

    def __contains__(self, name: str) -> bool:
        return name in self._handlers
