"""Maps tracked-contract function names to their handlers."""

from typing import Dict, Iterable, List, Optional

from passkey_vault.lib.events import EventRecorder
from passkey_vault.lib.logger import configure_logger
from passkey_vault.services.integrations.webhooks.chainhook.handlers import (
    ChainhookEventHandler,
    MintHandler,
    MintStore,
    Notifier,
    RegisterHandler,
    TransferHandler,
)

logger = configure_logger(__name__)


class HandlerRegistry:
    """Dispatch table from contract function name to handler."""

    def __init__(self, handlers: Iterable[ChainhookEventHandler] = ()):
        self._handlers: Dict[str, ChainhookEventHandler] = {}
        for handler in handlers:
            self.register(handler)

    @classmethod
    def default(
        cls,
        notifier: Optional[Notifier] = None,
        recorder: Optional[EventRecorder] = None,
        mint_store: Optional[MintStore] = None,
    ) -> "HandlerRegistry":
        """Registry with the mint, transfer and register handlers."""
        return cls(
            [
                MintHandler(notifier=notifier, recorder=recorder, mint_store=mint_store),
                TransferHandler(notifier=notifier, recorder=recorder),
                RegisterHandler(notifier=notifier, recorder=recorder),
            ]
        )

    def register(self, handler: ChainhookEventHandler) -> None:
        if not handler.function_names:
            raise ValueError(
                f"{handler.__class__.__name__} does not declare any function names"
            )
        for name in handler.function_names:
            if name in self._handlers:
                logger.warning(
                    f"Replacing handler for '{name}': "
                    f"{self._handlers[name].__class__.__name__} -> {handler.__class__.__name__}"
                )
            self._handlers[name] = handler

    def get(self, function_name: str) -> Optional[ChainhookEventHandler]:
        return self._handlers.get(function_name)

    @property
    def function_names(self) -> List[str]:
        return sorted(self._handlers)

    def __contains__(self, function_name: str) -> bool:
        return function_name in self._handlers
