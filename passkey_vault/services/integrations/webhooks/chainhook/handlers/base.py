"""Base class for Chainhook event handlers."""

from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Protocol, Tuple

from passkey_vault.lib.events import EventRecorder
from passkey_vault.lib.logger import configure_logger
from passkey_vault.services.communication.discord import Notification
from passkey_vault.services.integrations.webhooks.chainhook.models import EventContext


class Notifier(Protocol):
    async def send_notification(self, notification: Notification) -> None: ...


class ChainhookEventHandler(ABC):
    """Base class for handlers of tracked-contract function calls.

    Subclasses list the contract functions they own in `function_names` and
    implement one method per direction. `handle` routes a call to the right one.
    """

    function_names: ClassVar[Tuple[str, ...]] = ()

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        recorder: Optional[EventRecorder] = None,
    ):
        self.logger = configure_logger(self.__class__.__name__)
        self.notifier = notifier
        self.recorder = recorder or EventRecorder()

    async def handle(self, context: EventContext) -> None:
        """Handle one contract call in the direction of its block."""
        if context.is_rollback:
            await self.handle_rollback(context)
        else:
            await self.handle_apply(context)

    @abstractmethod
    async def handle_apply(self, context: EventContext) -> None:
        """Handle a call from a newly applied block."""
        pass

    @abstractmethod
    async def handle_rollback(self, context: EventContext) -> None:
        """Handle a call from a block removed by a reorg."""
        pass

    # ----------------------------------------------------------------
    # Helper methods
    # ----------------------------------------------------------------
    async def notify(
        self, context: EventContext, title: str, description: str, color: int
    ) -> None:
        """Send a notification for `context`; failures are logged, never raised."""
        if self.notifier is None:
            self.logger.debug("No notifier configured, dropping notification")
            return

        notification = Notification(
            title=title,
            description=description,
            tx_hash=context.tx_hash,
            block_height=context.block_height,
            color=int(color),
        )
        try:
            await self.notifier.send_notification(notification)
        except Exception as e:
            self.logger.error(
                f"Notifier raised while sending '{title}': {str(e)}",
                extra={"tx_hash": context.tx_hash},
                exc_info=True,
            )
            self.recorder.record(
                "notification_failed",
                title=title,
                tx_hash=context.tx_hash,
                block_height=context.block_height,
                error=str(e),
            )

    def log_event(self, message: str, context: EventContext) -> None:
        self.logger.info(
            message,
            extra={
                "tx_hash": context.tx_hash,
                "block_height": context.block_height,
                "direction": context.direction.value,
            },
        )
