"""Base classes for webhook parsing and handling."""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from passkey_vault.lib.logger import configure_logger

ParsedT = TypeVar("ParsedT")
ResultT = TypeVar("ResultT")


class WebhookParser(ABC, Generic[ParsedT]):
    """Turns a raw webhook body into a structured payload."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    def parse(self, raw_data: Any) -> ParsedT:
        """Parse raw webhook data.

        Args:
            raw_data: The decoded JSON body

        Returns:
            The structured payload
        """
        pass


class WebhookHandler(ABC, Generic[ParsedT, ResultT]):
    """Acts on a parsed webhook payload."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    async def handle(self, parsed_data: ParsedT) -> ResultT:
        """Handle parsed webhook data.

        Args:
            parsed_data: Output of the matching parser

        Returns:
            The result of handling the webhook
        """
        pass


class WebhookService(Generic[ParsedT, ResultT]):
    """Coordinates a parser and a handler for one webhook type."""

    def __init__(
        self,
        parser: WebhookParser[ParsedT],
        handler: WebhookHandler[ParsedT, ResultT],
    ):
        self.parser = parser
        self.handler = handler
        self.logger = configure_logger(self.__class__.__name__)

    async def process(self, raw_data: Any) -> ResultT:
        """Parse then handle a webhook body.

        Parsing happens before any handling, so an invalid body produces no
        side effects.
        """
        parsed_data = self.parser.parse(raw_data)
        return await self.handler.handle(parsed_data)
