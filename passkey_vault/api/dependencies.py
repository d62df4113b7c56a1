from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from passkey_vault.config import ChainhookSettings, config
from passkey_vault.lib.logger import configure_logger
from passkey_vault.services.integrations.webhooks.chainhook import ChainhookService

# Configure logger
logger = configure_logger(__name__)


def get_chainhook_settings() -> ChainhookSettings:
    """Settings for the chainhook pipeline, derived from the global config."""
    return ChainhookSettings.from_config(config)


@lru_cache(maxsize=8)
def _build_chainhook_service(settings: ChainhookSettings) -> ChainhookService:
    return ChainhookService(settings)


def get_chainhook_service(
    settings: ChainhookSettings = Depends(get_chainhook_settings),
) -> ChainhookService:
    """One long-lived service per settings value, so block tracking spans requests."""
    return _build_chainhook_service(settings)


async def verify_webhook_auth(
    authorization: Optional[str] = Header(None),
    settings: ChainhookSettings = Depends(get_chainhook_settings),
) -> None:
    """
    Verify webhook authentication using Bearer token.

    When no token is configured every request is accepted. Otherwise the
    header must be exactly "Bearer <token>".

    Args:
        authorization: The Authorization header value
        settings: Chainhook settings holding the expected token

    Raises:
        HTTPException: If authentication fails
    """
    expected = settings.expected_authorization
    if not expected:
        return

    if authorization != expected:
        logger.warning(
            "Unauthorized webhook attempt",
            extra={"has_header": authorization is not None},
        )
        raise HTTPException(status_code=401, detail="Unauthorized")
