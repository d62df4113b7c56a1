from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from passkey_vault.api.dependencies import (
    get_chainhook_service,
    get_chainhook_settings,
    verify_webhook_auth,
)
from passkey_vault.config import ChainhookSettings
from passkey_vault.lib.logger import configure_logger
from passkey_vault.services.integrations.webhooks.chainhook import (
    ChainhookService,
    PayloadValidationError,
)

# Configure logger
logger = configure_logger(__name__)

# Create the router
router = APIRouter(prefix="/api/webhooks")


@router.post("/chainhook")
async def chainhook(
    request: Request,
    _: None = Depends(verify_webhook_auth),
    service: ChainhookService = Depends(get_chainhook_service),
) -> JSONResponse:
    """Handle a chainhook webhook.

    This endpoint requires Bearer token authentication via the Authorization
    header when CHAINHOOK_AUTH_TOKEN is configured.

    Args:
        request: The incoming request; its body is read after authentication

    Returns:
        JSONResponse: 200 with per-phase block counts, 400 for a malformed
        payload, 500 if processing failed
    """
    logger.debug(
        "Chainhook webhook received", extra={"event_type": "chainhook_webhook"}
    )
    try:
        data = await request.json()
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        logger.warning(f"Chainhook body is not valid JSON: {str(e)}")
        return JSONResponse(status_code=400, content={"error": "Malformed payload"})

    try:
        summary = await service.process(data)
    except PayloadValidationError as e:
        logger.warning(f"Malformed chainhook payload: {e.message}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Malformed payload",
                "details": e.errors or [{"msg": e.message}],
            },
        )
    except Exception as e:
        logger.error(
            "❌ Webhook processing error", extra={"error": str(e)}, exc_info=True
        )
        return JSONResponse(
            status_code=500, content={"error": "Internal server error"}
        )

    logger.info(
        "Chainhook processing completed",
        extra={"applied": summary.applied, "rolled_back": summary.rolled_back},
    )
    return JSONResponse(status_code=200, content=summary.to_response())


@router.get("/chainhook")
async def chainhook_health(
    settings: ChainhookSettings = Depends(get_chainhook_settings),
) -> dict:
    """Health check for the chainhook webhook."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
