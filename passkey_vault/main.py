from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from passkey_vault.api import webhooks
from passkey_vault.config import config
from passkey_vault.lib.logger import configure_logger, setup_uvicorn_logging
from passkey_vault.middleware.logging import LoggingMiddleware

# Configure module logger
logger = configure_logger(__name__)

# Define app
app = FastAPI(
    title="Passkey NFT Vault Chainhooks",
    description="Processes Hiro Chainhook deliveries for the Passkey NFT contract",
    version="0.1.0",
)

app.add_middleware(LoggingMiddleware)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": <detail>}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# Simple health check endpoint
@app.get("/")
async def health_check():
    """Simple health check endpoint."""
    return {"status": "healthy"}


# Load API routes
app.include_router(webhooks.router)


@app.on_event("startup")
async def startup_event():
    """Run web server startup tasks."""
    setup_uvicorn_logging()
    logger.info(
        "Starting chainhook webhook server",
        extra={
            "network": config.network.network,
            "contract_id": config.chainhook.contract_id,
        },
    )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down chainhook webhook server")
