#!/usr/bin/env python
"""Docker entrypoint script to run the webhook receiver."""

import os

# Run uvicorn
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "passkey_vault.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
