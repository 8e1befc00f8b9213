"""
Production entrypoint for the Tenant Vacancy Engine.

Binds to 0.0.0.0:$PORT.
"""

import uvicorn

from utils.config import Config

if __name__ == "__main__":
    config = Config.load()
    print(f"Starting Tenant Vacancy Engine on port {config.port}")

    # Import app here to ensure clean module loading
    from web.app import app

    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=config.log_level.lower())
