"""Main entry point for the Address Service."""

import uvicorn
from address_service.config.settings import settings
from address_service.config.logging import setup_logging


def main():
    """Run the FastAPI application."""
    setup_logging()

    uvicorn.run(
        "address_service.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
        log_config=None,  # Use our custom logging configuration
    )


if __name__ == "__main__":
    main()
