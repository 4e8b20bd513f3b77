"""
Main entrypoint: FastAPI server for the merchant dashboard.

Env: STELLAR_NETWORK, HORIZON_URL, SIGNING_SERVICE_URL, API_HOST, API_PORT, LOG_LEVEL, etc.

Equivalent: uvicorn stellar_merchant.api_server.app:app --host 0.0.0.0 --port 8000
"""

import argparse
import sys

# Configure structured JSON logging before other imports that may log
from stellar_merchant.logging import get_logger

logger = get_logger("main")


def main(argv: list[str] | None = None) -> None:
    """Resolve settings and run the API under uvicorn."""
    parser = argparse.ArgumentParser(description="Stellar Merchant Tool API server")
    parser.add_argument("--host", help="Bind address (default: API_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Bind port (default: API_PORT or 8000)")
    args = parser.parse_args(argv)

    from stellar_merchant.config import get_settings

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("main_config_error", error=str(e))
        sys.exit(1)

    if not settings.signing_enabled:
        logger.warning(
            "main_signing_disabled",
            message="SIGNING_SERVICE_URL not set: payment, trustline and keypair routes will answer 503",
        )

    host = args.host or settings.api_host
    port = args.port or settings.api_port

    from stellar_merchant.api_server.app import app
    import uvicorn

    logger.info(
        "main_server_starting",
        host=host,
        port=port,
        network=settings.stellar_network,
        horizon_url=settings.horizon_url,
    )
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
