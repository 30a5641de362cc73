"""Application entry point for the FRA claim intake API server."""

import uvicorn

from fra_claims.api.app import app
from fra_claims.utils.config import load_config
from fra_claims.utils.logger import setup_logging


def main(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI application server."""
    config = load_config()
    setup_logging(config.log_level)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
