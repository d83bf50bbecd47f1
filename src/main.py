"""Application entry point."""

import logging
import uvicorn

from src.config import Config
from src.app import create_app


def main():
    """Run the leaderboard server."""
    config = Config.from_env()

    # Configure logging
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = create_app(config)
    logging.getLogger(__name__).info(f"Dust Farm server listening on http://localhost:{config.port}")

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
