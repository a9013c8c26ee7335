"""Main entry point for the inspection upload server."""

import logging
import sys

import uvicorn

from inspection_uploader.api.app import ENDPOINTS, create_app
from inspection_uploader.infrastructure.dependency_injection import DependenciesContainer

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)


def main():
    """Validate configuration and serve the API."""
    container = DependenciesContainer()

    try:
        config = container.config()
        config.validate()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    app = create_app(container)

    logger.info("=" * 60)
    logger.info("S3 Upload Server running at http://%s:%d", config.host, config.port)
    logger.info("S3 Bucket: %s (%s)", config.bucket_name, config.aws_region)
    for endpoint in ENDPOINTS:
        logger.info("  - POST %s", endpoint)
    logger.info("  - GET / (Health Check)")
    logger.info("=" * 60)

    try:
        uvicorn.run(app, host=config.host, port=config.port, log_level="info")
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
