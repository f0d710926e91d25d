"""Console entrypoint: serve the webhook app with uvicorn."""

import uvicorn

from adminrelay.api.factory import create_app
from adminrelay.config import load_settings
from adminrelay.observability.logging import get_logger

logger = get_logger(__name__)


def main() -> None:
    settings = load_settings()
    app = create_app(settings)
    logger.info("server starting", extra={"extra_fields": {"port": settings.port}})
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
