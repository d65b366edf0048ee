import logging
import sys

import uvicorn

from .config import ConfigError, load_settings
from .errors import AppError
from .logging_setup import setup_logging
from .main import create_app
from .rendering import TemplateLoadError

logger = logging.getLogger(__name__)


def main() -> None:
    """Console entry point: configure, build the app and serve it."""
    try:
        settings = load_settings()
        setup_logging(settings.log_level)
        app = create_app(settings)
    except (ConfigError, AppError, TemplateLoadError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    logger.info("listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
