from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .core.exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def create_container() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    try:
        settings = importlib.import_module(settings_module)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot load settings module {settings_module!r}") from exc

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger = logging.getLogger(__name__)

    db_config = getattr(settings, "DB_CONFIG")
    if getattr(settings, "DEBUG", False):
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

    return build_container(
        db_config=db_config,
        grace_minutes=int(getattr(settings, "GRACE_MINUTES")),
        standard_minutes=int(getattr(settings, "STANDARD_WORK_MINUTES")),
        cache_ttl_seconds=float(getattr(settings, "SCHEDULE_CACHE_TTL_SECONDS")),
        default_timezone=str(getattr(settings, "DEFAULT_TIMEZONE", "UTC")),
    )
