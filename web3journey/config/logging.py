import logging.config
from typing import Any


def setup_logging(level: str = "INFO", *, debug: bool = False) -> dict[str, Any]:
    """Configure console logging for the app and quiet the noisy libraries."""
    app_level = "DEBUG" if debug else level
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default"},
        },
        "loggers": {
            "web3journey": {"level": app_level},
            "LiteLLM": {"level": "WARNING"},
            "httpx": {"level": "WARNING"},
        },
        "root": {"level": level, "handlers": ["console"]},
    }

    logging.config.dictConfig(config)
    return config
