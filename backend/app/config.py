import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4000
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:3000")
DEFAULT_LOG_LEVEL = "INFO"


def resolve_port() -> int:
    env_value = os.environ.get("PORT")
    if env_value:
        try:
            parsed = int(env_value)
            if 0 < parsed < 65536:
                return parsed
        except ValueError:
            pass
        logger.warning("Invalid PORT value: %s", env_value)
    return DEFAULT_PORT


def resolve_host() -> str:
    return os.environ.get("HOST", "").strip() or DEFAULT_HOST


def resolve_cors_origins() -> list[str]:
    env_value = os.environ.get("SURVEY_CORS_ORIGINS", "")
    origins = [item.strip() for item in env_value.split(",") if item.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def configure_logging() -> None:
    level_name = os.environ.get("SURVEY_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(level_name)
    invalid = not isinstance(level, int)
    logging.basicConfig(
        level=logging.INFO if invalid else level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if invalid:
        logger.warning("Invalid SURVEY_LOG_LEVEL value: %s", level_name)
