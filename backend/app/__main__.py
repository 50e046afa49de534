import logging

import uvicorn

from .config import configure_logging, resolve_host, resolve_port

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()
    host, port = resolve_host(), resolve_port()
    logger.info("API listening on http://%s:%s", host, port)
    uvicorn.run("app.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
