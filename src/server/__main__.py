"""Run the validation API with ``python -m server``."""

import uvicorn

from docschema.utils.logging_config import configure_logging, get_logger
from server.server_config import SERVER_HOST, SERVER_PORT, SERVER_RELOAD

logger = get_logger(__name__)


def main() -> None:
    configure_logging()
    logger.info("Starting docschema server", extra={"host": SERVER_HOST, "port": SERVER_PORT})
    # uvicorn would otherwise replace our handlers
    uvicorn.run(
        "server.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        reload=SERVER_RELOAD,
        log_config=None,
    )


if __name__ == "__main__":
    main()
