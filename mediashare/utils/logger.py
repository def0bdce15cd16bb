import logging
from rich.logging import RichHandler
from mediashare.config import settings

def setup_logger(name: str = "mediashare") -> logging.Logger:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)]
    )
    return logging.getLogger(name)

logger = setup_logger()
