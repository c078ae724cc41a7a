import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the whole backend."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs every request line of the AI backend at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
