import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Stream handler on the root logger. No-op if one is already installed."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
