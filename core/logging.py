import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = "info") -> None:
    # basicConfig leaves existing handlers alone, so only the level changes on repeat calls
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
