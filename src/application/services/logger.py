import logging
import sys

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LIBRARIES_LIST = ["uvicorn", "fastapi", "motor", "pymongo"]
DEFAULT_LOG_LIBRARIES_LEVEL = "WARNING"


def configure_logging(
    log_level: str = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    lib_list: list[str] = DEFAULT_LOG_LIBRARIES_LIST,
    lib_level: str = DEFAULT_LOG_LIBRARIES_LEVEL,
) -> None:
    """Configure application-wide logging.

    Args:
        log_level: Logging level for the root logger (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: The format of the log records
        lib_list: Libraries whose loggers get a separate level
        lib_level: The level applied to the loggers in ``lib_list``
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Set third-party loggers to a quieter level to reduce noise
    for lib_name in lib_list:
        logging.getLogger(lib_name).setLevel(lib_level.upper())
