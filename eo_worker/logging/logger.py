import logging
import sys

# Per-request chatter from these drowns the per-document lines at INFO/DEBUG.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "pdfminer")


class Log:
    """Process-wide logger for the ingestion run and the read API.

    Lines carry the thread name, so worker output stays attributable when
    several documents are in flight.
    """

    _logger: logging.Logger = logging.getLogger("eo_worker")

    @classmethod
    def configure(cls, log_level: str) -> None:
        level = log_level.upper()
        cls._logger.setLevel(level)
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(threadName)s %(message)s")
            )
            cls._logger.addHandler(handler)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def info(cls, message: str) -> None:
        cls._logger.info(message)

    @classmethod
    def error(cls, message: str) -> None:
        cls._logger.error(message)

    @classmethod
    def warning(cls, message: str) -> None:
        cls._logger.warning(message)

    @classmethod
    def debug(cls, message: str) -> None:
        cls._logger.debug(message)
