# docuvoice/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from ..config import settings

LOG_DIR = settings.LOGS_PATH
LOG_DIR.mkdir(parents=True, exist_ok=True)

verbose_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)
simple_formatter = logging.Formatter(
    '%(levelname)s [%(module)s] - %(message)s'
)

# Attributes every LogRecord already carries; ``extra`` keys must not shadow them
RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class DocuVoiceLogger:
    """Component logger writing to ``LOGS_PATH/<name>.log`` and stdout.

    Structured context goes in ``extra``; keys that collide with LogRecord
    attributes are stored as ``extra_<key>`` instead of raising.
    """

    def __init__(self, name: str, level: str = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level or settings.LOG_LEVEL)
        self.logger.propagate = False
        if not self.logger.handlers:
            self._add_handlers()

    def _add_handlers(self):
        file_handler = RotatingFileHandler(
            LOG_DIR / f"{self.logger.name}.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setFormatter(verbose_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(verbose_formatter if settings.is_development else simple_formatter)
        self.logger.addHandler(console_handler)

    @staticmethod
    def sanitize_extra(extra):
        if not extra:
            return None
        return {
            (f"extra_{key}" if key in RESERVED_ATTRS else key): value
            for key, value in extra.items()
        }

    def _log(self, level, msg, extra=None, exc_info=None):
        if self.logger.isEnabledFor(level):
            self.logger.log(level, msg, extra=self.sanitize_extra(extra), exc_info=exc_info, stacklevel=3)

    def debug(self, msg, extra=None, exc_info=None):
        self._log(logging.DEBUG, msg, extra, exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self._log(logging.INFO, msg, extra, exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self._log(logging.WARNING, msg, extra, exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self._log(logging.ERROR, msg, extra, exc_info)

    def critical(self, msg, extra=None, exc_info=None):
        self._log(logging.CRITICAL, msg, extra, exc_info)


api_logger = DocuVoiceLogger("api")
db_logger = DocuVoiceLogger("database")
service_logger = DocuVoiceLogger("service")
ai_logger = DocuVoiceLogger("ai")

__all__ = ["DocuVoiceLogger", "api_logger", "db_logger", "service_logger", "ai_logger"]
