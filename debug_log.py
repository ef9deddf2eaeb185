"""
Debug Logger

File-only diagnostic logging; the terminal belongs to the UI.

Every module logs through one DebugLogger built by main() from --log-level
(or LOG_LEVEL) and --log-file. Messages carry keyword context rendered as
"message | key=value". With --verbose-debug the httpx and httpcore loggers
write to the same file.
"""

import logging
from pathlib import Path
from typing import Optional


DEFAULT_LOG_FILE = "log/requests.log"

_SENSITIVE_KEYWORDS = [
    'password', 'passwd', 'secret', 'token', 'credential',
    'authorization', 'api_key', 'apikey',
]


HTTP_LIBRARY_LOGGERS = ('httpx', 'httpcore')


class DebugLogger:
    """Structured wrapper around a stdlib logger"""

    def __init__(self, level: str = "WARNING", log_file: Optional[str] = DEFAULT_LOG_FILE,
                 verbose: bool = False, name: str = "registry-browser"):
        self.logger = logging.getLogger(name)
        self.level = self._parse_level(level)
        self.logger.setLevel(self.level)
        self.handler = None
        self._owns_handler = False
        self._library_loggers = []

        if log_file:
            path = Path(log_file).resolve()
            path.parent.mkdir(parents=True, exist_ok=True)
            # Reuse the handler of an earlier instance writing the same file
            for existing in self.logger.handlers:
                if isinstance(existing, logging.FileHandler) and existing.baseFilename == str(path):
                    self.handler = existing
                    break
            else:
                self.handler = logging.FileHandler(path)
                self.handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s: %(message)s'))
                self.logger.addHandler(self.handler)
                self._owns_handler = True
        elif not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())
        # Never leak into the root logger, textual draws on the same terminal
        self.logger.propagate = False

        if verbose and self.handler:
            # HTTP library internals go to the same file
            for library in HTTP_LIBRARY_LOGGERS:
                library_logger = logging.getLogger(library)
                library_logger.setLevel(self.level)
                if self.handler not in library_logger.handlers:
                    library_logger.addHandler(self.handler)
                    self._library_loggers.append(library_logger)

    @staticmethod
    def _parse_level(level) -> int:
        """Accept names like 'debug' or numeric levels, default to WARNING"""
        if isinstance(level, int):
            return level
        if level and str(level).isdigit():
            return int(level)
        resolved = logging.getLevelName(str(level or "").upper())
        return resolved if isinstance(resolved, int) else logging.WARNING

    def _mask_sensitive_data(self, key: str, value) -> str:
        """Mask values whose key looks like a credential"""
        if any(keyword in key.lower() for keyword in _SENSITIVE_KEYWORDS):
            return "[REDACTED]"
        return str(value)

    def _format(self, message: str, kwargs: dict) -> str:
        safe_kwargs = {k: self._mask_sensitive_data(k, v) for k, v in kwargs.items()}
        context = ", ".join(f"{k}={v}" for k, v in safe_kwargs.items())
        return f"{message}" + (f" | {context}" if context else "")

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context"""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format(message, kwargs))

    def info(self, message: str, **kwargs):
        """Log info message"""
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(self._format(message, kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format(message, kwargs))

    def error(self, message: str, **kwargs):
        """Log error message"""
        self.logger.error(self._format(message, kwargs))

    def close(self) -> None:
        """Detach the file handler, closing it if this instance opened it"""
        for library_logger in self._library_loggers:
            library_logger.removeHandler(self.handler)
            library_logger.setLevel(logging.NOTSET)
        self._library_loggers = []
        if self.handler and self._owns_handler:
            self.logger.removeHandler(self.handler)
            self.handler.close()
        self.handler = None
        self._owns_handler = False


# Disabled until main() configures it
null_logger = DebugLogger(level="CRITICAL", log_file=None, name="registry-browser.null")
