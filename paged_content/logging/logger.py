import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Centralized logging for the derivative pipeline."""

    _logger: logging.Logger = logging.getLogger("paged_content")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(_FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def command_failed(cls, command_line: str, exit_code: int, output: str) -> None:
        """Report a nonzero exit from an external binary.

        The captured output is logged verbatim; nothing downstream parses it.
        """
        cls._logger.error(
            f"Command exited with code {exit_code}: {command_line}\n{output}".rstrip(),
            extra={"exit_code": exit_code, "command_line": command_line},
        )

    @classmethod
    def skipped(cls, object_id: str, reason: str) -> None:
        """Report a page or object left out of a run for a precondition."""
        cls._logger.warning(f"Skipping {object_id}: {reason}")
