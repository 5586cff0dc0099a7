"""
Multiruntime logger module.
"""
import inspect
import logging


class MultiruntimeLogger:
    """
    Logger class used by every multiruntime component.
    """

    def __init__(self, name: str = "multiruntime") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.level:
            self.logger.setLevel(logging.INFO)

    def log(self, debug_message: str, level: int, sanitized_error_message: str = "") -> None:
        """
        Log the message with the given level, prefixed with the calling function.

        Args:
            debug_message: Message with full details
            level: A ``logging`` level constant
            sanitized_error_message: Shorter message safe to show to end users
        """
        caller = inspect.stack()[1].function
        message = debug_message if not sanitized_error_message else f"{debug_message} ({sanitized_error_message})"
        self.logger.log(level=level, msg=f"[{caller}] {message}")
