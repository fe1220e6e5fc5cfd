"""Exceptions raised by prompts.

Configuration problems are reported before the terminal is touched.
Cancel and interrupt are reported as exceptions so callers can tell them
apart from answers. I/O failures from the terminal propagate as ``OSError``.
"""

from __future__ import annotations


class InquireError(Exception):
    """Base class for every error raised by ``pi.inquire``."""


class NotTTYError(InquireError):
    """The input device is not a TTY, so raw mode cannot be enabled."""

    def __init__(self) -> None:
        super().__init__("The input device is not a TTY")


class InvalidConfigurationError(InquireError):
    """The prompt was built with an invalid configuration."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"The prompt configuration is invalid: {detail}")
        self.detail = detail


class OperationCanceledError(InquireError):
    """The user canceled the prompt by pressing ESC."""

    def __init__(self) -> None:
        super().__init__("Operation was canceled by the user")


class OperationInterruptedError(InquireError):
    """The user interrupted the prompt with Ctrl+C."""

    def __init__(self) -> None:
        super().__init__("Operation was interrupted by the user")


class CustomUserError(InquireError):
    """A user-supplied callback (validator, autocompleter) raised.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"User-provided error: {error}")
        self.error = error
