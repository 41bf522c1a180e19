"""Base logging functionality for parsing and layout diagnostics."""

import logging
from typing import Any


class AlgorithmLogger:
    """
    Thin wrapper around a stdlib logger that can be switched off as a whole.

    All instances created with the same name share one logger, which writes
    bare messages through a single ``StreamHandler`` and does not propagate,
    so configuring the root logger never duplicates tree drawings.
    """

    def __init__(self, name: str):
        self.name = name
        self.disabled = False
        self.logger = logging.getLogger(name)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)
        if self.logger.level == logging.NOTSET:
            self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def subsection(self, title: str):
        """Log a ruled heading, e.g. before a tree drawing."""
        if self.disabled:
            return
        self.logger.info(f"\n{'-' * 15} {title} {'-' * 15}\n")

    def info(self, message: str):
        if self.disabled:
            return
        self.logger.info(message)

    def warning(self, message: str):
        if self.disabled:
            return
        self.logger.warning(message)

    def debug(self, message: str):
        if self.disabled:
            return
        self.logger.debug(message)

    def result(self, label: str, value: Any):
        """Log ``label: value`` at info level."""
        if self.disabled:
            return
        self.logger.info(f"{label}: {value}")
