"""
Collects diagnostics emitted by the lexer and the parser.

Neither phase stops at the first problem: each error is handed to the
reporter and the phase carries on, so a single run can surface all of them.
Aggregation and display are left to whoever owns the reporter.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from .exceptions import SplaxError

logger = logging.getLogger(__name__)


class ErrorReporter:
    def __init__(self):
        self.errors: List[SplaxError] = []

    def report(self, error: SplaxError):
        logger.debug(f"Reported: {error.message}")
        self.errors.append(error)

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def diagnostics(self) -> Iterator[Tuple[Optional[int], str]]:
        """Yields a (line, message) pair for every reported error, in report order."""
        for error in self.errors:
            yield error.diagnostic

    def reset(self):
        self.errors = []
