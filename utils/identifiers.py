"""Identifier generation for store records."""
import itertools
import time
from typing import Callable, Optional


class IdGenerator:
    """
    Session-unique identifiers of the form ``<prefix><epoch-millis>-<n>``.

    The counter is shared across prefixes and never repeats within one
    generator, so two ids minted in the same millisecond still differ.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Initialize generator.

        Args:
            clock: Returns seconds since the epoch (default: time.time)
        """
        self._clock = clock or time.time
        self._counter = itertools.count(1)

    def next_id(self, prefix: str) -> str:
        """
        Mint a new identifier.

        Args:
            prefix: Entity prefix (cli, load, trip, ...)

        Returns:
            Unique identifier string
        """
        millis = int(self._clock() * 1000)
        return f"{prefix}{millis}-{next(self._counter)}"
