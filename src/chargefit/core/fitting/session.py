"""Serialization of solver calls.

A ``SolverSession`` owns the lock every 1-D fit holds for its whole
duration, together with a one-time initialization flag for the solver's
diagnostic logging. Callers may inject their own session; otherwise the
module-level default session is shared process-wide.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class SolverSession:
    """Lock plus one-time logging initialization for solver calls."""

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._lock = threading.Lock()
        self._init_lock = threading.Lock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def initialize(self) -> None:
        """Run the one-time initialization; later calls are no-ops."""
        with self._init_lock:
            if self._initialized:
                return
            # scipy reports through warnings; route them into logging once
            logging.captureWarnings(True)
            logger.debug("Solver session '%s' initialized", self.name)
            self._initialized = True

    @contextmanager
    def exclusive(self) -> Iterator[SolverSession]:
        """Hold the session lock for the duration of the block."""
        with self._lock:
            self.initialize()
            yield self


_default_session = SolverSession()


def default_session() -> SolverSession:
    """Process-wide session used when none is supplied."""
    return _default_session


def resolve_session(session: SolverSession | None) -> SolverSession:
    return session if session is not None else _default_session
