"""
Pipeline Architecture Interfaces

Base class and bookkeeping for the chain-of-responsibility pipeline.
Every stage owns at most one successor and decides, per message, whether
and how often to hand the message on to it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from mailchain.core.exceptions import UnimplementedOperationError
from mailchain.message import Message


@dataclass
class StageStats:
    """
    Counters collected by a stage while messages pass through it.

    Attributes:
        received: Messages handed to this stage
        forwarded: Messages this stage passed to its successor
        dropped: Messages that stopped at this stage
    """
    received: int = 0
    forwarded: int = 0
    dropped: int = 0


class Stage:
    """
    Base class for all pipeline stages.

    A stage is one link of a singly-linked, forward-owning chain. The base
    ``process`` forwards a message unchanged, or drops it silently when the
    stage has no successor. Variants override ``process`` and call
    ``forward`` for every message they decide to pass on.

    Stages must not keep a reference to a message after forwarding or
    dropping it.
    """

    def __init__(self, name: str):
        """
        Initialize the stage.

        Args:
            name: Human-readable name for this stage, used in logs
        """
        self.name = name
        self.stats = StageStats()
        self.logger = logging.getLogger(f"mailchain.pipeline.{name}")
        self._next: Optional["Stage"] = None

    @property
    def next(self) -> Optional["Stage"]:
        """The successor stage, or None at the end of the chain."""
        return self._next

    def set_next(self, stage: Optional["Stage"]) -> None:
        """
        Install ``stage`` as this stage's successor.

        Any previous successor is replaced; the last call wins.
        """
        self._next = stage

    def process(self, message: Message) -> None:
        """Forward ``message`` unchanged."""
        self.stats.received += 1
        self.forward(message)

    def forward(self, message: Message) -> None:
        """
        Hand ``message`` to the successor.

        With no successor the message is dropped; that is not an error.
        """
        if self._next is None:
            self.stats.dropped += 1
            return
        self.stats.forwarded += 1
        self._next.process(message)

    def run(self) -> None:
        """Drive the pipeline. Only a source stage can do this."""
        raise UnimplementedOperationError("run", stage=self.name)

    def describe(self) -> Dict[str, Any]:
        """Return a summary of the stage for logging and display."""
        return {'name': self.name, 'type': self.__class__.__name__}

    def __iter__(self):
        """Iterate over this stage and every stage after it."""
        stage: Optional[Stage] = self
        while stage is not None:
            yield stage
            stage = stage.next

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
