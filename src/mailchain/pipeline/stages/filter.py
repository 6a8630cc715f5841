"""
Filter Pipeline Stage

Passes on only the messages that satisfy a predicate. Rejected messages
are dropped without output or error.
"""

from typing import Callable

from mailchain.core.pipeline.interfaces import Stage
from mailchain.message import Message

Predicate = Callable[[Message], bool]


class FilterStage(Stage):
    """
    Pipeline stage that forwards a message only when ``predicate(message)`` is true.

    The predicate may be a plain function or any callable ``Filter`` from
    ``mailchain.filters``. It must not modify the message.
    """

    def __init__(self, predicate: Predicate):
        if not callable(predicate):
            raise TypeError(f"Filter predicate must be callable, got {type(predicate).__name__}")
        super().__init__("filter")
        self.predicate = predicate

    def process(self, message: Message) -> None:
        self.stats.received += 1
        if self.predicate(message):
            self.forward(message)
        else:
            self.stats.dropped += 1
            self.logger.debug(f"Filtered out message from {message.sender} to {message.recipient}")

    def describe(self):
        info = super().describe()
        info['predicate'] = getattr(self.predicate, 'description', None) \
            or getattr(self.predicate, '__name__', repr(self.predicate))
        return info
