"""
Sink Pipeline Stage

Writes messages to a text stream in the same three-line layout the
source reads. The sink is terminal: it never forwards.
"""

from typing import TextIO

from mailchain.core.pipeline.interfaces import Stage
from mailchain.message import Message


class SinkStage(Stage):
    """Pipeline stage that writes each message as sender, recipient and body lines."""

    def __init__(self, destination: TextIO, flush: bool = False):
        super().__init__("send")
        self.destination = destination
        self.flush = flush
        self.written = 0

    def process(self, message: Message) -> None:
        self.stats.received += 1
        for line in message.to_lines():
            self.destination.write(line)
            self.destination.write("\n")
        if self.flush:
            self.destination.flush()
        self.written += 1

    def set_next(self, stage) -> None:
        if stage is not None:
            self.logger.debug(f"Stage {stage} after sink will never receive messages")
        super().set_next(stage)

    def describe(self):
        info = super().describe()
        info['destination'] = getattr(self.destination, 'name', type(self.destination).__name__)
        return info
