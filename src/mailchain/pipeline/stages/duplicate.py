"""
Duplicate Pipeline Stage

Forwards every message, then forwards a copy addressed to a fixed
recipient unless the message already goes there.
"""

from mailchain.core.pipeline.interfaces import Stage
from mailchain.message import Message


class DuplicateStage(Stage):
    """
    Pipeline stage that copies each message to ``recipient``.

    The original is always forwarded first. The copy keeps sender and body
    and is forwarded immediately afterwards, so copies appear right after
    their original.
    """

    def __init__(self, recipient: str):
        super().__init__("copy")
        self.recipient = recipient
        self.copies_made = 0

    def process(self, message: Message) -> None:
        self.stats.received += 1
        needs_copy = message.recipient != self.recipient
        copy = message.with_recipient(self.recipient) if needs_copy else None

        self.forward(message)

        if copy is not None:
            self.copies_made += 1
            self.logger.debug(f"Copying message from {copy.sender} to {self.recipient}")
            self.forward(copy)

    def describe(self):
        info = super().describe()
        info['recipient'] = self.recipient
        return info
