"""
Message Data Model

The immutable sender/recipient/body value that flows through a pipeline.
"""

from dataclasses import dataclass, replace
from typing import List


@dataclass(frozen=True)
class Message:
    """
    A single message travelling through the pipeline.

    Messages are never changed in place. A stage that needs a modified
    message builds a new one, and no stage keeps a reference to a message
    after forwarding or dropping it.

    Attributes:
        sender: Address the message is from
        recipient: Address the message is for
        body: Message text (a single line)
    """
    sender: str
    recipient: str
    body: str

    def with_recipient(self, recipient: str) -> "Message":
        """Return a copy of this message addressed to ``recipient``."""
        return replace(self, recipient=recipient)

    def to_lines(self) -> List[str]:
        """Return the fields in wire order: sender, recipient, body."""
        return [self.sender, self.recipient, self.body]
