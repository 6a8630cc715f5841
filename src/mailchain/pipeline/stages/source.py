"""
Source Pipeline Stage

Reads line-oriented input, three lines per message (sender, recipient,
body), and pushes each message through the chain. The source is the head
of every built pipeline and the only stage whose ``run()`` does anything.
"""

from enum import Enum
from typing import Iterator, List, Optional, TextIO, Union

from mailchain.core.exceptions import MalformedInputError
from mailchain.core.pipeline.interfaces import Stage
from mailchain.message import Message

FIELD_NAMES = ("sender", "recipient", "body")


class PartialPolicy(str, Enum):
    """What to do when input ends partway through a message."""
    DROP = "drop"    # discard the partial group and stop
    ERROR = "error"  # raise MalformedInputError
    PAD = "pad"      # fill missing fields with empty strings


class SourceStage(Stage):
    """
    Pipeline head that reads messages from a text stream.

    End of input before a sender line ends the run normally. End of input
    after the sender line but before the body is handled according to the
    configured ``PartialPolicy``.
    """

    def __init__(self, input_stream: TextIO,
                 on_partial: Union[PartialPolicy, str] = PartialPolicy.DROP):
        super().__init__("source")
        self.input = input_stream
        self.on_partial = PartialPolicy(on_partial)
        self._line_number = 0

    def run(self) -> None:
        """Read every message from the input and process it through the chain."""
        self.logger.info(f"Reading messages (partial input policy: {self.on_partial.value})")
        count = 0
        for message in self._read_messages():
            count += 1
            self.process(message)
        self.logger.info(f"Finished reading {count} message(s) from {self._line_number} line(s)")

    def process(self, message: Message) -> None:
        self.stats.received += 1
        self.logger.debug(f"Read message from {message.sender} to {message.recipient}")
        self.forward(message)

    def _read_line(self) -> Optional[str]:
        line = self.input.readline()
        if not line:
            return None
        self._line_number += 1
        return line[:-1] if line.endswith("\n") else line

    def _read_messages(self) -> Iterator[Message]:
        while True:
            sender = self._read_line()
            if sender is None:
                return

            fields: List[Optional[str]] = [sender, self._read_line(), self._read_line()]
            if None in fields:
                message = self._handle_partial(fields)
                if message is not None:
                    yield message
                return

            yield Message(sender=fields[0], recipient=fields[1], body=fields[2])

    def _handle_partial(self, fields: List[Optional[str]]) -> Optional[Message]:
        missing = [name for name, value in zip(FIELD_NAMES, fields) if value is None]

        if self.on_partial is PartialPolicy.ERROR:
            raise MalformedInputError(
                f"Input ended before message was complete (missing: {', '.join(missing)})",
                line_number=self._line_number,
                missing_fields=missing
            )

        if self.on_partial is PartialPolicy.PAD:
            self.logger.warning(
                f"Padding partial message at line {self._line_number}; missing: {', '.join(missing)}"
            )
            sender, recipient, body = (value or "" for value in fields)
            return Message(sender=sender, recipient=recipient, body=body)

        self.logger.warning(
            f"Dropping partial message at line {self._line_number}; missing: {', '.join(missing)}"
        )
        return None

    def describe(self):
        info = super().describe()
        info['on_partial'] = self.on_partial.value
        return info
