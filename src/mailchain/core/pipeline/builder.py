"""
Pipeline Builder

Collects stage configuration in call order and links it into a single
chain. The builder is single-use: after ``build()`` it refuses further
calls.
"""

import logging
from typing import List, TextIO, Union

from mailchain.core.exceptions import BuilderFinalizedError
from mailchain.core.pipeline.interfaces import Stage
from mailchain.pipeline.stages import (
    DuplicateStage, FilterStage, PartialPolicy, SinkStage, SourceStage
)
from mailchain.pipeline.stages.filter import Predicate


class PipelineBuilder:
    """
    Fluent builder for message pipelines.

    The source stage is created up front and always sits first. Each
    ``filter_by``, ``copy_to`` and ``send`` call appends one stage and
    returns the builder, so calls can be chained::

        pipeline = (PipelineBuilder(sys.stdin)
                    .filter_by(lambda m: m.sender == "erich@example.com")
                    .copy_to("richard@example.com")
                    .send(sys.stdout)
                    .build())
        pipeline.run()
    """

    def __init__(self, input_stream: TextIO,
                 on_partial: Union[PartialPolicy, str] = PartialPolicy.DROP):
        """
        Initialize the builder with its source.

        Args:
            input_stream: Text stream the source stage reads messages from
            on_partial: Policy for input that ends partway through a message
        """
        self.logger = logging.getLogger("mailchain.pipeline.builder")
        self._stages: List[Stage] = [SourceStage(input_stream, on_partial)]
        self._built = False

    @property
    def is_built(self) -> bool:
        """Whether ``build()`` has already been called."""
        return self._built

    def __len__(self) -> int:
        return len(self._stages)

    def filter_by(self, predicate: Predicate) -> "PipelineBuilder":
        """Append a stage that forwards only messages matching ``predicate``."""
        return self._append(FilterStage(predicate), "filter_by")

    def copy_to(self, recipient: str) -> "PipelineBuilder":
        """Append a stage that also sends a copy of each message to ``recipient``."""
        return self._append(DuplicateStage(recipient), "copy_to")

    def send(self, destination: TextIO) -> "PipelineBuilder":
        """Append a stage that writes messages to ``destination``."""
        return self._append(SinkStage(destination), "send")

    def build(self) -> SourceStage:
        """
        Link the accumulated stages and return the head of the chain.

        Stage ``k`` gets stage ``k + 1`` as its successor. The builder
        gives up its stages and cannot be used again.

        Returns:
            SourceStage: The pipeline head; call ``run()`` on it

        Raises:
            BuilderFinalizedError: If the builder was already built
        """
        self._check_open("build")

        for i in range(len(self._stages) - 1, 0, -1):
            self._stages[i - 1].set_next(self._stages[i])

        head = self._stages[0]
        self.logger.info(
            "Built pipeline: " + " -> ".join(stage.name for stage in self._stages)
        )
        self._stages = []
        self._built = True
        return head

    def _append(self, stage: Stage, operation: str) -> "PipelineBuilder":
        self._check_open(operation)
        self._stages.append(stage)
        self.logger.debug(f"Added stage '{stage.name}' at position {len(self._stages) - 1}")
        return self

    def _check_open(self, operation: str) -> None:
        if self._built:
            raise BuilderFinalizedError(operation)
