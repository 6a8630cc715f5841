"""
Pipeline Factory

Turns an ``AppConfig`` stage list into builder calls and returns the
built chain.
"""

import logging
from contextlib import ExitStack
from typing import TextIO

from mailchain.core.config.models import AppConfig, StageConfig
from mailchain.core.pipeline.builder import PipelineBuilder
from mailchain.filters.factory import FilterFactory
from mailchain.pipeline.stages.source import SourceStage

logger = logging.getLogger("mailchain.pipeline.factory")


def build_pipeline(config: AppConfig, input_stream: TextIO, output_stream: TextIO,
                   stack: ExitStack) -> SourceStage:
    """
    Build a pipeline from configuration.

    Args:
        config: Validated application configuration
        input_stream: Stream the source reads from
        output_stream: Default destination for sink stages without a path
        stack: Owns any files opened for sink stages with their own path

    Returns:
        SourceStage: Head of the built pipeline
    """
    builder = PipelineBuilder(input_stream, on_partial=config.input.on_partial)

    for stage in config.stages:
        _add_stage(builder, stage, config, output_stream, stack)

    if not config.has_sink:
        logger.warning("No send stage configured; appending one for the default output")
        builder.send(output_stream)

    return builder.build()


def _add_stage(builder: PipelineBuilder, stage: StageConfig, config: AppConfig,
               output_stream: TextIO, stack: ExitStack) -> None:
    if stage.type == "filter":
        builder.filter_by(FilterFactory.create_filter_chain(stage.filters, stage.composition))
    elif stage.type == "copy_to":
        builder.copy_to(stage.recipient)
    elif stage.type == "send":
        if stage.path is None:
            builder.send(output_stream)
        else:
            logger.info(f"Sink writing to {stage.path}")
            destination = stack.enter_context(
                open(stage.path, 'a' if config.output.append else 'w', encoding=config.output.encoding)
            )
            builder.send(destination)
