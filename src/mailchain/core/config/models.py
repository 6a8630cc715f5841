"""
Configuration Models

Pydantic models for type-safe configuration of input, output and the
ordered list of pipeline stages.
"""

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mailchain.filters.factory import FilterFactory
from mailchain.pipeline.stages.source import PartialPolicy


class InputConfig(BaseModel):
    """Configuration for the message source."""

    path: Optional[Path] = Field(
        default=None,
        description="Input file path (None or '-' reads standard input)"
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the input"
    )
    on_partial: PartialPolicy = Field(
        default=PartialPolicy.DROP,
        description="What to do when input ends partway through a message: drop, error or pad"
    )

    @field_validator('path', mode='before')
    @classmethod
    def normalize_stdin(cls, v):
        """Treat '-' as standard input."""
        if v in ("-", ""):
            return None
        return v


class OutputConfig(BaseModel):
    """Configuration for the default message destination."""

    path: Optional[Path] = Field(
        default=None,
        description="Output file path (None or '-' writes standard output)"
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the output"
    )
    append: bool = Field(
        default=False,
        description="Append to the output file instead of overwriting it"
    )

    @field_validator('path', mode='before')
    @classmethod
    def normalize_stdout(cls, v):
        """Treat '-' as standard output."""
        if v in ("-", ""):
            return None
        return v


class StageConfig(BaseModel):
    """Configuration for one stage after the source."""

    model_config = ConfigDict(extra='forbid')

    type: Literal["filter", "copy_to", "send"] = Field(
        description="Stage type"
    )

    # filter
    filters: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Filter definitions, each {'type': ..., 'config': {...}}"
    )
    composition: Literal["and", "or"] = Field(
        default="and",
        description="How filter definitions combine"
    )

    # copy_to
    recipient: Optional[str] = Field(
        default=None,
        description="Recipient address copies are sent to"
    )

    # send
    path: Optional[Path] = Field(
        default=None,
        description="File this sink writes to (None uses the output configuration)"
    )

    @model_validator(mode='after')
    def validate_stage_fields(self):
        """Check that each stage type has the settings it needs."""
        if self.type == "filter":
            if not self.filters:
                raise ValueError("filter stage requires at least one filter definition")
            # Surface unknown types and bad filter settings at load time
            FilterFactory.create_filter_chain(self.filters, self.composition)
        elif self.type == "copy_to":
            if not self.recipient or not self.recipient.strip():
                raise ValueError("copy_to stage requires a non-empty recipient")
        return self


class AppConfig(BaseModel):
    """Root application configuration model."""

    version: str = Field(default="0.1.0", description="Configuration version")

    input: InputConfig = Field(default_factory=InputConfig, description="Input configuration")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output configuration")
    stages: List[StageConfig] = Field(
        default_factory=list,
        description="Stages after the source, in pipeline order"
    )

    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed logging"
    )

    @property
    def has_sink(self) -> bool:
        """Whether any configured stage writes output."""
        return any(stage.type == "send" for stage in self.stages)

    def get_log_level(self) -> str:
        """Logging level name implied by the verbosity flags."""
        if self.debug:
            return "DEBUG"
        if self.verbose:
            return "INFO"
        return "WARNING"
