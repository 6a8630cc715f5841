"""
Core Exception Hierarchy for MailChain

Provides error classification with error codes, recovery suggestions,
and context information for pipeline construction, input parsing and
configuration failures.
"""

import sys
import time
import traceback
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(Enum):
    """Standard error codes for different error categories."""

    # Pipeline construction and execution errors (1000-1999)
    PIPELINE_UNIMPLEMENTED_OPERATION = 1001
    PIPELINE_BUILDER_FINALIZED = 1002
    PIPELINE_INVALID_STAGE = 1003

    # Input and output errors (2000-2999)
    INPUT_MALFORMED_RECORD = 2001
    IO_OPERATION_FAILED = 2002
    ENCODING_FAILED = 2003

    # Configuration errors (3000-3999)
    CONFIG_INVALID_FORMAT = 3001
    CONFIG_INVALID_VALUE = 3003
    CONFIG_FILE_NOT_FOUND = 3004

    # Generic/unknown errors (9000-9999)
    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Contextual information about an error occurrence."""

    operation: str = ""
    stage: str = ""
    line_number: Optional[int] = None
    file_path: Optional[str] = None
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    system_info: Dict[str, Any] = field(default_factory=dict)
    user_context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            'operation': self.operation,
            'stage': self.stage,
            'line_number': self.line_number,
            'file_path': self.file_path,
            'correlation_id': self.correlation_id,
            'timestamp': self.timestamp,
            'system_info': self.system_info,
            'user_context': self.user_context
        }


@dataclass
class RecoverySuggestion:
    """Structured recovery suggestion for error resolution."""

    action: str  # Brief action description
    description: str  # Detailed explanation
    command: Optional[str] = None  # CLI command to resolve
    priority: int = 1  # Priority order (1=highest)

    def to_dict(self) -> Dict[str, Any]:
        """Convert suggestion to dictionary."""
        return {
            'action': self.action,
            'description': self.description,
            'command': self.command,
            'priority': self.priority
        }


class MailChainError(Exception):
    """
    Base exception for all MailChain errors.

    Carries an error code, recovery suggestions and context so the CLI
    can render a useful report.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = False,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        """
        Initialize MailChain error.

        Args:
            message: Human-readable error description
            error_code: Standardized error code
            context: Contextual information about the error
            cause: Original exception that caused this error
            recoverable: Whether the error can potentially be recovered
            suggestions: List of recovery suggestions
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.recoverable = recoverable
        self.suggestions = suggestions or []
        self.stack_trace = traceback.format_exc()

        if not self.context.correlation_id:
            self.context.correlation_id = str(uuid.uuid4())[:8]

        if not self.context.system_info:
            self.context.system_info = {
                'platform': sys.platform,
                'python_version': sys.version,
            }

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        """Add a recovery suggestion to the error."""
        self.suggestions.append(suggestion)
        self.suggestions.sort(key=lambda s: s.priority)

    def get_user_message(self) -> str:
        """Get user-friendly error message with suggestions."""
        lines = [f"Error: {self.message}"]

        if self.error_code != ErrorCode.UNKNOWN_ERROR:
            lines.append(f"Error Code: {self.error_code.value}")

        if self.context.line_number is not None:
            lines.append(f"Line: {self.context.line_number}")

        if self.suggestions:
            lines.append("\nSuggested solutions:")
            for i, suggestion in enumerate(self.suggestions[:3], 1):
                lines.append(f"  {i}. {suggestion.action}")
                lines.append(f"     {suggestion.description}")
                if suggestion.command:
                    lines.append(f"     Command: {suggestion.command}")

        return "\n".join(lines)

    def get_debug_info(self) -> Dict[str, Any]:
        """Get comprehensive debug information."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code.value,
            'recoverable': self.recoverable,
            'context': self.context.to_dict(),
            'cause': {
                'type': type(self.cause).__name__ if self.cause else None,
                'message': str(self.cause) if self.cause else None
            },
            'suggestions': [s.to_dict() for s in self.suggestions],
            'stack_trace': self.stack_trace
        }


class PipelineError(MailChainError):
    """Exception for misuse of stages or the pipeline builder."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.PIPELINE_INVALID_STAGE,
        stage: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if stage:
            context.stage = stage

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)


class UnimplementedOperationError(PipelineError, NotImplementedError):
    """Raised when ``run()`` is called on a stage that is not a pipeline head."""

    def __init__(self, operation: str, stage: Optional[str] = None, **kwargs):
        kwargs.setdefault('context', ErrorContext(operation=operation))
        super().__init__(
            f"Operation '{operation}' is not implemented by stage '{stage}'",
            error_code=ErrorCode.PIPELINE_UNIMPLEMENTED_OPERATION,
            stage=stage,
            **kwargs
        )
        self.operation = operation


class BuilderFinalizedError(PipelineError, RuntimeError):
    """Raised when a pipeline builder is used after ``build()``."""

    def __init__(self, operation: str, **kwargs):
        kwargs.setdefault('context', ErrorContext(operation=operation))
        super().__init__(
            f"Pipeline builder already finalized; cannot call '{operation}'",
            error_code=ErrorCode.PIPELINE_BUILDER_FINALIZED,
            **kwargs
        )
        self.operation = operation

        self.add_suggestion(RecoverySuggestion(
            action="Create a new builder",
            description="A builder produces exactly one pipeline. Start a new PipelineBuilder for each chain.",
            priority=1
        ))


class MalformedInputError(MailChainError):
    """Raised when the input ends in the middle of a sender/recipient/body group."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        missing_fields: Optional[List[str]] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext(operation="read_message", stage="source")
        context.line_number = line_number
        if missing_fields:
            context.user_context['missing_fields'] = missing_fields

        kwargs['context'] = context
        kwargs['error_code'] = ErrorCode.INPUT_MALFORMED_RECORD

        super().__init__(message, **kwargs)
        self.line_number = line_number
        self.missing_fields = missing_fields or []

        self.add_suggestion(RecoverySuggestion(
            action="Check the input file",
            description="Every message needs exactly three lines: sender, recipient and body.",
            priority=1
        ))
        self.add_suggestion(RecoverySuggestion(
            action="Relax the partial input policy",
            description="Drop or pad the trailing partial message instead of failing.",
            command="mailchain run --on-partial drop",
            priority=2
        ))


class ConfigurationError(MailChainError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_FORMAT,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if config_key:
            context.user_context['config_key'] = config_key
            context.user_context['config_value'] = config_value

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.CONFIG_FILE_NOT_FOUND:
            self.add_suggestion(RecoverySuggestion(
                action="Check the configuration path",
                description="Pass an existing YAML or JSON file, or omit --config to use defaults.",
                priority=1
            ))
        elif error_code == ErrorCode.CONFIG_INVALID_VALUE:
            self.add_suggestion(RecoverySuggestion(
                action="Check configuration values",
                description="Review the configuration for invalid values and correct them.",
                command="mailchain config show",
                priority=1
            ))
