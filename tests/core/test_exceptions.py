"""
Test suite for core exception system.

Tests the error hierarchy, error context and recovery suggestions.
"""

import pytest

from mailchain.core.exceptions import (
    BuilderFinalizedError, ConfigurationError, ErrorCode, ErrorContext,
    MailChainError, MalformedInputError, PipelineError, RecoverySuggestion,
    UnimplementedOperationError
)


class TestErrorHierarchy:
    """Test the error class hierarchy and inheritance."""

    def test_base_error_creation(self):
        error = MailChainError("Test error")

        assert str(error) == "Test error"
        assert error.error_code == ErrorCode.UNKNOWN_ERROR
        assert error.recoverable is False
        assert error.suggestions == []
        assert error.context.correlation_id

    def test_base_error_with_context(self):
        context = ErrorContext(operation="test_operation", stage="filter")
        error = MailChainError("Test error", context=context)

        assert error.context is context
        assert error.context.operation == "test_operation"

    def test_unimplemented_operation(self):
        error = UnimplementedOperationError("run", stage="filter")

        assert isinstance(error, PipelineError)
        assert isinstance(error, NotImplementedError)
        assert error.context.operation == "run"
        assert error.context.stage == "filter"
        assert "run" in str(error)

    def test_builder_finalized(self):
        error = BuilderFinalizedError("copy_to")

        assert isinstance(error, PipelineError)
        assert isinstance(error, RuntimeError)
        assert "already finalized" in str(error)
        assert error.suggestions[0].action == "Create a new builder"

    def test_malformed_input(self):
        error = MalformedInputError("truncated", line_number=7, missing_fields=["body"])

        assert error.error_code == ErrorCode.INPUT_MALFORMED_RECORD
        assert error.context.line_number == 7
        assert error.context.user_context['missing_fields'] == ["body"]
        assert len(error.suggestions) == 2

    def test_configuration_error_suggestions(self):
        error = ConfigurationError("bad", error_code=ErrorCode.CONFIG_INVALID_VALUE)
        assert error.suggestions[0].command == "mailchain config show"

    def test_configuration_error_records_key(self):
        error = ConfigurationError("bad value", config_key="input.encoding")

        assert isinstance(error, ConfigurationError)
        assert error.context.user_context['config_key'] == "input.encoding"


class TestErrorReporting:
    """Test user-facing and debug output."""

    def test_suggestions_sorted_by_priority(self):
        error = MailChainError("x")
        error.add_suggestion(RecoverySuggestion("second", "d", priority=2))
        error.add_suggestion(RecoverySuggestion("first", "d", priority=1))

        assert [s.action for s in error.suggestions] == ["first", "second"]

    def test_user_message(self):
        error = MalformedInputError("Input ended early", line_number=4)
        message = error.get_user_message()

        assert message.startswith("Error: Input ended early")
        assert f"Error Code: {ErrorCode.INPUT_MALFORMED_RECORD.value}" in message
        assert "Line: 4" in message
        assert "Suggested solutions:" in message
        assert "mailchain run --on-partial drop" in message

    def test_debug_info(self):
        cause = ValueError("inner")
        error = MailChainError("outer", cause=cause)
        info = error.get_debug_info()

        assert info['error_type'] == "MailChainError"
        assert info['cause'] == {'type': 'ValueError', 'message': 'inner'}
        assert info['context']['correlation_id'] == error.context.correlation_id

    def test_errors_can_be_raised_and_caught_as_base(self):
        with pytest.raises(MailChainError):
            raise BuilderFinalizedError("build")
