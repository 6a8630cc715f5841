"""
Tests for Configuration Models

Validation of input, output and stage configuration.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mailchain.core.config.models import AppConfig, InputConfig, OutputConfig, StageConfig
from mailchain.pipeline.stages.source import PartialPolicy


class TestInputOutputConfig:
    """Test InputConfig and OutputConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.input.path is None
        assert config.input.encoding == "utf-8"
        assert config.input.on_partial is PartialPolicy.DROP
        assert config.output.path is None
        assert config.output.append is False
        assert config.stages == []

    def test_dash_means_standard_stream(self):
        assert InputConfig(path="-").path is None
        assert OutputConfig(path="-").path is None

    def test_path_conversion(self):
        assert InputConfig(path="inbox.txt").path == Path("inbox.txt")

    def test_on_partial_from_string(self):
        assert InputConfig(on_partial="pad").on_partial is PartialPolicy.PAD

    def test_invalid_on_partial(self):
        with pytest.raises(ValidationError):
            InputConfig(on_partial="ignore")


class TestStageConfig:
    """Test per-type stage validation."""

    def test_filter_stage(self):
        stage = StageConfig(type="filter", filters=[{'type': 'sender', 'config': {'addresses': ['a']}}])
        assert stage.composition == "and"

    def test_filter_stage_requires_filters(self):
        with pytest.raises(ValidationError, match="at least one filter"):
            StageConfig(type="filter")

    def test_filter_stage_rejects_unknown_filter(self):
        with pytest.raises(ValidationError, match="Unknown filter type"):
            StageConfig(type="filter", filters=[{'type': 'size'}])

    def test_copy_stage_requires_recipient(self):
        with pytest.raises(ValidationError, match="non-empty recipient"):
            StageConfig(type="copy_to", recipient="  ")

    def test_send_stage_optional_path(self):
        assert StageConfig(type="send").path is None
        assert StageConfig(type="send", path="out.txt").path == Path("out.txt")

    def test_unknown_stage_type(self):
        with pytest.raises(ValidationError):
            StageConfig(type="archive")

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            StageConfig(type="send", destination="out.txt")


class TestAppConfig:
    """Test root configuration helpers."""

    def test_has_sink(self):
        assert not AppConfig().has_sink
        assert AppConfig(stages=[{'type': 'send'}]).has_sink

    @pytest.mark.parametrize("verbose, debug, level", [
        (False, False, "WARNING"),
        (True, False, "INFO"),
        (False, True, "DEBUG"),
        (True, True, "DEBUG"),
    ])
    def test_log_level(self, verbose, debug, level):
        assert AppConfig(verbose=verbose, debug=debug).get_log_level() == level
