"""
Tests for CLI Commands

Tests the run and config commands through Typer's CliRunner.
"""

import pytest
import yaml
from typer.testing import CliRunner

from mailchain import __version__
from mailchain.cli.main import app as main_app


@pytest.fixture
def workdir(tmp_path, clean_env):
    """Run each CLI test from an empty directory with no MAILCHAIN_* variables."""
    clean_env.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def inbox(workdir, sample_input):
    path = workdir / "inbox.txt"
    path.write_text(sample_input)
    return path


@pytest.mark.cli
class TestRunCommand:
    """Test the run command."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_reference_chain_from_options(self, inbox, workdir, sample_expected_output):
        out = workdir / "out.txt"
        result = self.runner.invoke(main_app, [
            'run', str(inbox),
            '--from', 'erich@example.com',
            '--copy-to', 'richard@example.com',
            '-o', str(out),
        ])

        assert result.exit_code == 0, result.output
        assert out.read_text() == sample_expected_output

    def test_stdin_input(self, workdir, sample_input):
        out = workdir / "out.txt"
        result = self.runner.invoke(main_app, ['run', '-', '-o', str(out)], input=sample_input)

        assert result.exit_code == 0, result.output
        assert out.read_text() == sample_input

    def test_stdout_output(self, inbox):
        result = self.runner.invoke(main_app, ['run', str(inbox), '--to', 'erich@example.com'])

        assert result.exit_code == 0, result.output
        assert "I do not make mistakes of that kind" in result.output
        assert "Hello there" not in result.output

    def test_append_output(self, inbox, workdir, sample_input):
        out = workdir / "out.txt"
        out.write_text("existing\n")

        result = self.runner.invoke(main_app, ['run', str(inbox), '-o', str(out), '--append'])

        assert result.exit_code == 0, result.output
        assert out.read_text() == "existing\n" + sample_input

    def test_stages_from_config_file(self, inbox, workdir, sample_expected_output):
        config_path = workdir / "chain.yaml"
        config_path.write_text(yaml.safe_dump({
            'stages': [
                {'type': 'filter', 'filters': [{'type': 'sender', 'config': {'addresses': ['erich@example.com']}}]},
                {'type': 'copy_to', 'recipient': 'richard@example.com'},
                {'type': 'send'},
            ]
        }))
        out = workdir / "out.txt"

        result = self.runner.invoke(main_app, ['run', str(inbox), '-c', str(config_path), '-o', str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text() == sample_expected_output

    def test_partial_input_error_policy(self, workdir):
        inbox = workdir / "partial.txt"
        inbox.write_text("a\nb\nc\nd\n")

        result = self.runner.invoke(main_app, [
            'run', str(inbox), '-o', str(workdir / "out.txt"), '--on-partial', 'error'
        ])

        assert result.exit_code == 1
        assert "MalformedInputError" in result.output
        assert (workdir / "out.txt").read_text() == "a\nb\nc\n"

    def test_partial_input_dropped_by_default(self, workdir):
        inbox = workdir / "partial.txt"
        inbox.write_text("a\nb\nc\nd\n")
        out = workdir / "out.txt"

        result = self.runner.invoke(main_app, ['run', str(inbox), '-o', str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text() == "a\nb\nc\n"

    def test_invalid_partial_policy(self, inbox):
        result = self.runner.invoke(main_app, ['run', str(inbox), '--on-partial', 'ignore'])
        assert result.exit_code != 0

    def test_missing_input_file(self, workdir):
        result = self.runner.invoke(main_app, ['run', str(workdir / "absent.txt")])

        assert result.exit_code == 1
        assert "Error: MailChainError" in result.output
        assert "Errno 2" in result.output

    def test_undecodable_input(self, workdir):
        inbox = workdir / "latin.txt"
        inbox.write_bytes(b"a\xff\nb\nc\n")

        result = self.runner.invoke(main_app, ['run', str(inbox), '-o', str(workdir / "out.txt")])

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "Error: MailChainError" in result.output
        assert "--encoding" in result.output

    def test_input_encoding_option(self, workdir):
        inbox = workdir / "latin.txt"
        inbox.write_bytes(b"a\xff\nb\nc\n")
        out = workdir / "out.txt"

        result = self.runner.invoke(main_app, ['run', str(inbox), '-o', str(out), '--encoding', 'latin-1'])

        assert result.exit_code == 0, result.output
        assert out.read_bytes() == b"a\xff\nb\nc\n"

    def test_missing_config_file(self, inbox, workdir):
        result = self.runner.invoke(main_app, ['run', str(inbox), '-c', str(workdir / "absent.yaml")])

        assert result.exit_code == 1
        assert "ConfigurationError" in result.output

    def test_verbose_prints_summary(self, inbox, workdir):
        result = self.runner.invoke(main_app, [
            'run', str(inbox), '-o', str(workdir / "out.txt"), '--from', 'erich@example.com', '-v'
        ])

        assert result.exit_code == 0, result.output
        assert "Pipeline Summary" in result.output


@pytest.mark.cli
class TestConfigCommand:
    """Test the config sub-commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_init_then_show(self, workdir):
        result = self.runner.invoke(main_app, ['config', 'init'])
        assert result.exit_code == 0, result.output
        assert (workdir / "mailchain.yaml").exists()

        result = self.runner.invoke(main_app, ['config', 'show'])
        assert result.exit_code == 0, result.output
        assert "Pipeline Stages" in result.output
        assert "copy_to" in result.output

    def test_init_refuses_to_overwrite(self, workdir):
        (workdir / "mailchain.yaml").write_text("verbose: true\n")

        result = self.runner.invoke(main_app, ['config', 'init'])

        assert result.exit_code == 1
        assert (workdir / "mailchain.yaml").read_text() == "verbose: true\n"

    def test_show_defaults_has_implicit_sink(self, workdir):
        result = self.runner.invoke(main_app, ['config', 'show'])

        assert result.exit_code == 0, result.output
        assert "implicit" in result.output

    def test_show_filter_without_settings(self, workdir):
        path = workdir / "chain.yaml"
        path.write_text(yaml.safe_dump({'stages': [
            {'type': 'filter', 'filters': [{'type': 'keyword', 'config': None}]},
        ]}))

        result = self.runner.invoke(main_app, ['config', 'show', '-c', str(path)])

        assert result.exit_code == 0, result.output
        assert "keyword()" in result.output

    def test_show_invalid_config(self, workdir):
        path = workdir / "bad.yaml"
        path.write_text(yaml.safe_dump({'stages': [{'type': 'copy_to'}]}))

        result = self.runner.invoke(main_app, ['config', 'show', '-c', str(path)])

        assert result.exit_code == 1


@pytest.mark.cli
class TestVersion:
    def test_version(self):
        result = CliRunner().invoke(main_app, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output
