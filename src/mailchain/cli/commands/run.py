"""
Run Command

Reads messages, passes them through the configured stages and writes the
result. Stages come from the configuration file unless stage options are
given on the command line.
"""

import logging
from contextlib import ExitStack
from typing import Annotated, List, Optional

import typer

from mailchain.cli.error_handling import handle_error
from mailchain.cli.utils import (
    handle_keyboard_interrupt,
    open_input,
    open_output,
    print_stage_summary,
    setup_logging,
)
from mailchain.core.config import ConfigManager
from mailchain.core.exceptions import ErrorCode, ErrorContext, MailChainError, RecoverySuggestion
from mailchain.pipeline.factory import build_pipeline
from mailchain.pipeline.stages.source import PartialPolicy

logger = logging.getLogger("mailchain.cli.run")


def run_pipeline(
    input_path: Annotated[Optional[str], typer.Argument(
        metavar="INPUT", help="Input file ('-' or omitted reads standard input)", show_default=False
    )] = None,

    # Configuration
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,

    # Output
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Output file ('-' writes standard output)")] = None,
    append: Annotated[Optional[bool], typer.Option("--append/--overwrite", help="Append to the output file")] = None,
    encoding: Annotated[Optional[str], typer.Option("--encoding", help="Text encoding for input and output files")] = None,

    # Stages
    senders: Annotated[Optional[List[str]], typer.Option("--from", help="Keep messages from this sender (repeatable)")] = None,
    recipients: Annotated[Optional[List[str]], typer.Option("--to", help="Keep messages to this recipient (repeatable)")] = None,
    keywords: Annotated[Optional[List[str]], typer.Option("--keyword", "-k", help="Keep messages whose body contains a keyword (repeatable)")] = None,
    copy_to: Annotated[Optional[List[str]], typer.Option("--copy-to", help="Also send a copy of each message to this address (repeatable)")] = None,

    # Input handling
    on_partial: Annotated[Optional[PartialPolicy], typer.Option(
        "--on-partial", case_sensitive=False, help="Handling of a trailing incomplete message"
    )] = None,

    # Output verbosity
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Enable debug logging")] = None,
):
    """
    Run a message pipeline.

    Input holds one message per three lines: sender, recipient, body.
    Output uses the same layout.

    [bold]Example:[/bold]

    [cyan]mailchain run inbox.txt --from erich@example.com --copy-to richard@example.com[/cyan]
    """
    cli_args = {
        'input': input_path,
        'output': output,
        'append': append,
        'encoding': encoding,
        'on_partial': on_partial,
        'senders': senders,
        'recipients': recipients,
        'keywords': keywords,
        'copy_to': copy_to,
        'verbose': verbose,
        'debug': debug,
    }

    try:
        app_config = ConfigManager(config_file=config).load_config(cli_args)
        setup_logging(app_config.get_log_level())
        logger.debug(f"Effective configuration: {app_config.model_dump(mode='json')}")

        with ExitStack() as stack:
            input_stream = open_input(app_config, stack)
            output_stream = open_output(app_config, stack)
            pipeline = build_pipeline(app_config, input_stream, output_stream, stack)
            pipeline.run()
            output_stream.flush()

        if app_config.verbose or app_config.debug:
            print_stage_summary(pipeline)

    except MailChainError as err:
        handle_error(err)
    except UnicodeError as e:
        error = MailChainError(
            f"Encoding error: {e}",
            error_code=ErrorCode.ENCODING_FAILED,
            context=ErrorContext(operation="run_pipeline"),
            cause=e
        )
        error.add_suggestion(RecoverySuggestion(
            action="Set the text encoding",
            description="Pass the encoding the input and output files use.",
            command="mailchain run INPUT --encoding latin-1",
            priority=1
        ))
        handle_error(error)
    except OSError as e:
        handle_error(MailChainError(
            f"I/O error: {e}",
            error_code=ErrorCode.IO_OPERATION_FAILED,
            context=ErrorContext(operation="run_pipeline", file_path=getattr(e, 'filename', None)),
            cause=e
        ))
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
