"""CLI entry point for goverage.

Usage:
    goverage [flags] -coverprofile=coverage.out package...

Flags keep the single-dash spelling of ``go test``; the double-dash forms
work as well.
"""

from pathlib import Path
from typing import Optional

import click
from click.core import ParameterSource

from . import __version__
from .config.loader import build_config, find_config_file, load_config_file
from .config.schema import DEFAULT_COVERPROFILE
from .config.validator import validate_config
from .errors import EXIT_FAILURE, ConfigError, Fatal, UsageError
from .profile.schema import VALID_MODES
from .runner.orchestrator import CoverageRun

FLAG_PARAMS = (
    "coverprofile",
    "covermode",
    "cpu",
    "parallel",
    "timeout",
    "short",
    "verbose",
    "trace",
    "race",
    "header_when_empty",
)


@click.command(
    options_metavar="[flags]",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="goverage")
@click.option(
    "-coverprofile", "--coverprofile", "coverprofile",
    default=DEFAULT_COVERPROFILE, show_default=True,
    help="Write the merged coverage profile to this file",
)
@click.option(
    "-covermode", "--covermode", "covermode",
    type=click.Choice(VALID_MODES), default=None,
    help="Sent as covermode argument to go test",
)
@click.option("-cpu", "--cpu", "cpu", default=None, help="Sent as cpu argument to go test")
@click.option("-parallel", "--parallel", "parallel", default=None, help="Sent as parallel argument to go test")
@click.option("-timeout", "--timeout", "timeout", default=None, help="Sent as timeout argument to go test")
@click.option("-short", "--short", "short", is_flag=True, help="Sent as short argument to go test")
@click.option("-v", "--verbose", "verbose", is_flag=True, help="Sent as v argument to go test; show test output")
@click.option("-x", "--trace", "trace", is_flag=True, help="Sent as x argument to go test")
@click.option("-race", "--race", "race", is_flag=True, help="Enable data race detection")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None,
    help="YAML config file (default: .goverage.yaml in the current directory)",
)
@click.option(
    "--header-when-empty", "header_when_empty", is_flag=True,
    help="Write a mode line even when no package produced coverage",
)
@click.argument("patterns", nargs=-1)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], patterns: tuple[str, ...], **flags) -> None:
    """Run go test for every package matching PATTERNS and merge the
    coverage profiles into one file.

    PATTERNS default to every package under the current directory.
    """
    overrides = {
        name: flags[name]
        for name in FLAG_PARAMS
        if ctx.get_parameter_source(name) in (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT)
    }
    if patterns:
        overrides["patterns"] = patterns

    try:
        config_file = config_path or find_config_file()
        file_values = load_config_file(config_file) if config_file else {}
        config = build_config(file_values, overrides)
    except UsageError as e:
        raise click.UsageError(str(e), ctx=ctx) from e
    except ConfigError as e:
        click.echo(f"goverage: {e}", err=True)
        ctx.exit(EXIT_FAILURE)

    for warning in validate_config(config).warnings:
        click.echo(f"goverage: warning: {warning}", err=True)

    try:
        outcome = CoverageRun(config).run()
    except KeyboardInterrupt:
        click.echo("goverage: interrupted", err=True)
        ctx.exit(130)

    if isinstance(outcome, Fatal):
        click.echo(f"goverage: {outcome.message}", err=True)
    elif outcome.message and (outcome.exit_code != 0 or config.verbose):
        click.echo(f"goverage: {outcome.message}", err=True)

    ctx.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
