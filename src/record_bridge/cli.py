"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from record_bridge.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from record_bridge.run_execution import (
    GenerationRequest,
    HydrationRequest,
    RunExecutionError,
    describe_generated_types,
    execute_generation_run,
    execute_hydration_run,
    load_generation_artifacts,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="record-bridge")
@click.option("-v", "--verbose", count=True, help="Log progress (-v) or details (-vv) to stderr.")
def cli(verbose: int) -> None:
    """Generate typed client classes from backend struct schemas."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
            stream=sys.stderr,
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generator configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML generator configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Override the generated module path from the configuration",
)
def generate(config_path: str, output_path: str | None) -> None:
    """Generate the client module, keeping hand-written extension regions."""
    try:
        outcome = execute_generation_run(
            GenerationRequest(config_path=config_path, output_path=output_path)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))


@cli.command(name="describe")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML generator configuration file",
)
def describe(config_path: str) -> None:
    """Print how every schema field maps to its generated type and hydration action."""
    try:
        artifacts = load_generation_artifacts(config_path)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for line in describe_generated_types(artifacts):
        click.echo(line)


@cli.command(name="hydrate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML generator configuration file",
)
@click.option("--type", "type_name", required=True, help="Record type to hydrate")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON payload",
)
@click.option(
    "--module",
    "module_path",
    required=False,
    type=click.Path(path_type=str),
    help="Generated module to use instead of the configured output path",
)
def hydrate_payload(
    config_path: str, type_name: str, input_path: str, module_path: str | None
) -> None:
    """Hydrate a JSON payload with a generated class and print it re-serialized."""
    try:
        record = execute_hydration_run(
            HydrationRequest(
                config_path=config_path,
                type_name=type_name,
                input_path=input_path,
                module_path=module_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(record.to_json(indent=2))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
