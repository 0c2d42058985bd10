"""Typer CLI entrypoint for native_launch."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from native_launch.candidates.pipeline import rank_install
from native_launch.config import AppSettings, load_settings
from native_launch.install import InstallRecord, discover_executables, load_install_record
from native_launch.launcher import launch_native
from native_launch.logging_utils import LAUNCH_LOGGER_NAME, configure_logging
from native_launch.sandbox import write_sandbox_profile

app = typer.Typer(
    add_completion=False,
    help="native_launch command line interface.",
    no_args_is_help=True,
)

CONFIG_FILE_OPTION = typer.Option(
    None,
    "--config-file",
    help="Optional settings YAML path.",
    exists=False,
    file_okay=True,
    dir_okay=False,
    readable=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    log_level: str = "INFO",
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        try:
            logger = configure_logging(settings.paths.logs_root / "launch.log", level=log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    else:
        logger = logging.getLogger(LAUNCH_LOGGER_NAME)
    return settings, logger


def _resolve_record(
    record_file: Path | None,
    install_root: Path | None,
    executables: list[str] | None,
    isolate: bool | None,
    logger: logging.Logger,
) -> InstallRecord:
    if record_file is not None:
        record = load_install_record(record_file)
    elif install_root is not None:
        record = InstallRecord(install_root=install_root.resolve(), executables=list(executables or []))
    else:
        raise typer.BadParameter("Pass either --record or --install-root.")

    if isolate is not None:
        record = record.model_copy(update={"isolate_apps": isolate})
    return record.with_discovered_executables(logger=logger)


@app.command("show-config")
def show_config(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("discover")
def discover(
    install_root: Path = typer.Option(
        ...,
        "--install-root",
        help="Install directory to scan.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """List files under an install root that look launchable."""

    _, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    for relative_path in discover_executables(install_root.resolve(), logger=logger):
        typer.echo(relative_path)


@app.command("rank")
def rank(
    record_file: Path | None = typer.Option(
        None,
        "--record",
        help="Install record YAML/JSON file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    install_root: Path | None = typer.Option(None, "--install-root", help="Install directory."),
    executables: list[str] | None = typer.Option(
        None,
        "--exe",
        help="Declared executable, relative to the install root. Repeatable; scans when omitted.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Rank candidate executables without launching anything."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, log_level=log_level)
    record = _resolve_record(record_file, install_root, executables, None, logger)
    ranked = rank_install(record, settings, logger=logger)
    if not ranked:
        typer.echo("no executables left after weighing/sorting")
        raise typer.Exit(code=1)

    typer.echo("rank\tpath\tweight\tscore\tdepth")
    for position, candidate in enumerate(ranked, start=1):
        typer.echo(f"{position}\t{candidate.path}\t{candidate.weight}\t{candidate.score}\t{candidate.depth}")


@app.command(
    "launch",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def launch(
    ctx: typer.Context,
    record_file: Path | None = typer.Option(
        None,
        "--record",
        help="Install record YAML/JSON file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    install_root: Path | None = typer.Option(None, "--install-root", help="Install directory."),
    executables: list[str] | None = typer.Option(
        None,
        "--exe",
        help="Declared executable, relative to the install root. Repeatable; scans when omitted.",
    ),
    isolate: bool | None = typer.Option(
        None,
        "--isolate/--no-isolate",
        help="Override the record's sandbox isolation preference.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Launch the best-ranked executable; extra arguments are passed to it."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, log_level=log_level)
    record = _resolve_record(record_file, install_root, executables, isolate, logger)
    outcome = launch_native(record, settings, args=list(ctx.args), logger=logger)

    if outcome.succeeded:
        typer.echo(f"ok: {outcome.message}")
        return
    typer.echo(f"failed [{outcome.reason}]: {outcome.message}", err=True)
    raise typer.Exit(code=1)


@app.command("render-sandbox")
def render_sandbox(
    install_root: Path = typer.Option(
        ...,
        "--install-root",
        help="Install directory the profile grants access to.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Write the sandbox profile for an install and print its path."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    profile_path = write_sandbox_profile(install_root.resolve(), settings.sandbox, logger=logger)
    typer.echo(f"sandbox_profile_path: {profile_path}")


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
