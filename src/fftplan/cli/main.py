"""CLI entry point for fftplan."""
from __future__ import annotations

import logging
import sys
import time
from typing import Optional, Tuple

import click
import numpy as np
import yaml

from fftplan import __version__, bootstrap
from fftplan.core.kinds import Effort, TransformKind
from fftplan.core.plan import build
from fftplan.jobs import JobOptions, exit_code, load_jobs, run_jobs, select_jobs
from fftplan.jobs.loader import parse_sequence
from fftplan.providers import default_provider_name, provider_manager
from fftplan.reporting import JsonReporter, TerminalReporter


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

KIND_CHOICES = [kind.value for kind in TransformKind]
EFFORT_CHOICES = [level.name.lower() for level in Effort] + [str(level.value) for level in Effort]


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"fftplan {__version__}")
    raise click.exceptions.Exit()


def _kind_option(default: str = "fft"):
    return click.option(
        "--kind",
        type=click.Choice(KIND_CHOICES, case_sensitive=False),
        default=default,
        show_default=True,
        help="Transform kind.",
    )


def _effort_option():
    return click.option(
        "--effort",
        type=click.Choice(EFFORT_CHOICES, case_sensitive=False),
        default="estimate",
        show_default=True,
        help="Planning effort level.",
    )


def _provider_option():
    return click.option("--provider", type=str, help="Strategy provider (defaults to $FFTPLAN_PROVIDER or scipy).")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the fftplan version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Cached FFT and DCT plans."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    bootstrap()
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@_kind_option()
@_effort_option()
@_provider_option()
@click.option("--inverse", is_flag=True, help="Run the backward transform.")
@click.option(
    "--input",
    "values",
    type=str,
    required=True,
    help="Comma-separated samples; complex values as 1+2j.",
)
def transform(kind: str, effort: str, provider: Optional[str], inverse: bool, values: str) -> None:
    """Transform one sequence and print one output value per line."""

    try:
        data = parse_sequence(_split_csv(values), complex_ok=True, label="--input")
        with build(data, kind, effort, provider=provider) as plan:
            output = plan.execute(data, inverse=inverse)
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    for value in output:
        click.echo(_format_value(value))


@cli.command()
@_kind_option()
@_effort_option()
@_provider_option()
@click.option("--size", type=int, required=True, help="Number of samples.")
def describe(kind: str, effort: str, provider: Optional[str], size: int) -> None:
    """Build a plan and print its configuration."""

    try:
        with build(size, kind, effort, provider=provider) as plan:
            details = plan.describe()
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    click.echo(yaml.safe_dump(details, sort_keys=False).rstrip())


@cli.command()
@click.option(
    "--jobs",
    "jobs_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="YAML job file.",
)
@click.option("--names", "name_filters", type=str, help="Comma-separated job name filters (supports globs).")
@click.option("--tags", "tag_filters", type=str, help="Comma-separated tags to include.")
@click.option("--skip-tags", "skip_tag_filters", type=str, help="Comma-separated tags to skip.")
@_provider_option()
@click.option("--list", "list_only", is_flag=True, help="List matched jobs without running.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    default="terminal",
    show_default=True,
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
def run(
    jobs_path: str,
    name_filters: Optional[str],
    tag_filters: Optional[str],
    skip_tag_filters: Optional[str],
    provider: Optional[str],
    list_only: bool,
    report_format: str,
    report_path: Optional[str],
    no_color: bool,
) -> None:
    """Execute the transform jobs in a job file."""

    options = JobOptions(
        names=_split_csv(name_filters),
        tags=_split_csv(tag_filters),
        skip_tags=_split_csv(skip_tag_filters),
        provider=provider,
        list_only=list_only,
    )
    try:
        job_file = load_jobs(jobs_path)
        if options.list_only:
            for job in select_jobs(job_file, options):
                click.echo(job.identifier())
            raise click.exceptions.Exit(0)
        if report_format == "json":
            reporter = JsonReporter(report_path or "fftplan-report.json")
        else:
            reporter = TerminalReporter(use_color=not no_color)
        results = run_jobs(job_file, options, reporters=[reporter])
    except click.exceptions.Exit:
        raise
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code(results))


@cli.command()
@_kind_option()
@_effort_option()
@_provider_option()
@click.option("--size", type=int, required=True, help="Number of samples.")
@click.option("--repeat", type=int, default=1000, show_default=True, help="Executions against the cached plan.")
@click.option("--seed", type=int, default=0, show_default=True, help="Seed for the random input.")
def bench(kind: str, effort: str, provider: Optional[str], size: int, repeat: int, seed: int) -> None:
    """Compare a cached plan against building a fresh plan per call."""

    if repeat < 1:
        raise click.BadParameter("--repeat must be at least 1")
    data = np.random.default_rng(seed).standard_normal(size)
    try:
        start = time.perf_counter()
        with build(size, kind, effort, provider=provider) as plan:
            build_s = time.perf_counter() - start
            start = time.perf_counter()
            for _ in range(repeat):
                plan.execute(data)
            cached_s = time.perf_counter() - start
            provider_name = plan.provider
        fresh_runs = min(repeat, 100)
        start = time.perf_counter()
        for _ in range(fresh_runs):
            with build(size, kind, effort, provider=provider) as fresh:
                fresh.execute(data)
        fresh_s = time.perf_counter() - start
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{kind}[{size}] provider={provider_name} effort={effort}")
    click.echo(f"  build:          {build_s * 1e3:.3f} ms")
    click.echo(f"  cached execute: {cached_s / repeat * 1e6:.2f} us/call ({repeat} calls)")
    click.echo(f"  fresh plan:     {fresh_s / fresh_runs * 1e6:.2f} us/call ({fresh_runs} calls)")


@cli.command()
def providers() -> None:
    """List registered strategy providers."""

    default = default_provider_name()
    for provider in provider_manager.providers():
        state = "available" if provider.available() else "unavailable"
        marker = " (default)" if provider.name == default else ""
        click.echo(f"{provider.name}: {state}{marker}")


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="fftplan", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


def _format_value(value: complex) -> str:
    if isinstance(value, complex) or np.iscomplexobj(value):
        return f"{value.real:.12g}{value.imag:+.12g}j"
    return f"{float(value):.12g}"


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return tuple()
    parts = [part.strip() for part in value.split(",") if part.strip()]
    return tuple(parts)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
