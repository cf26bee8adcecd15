"""Command line interface: run, init and version."""

from __future__ import annotations

import asyncio
import random
from pathlib import Path

import typer

app = typer.Typer(name="testy", help="Run testy test suites")

EXAMPLE_CONFIG = """\
# testy configuration. ${VAR} and ${VAR:-default} are expanded from the environment.
directory: ./tests
filter: _test[.]py$
language: en
fail_fast: false
random_order: false
"""

EXAMPLE_TEST = '''\
from testy import suite


@suite("arithmetic")
def arithmetic(s):
    numbers = {}

    @s.before
    def load_numbers():
        numbers["two"] = 2

    @s.test("adds two numbers")
    def _(t):
        t.that(numbers["two"] + 2).is_equal_to(4)

    @s.test("knows about identity")
    def _(t):
        t.that(numbers["two"]).is_identical_to(2)

    s.test("handles division by zero")
'''


@app.command()
def run(
    paths: list[str] | None = typer.Argument(
        None, help="Test files or directories (defaults to the configured directory)"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to a YAML config (defaults to .testy.yaml)"
    ),
    fail_fast: bool | None = typer.Option(
        None, "--fail-fast/--no-fail-fast", help="Stop after the first suite with failures"
    ),
    random_order: bool | None = typer.Option(
        None, "--random-order/--no-random-order", help="Shuffle tests within each suite"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed for random order"),
    language: str | None = typer.Option(None, "--language", "-l", help="Output language"),
    file_filter: str | None = typer.Option(
        None, "--filter", help="Regex test file names must match"
    ),
    suite_filter: str | None = typer.Option(
        None, "--suite", help="Run only suites whose name matches this regex"
    ),
    test_filter: str | None = typer.Option(
        None, "--test", help="Run only tests whose name matches this regex"
    ),
    junit: str | None = typer.Option(None, "--junit", help="Write a JUnit XML report"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Write debug output to this file"
    ),
):
    """Discover and run test suites."""
    from testy.config import load_configuration
    from testy.discovery import load_suites
    from testy.errors import ConfigurationError
    from testy.i18n import I18n, I18nMessage
    from testy.observer import ObserverGroup
    from testy.reporting import ConsoleReporter, Formatter, JUnitReporter
    from testy.runner import Runner, SuiteRegistry
    from testy.verbose import setup_logger

    try:
        configuration = load_configuration(Path(config) if config else None)
        configuration = configuration.with_overrides(
            fail_fast=fail_fast,
            random_order=random_order,
            seed=seed,
            language=language,
            filter=file_filter,
            suite_filter=suite_filter,
            test_filter=test_filter,
        )
        if configuration.random_order and configuration.seed is None:
            configuration = configuration.with_overrides(
                seed=random.SystemRandom().randrange(2**32)
            )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    i18n = I18n(configuration.language.value)
    formatter = Formatter(i18n, color=not no_color)
    logger = setup_logger(
        Path(debug_log) if debug_log else None, verbose=verbose, logger_name="testy_run"
    )

    target_paths = paths or [configuration.directory]
    try:
        suites = load_suites([Path(p) for p in target_paths], configuration, logger)
    except ConfigurationError as e:
        formatter.display_error(I18nMessage.of("configuration_error", e))
        raise typer.Exit(2)

    observer = ObserverGroup(
        [ConsoleReporter(formatter, configuration, target_paths, show_durations=verbose)]
    )
    if junit:
        observer.add(JUnitReporter(Path(junit), i18n))

    runner = Runner(SuiteRegistry(suites), configuration, observer, logger)
    try:
        asyncio.run(runner.run())
    except ConfigurationError as e:
        formatter.display_error(I18nMessage.of("configuration_error", e))
        raise typer.Exit(2)

    if junit:
        typer.echo(f"JUnit report: {junit}")

    # Exit with non-zero if any test failed or raised an error
    if runner.has_errors_or_failures():
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to initialize the project in"),
):
    """Write an example config and an example test file."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    config_path = project_dir / ".testy.yaml"
    if config_path.exists():
        typer.echo(f".testy.yaml already exists in {dir}, skipping.")
        return
    config_path.write_text(EXAMPLE_CONFIG)

    tests_dir = project_dir / "tests"
    tests_dir.mkdir(parents=True, exist_ok=True)
    example = tests_dir / "example_test.py"
    if not example.exists():
        example.write_text(EXAMPLE_TEST)

    typer.echo(f"Initialized testy project in {dir}:")
    typer.echo("  .testy.yaml             - example config")
    typer.echo("  tests/example_test.py   - example suite")


@app.command()
def version():
    """Print the installed testy version."""
    import importlib.metadata

    try:
        testy_version = importlib.metadata.version("testy")
    except importlib.metadata.PackageNotFoundError:
        testy_version = "unknown"
    typer.echo(f"testy {testy_version}")
