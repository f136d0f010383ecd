from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path

import typer

from rog.base import Test
from rog.reporting.console import OutputType

app = typer.Typer(name="rog", help="Run hierarchical test suites and report results")


@app.callback()
def main():
    """Compose, run and report hierarchical test suites."""


def _import_module(module_ref: str):
    if module_ref.endswith(".py") or Path(module_ref).is_file():
        path = Path(module_ref)
        if not path.exists():
            raise FileNotFoundError(f"suite file not found: {module_ref}")
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"cannot import {module_ref}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(spec.name, None)
            raise
        return module
    return importlib.import_module(module_ref)


def load_test(target: str) -> Test:
    """Resolve ``module:attr`` or ``file.py:attr`` to a Test.

    attr may name a Test instance, a Test subclass or a zero-argument
    callable returning a Test.
    """
    module_ref, sep, attr = target.rpartition(":")
    if not sep or not module_ref or not attr:
        raise ValueError(f"target must look like 'module:attr', got '{target}'")

    obj = getattr(_import_module(module_ref), attr)
    if not isinstance(obj, Test) and callable(obj):
        obj = obj()
    if not isinstance(obj, Test):
        raise TypeError(f"'{target}' does not provide a test, got {type(obj).__name__}")
    return obj


@app.command()
def run(
    target: str = typer.Argument(help="Suite to run, as module:attr or file.py:attr"),
    output: OutputType | None = typer.Option(
        None, "--output", "-o", help="Level of detail (default: full)"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to rog YAML config"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(None, help="Write debug log to this file"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Run a test suite and print its results as a tree."""
    from rog.config import RogConfig, load_config
    from rog.reporting.console import Console, console_print_results
    from rog.reporting.summary import summarize
    from rog.results import TestResult
    from rog.verbose import setup_logger

    settings = RogConfig()
    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            settings = load_config(config_path)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    if output is not None:
        settings.output = output
    if verbose:
        settings.verbose = True
    if debug_log is not None:
        settings.debug_log = debug_log
    if no_color:
        settings.color = False

    logger = setup_logger(
        Path(settings.debug_log) if settings.debug_log else None,
        verbose=settings.verbose,
    )
    try:
        try:
            test = load_test(target)
        except Exception as e:
            typer.echo(f"Error: cannot load '{target}': {e}", err=True)
            raise typer.Exit(1)

        logger.debug(f"Loaded {test!r} from '{target}'")
        test.run()

        console_print_results(
            test, settings.output, Console(color=settings.color), settings.indent
        )
        summary = summarize(test)
        typer.echo(summary.describe())
        logger.debug(f"Run finished: {summary.describe()}")
    finally:
        _close_handlers(logger)

    if summary.result is not TestResult.PASS:
        raise typer.Exit(1)


@app.command()
def show(
    target: str = typer.Argument(help="Suite to show, as module:attr or file.py:attr"),
):
    """Print the test tree without running it."""
    from rog.reporting.console import console_print_results

    try:
        test = load_test(target)
    except Exception as e:
        typer.echo(f"Error: cannot load '{target}': {e}", err=True)
        raise typer.Exit(1)

    console_print_results(test, OutputType.NO_LEAF)


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
