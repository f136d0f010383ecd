"""Tree-shaped console report of a test hierarchy."""

from __future__ import annotations

import logging
from enum import Enum
from typing import IO, Protocol

import typer

from rog.base import Test, TestVisitor
from rog.composite import CompositeTest
from rog.leaf import LeafTest
from rog.results import TestMessageType, TestResult

logger = logging.getLogger(__name__)


class OutputType(str, Enum):
    """Level of detail in the console output."""

    FULL = "full"
    NO_LEAF = "no-leaf"


class Style(str, Enum):
    PLAIN = "plain"
    PASS = "pass"
    FAIL = "fail"
    PARTIAL = "partial"
    INFO = "info"


_COLORS: dict[Style, str | None] = {
    Style.PLAIN: None,
    Style.PASS: typer.colors.GREEN,
    Style.FAIL: typer.colors.RED,
    Style.PARTIAL: typer.colors.YELLOW,
    Style.INFO: typer.colors.CYAN,
}

_RESULT_STYLES = {
    TestResult.PASS: Style.PASS,
    TestResult.FAIL: Style.FAIL,
    TestResult.PARTIAL: Style.PARTIAL,
    TestResult.NOT_EVALUATED: Style.PLAIN,
}

_MESSAGE_MARKERS = {
    TestMessageType.PASS: ("[PASS]", Style.PASS),
    TestMessageType.FAIL: ("[FAIL]", Style.FAIL),
    TestMessageType.INFO: ("[INFO]", Style.INFO),
}


class LineSink(Protocol):
    def write_line(self, text: str, style: Style = Style.PLAIN) -> None: ...


class Console:
    """Line-writing sink on top of typer.secho.

    ``color=None`` lets click decide (colors only on a terminal).
    """

    def __init__(self, file: IO[str] | None = None, color: bool | None = None):
        self.file = file
        self.color = color

    def write_line(self, text: str, style: Style = Style.PLAIN) -> None:
        typer.secho(text, fg=_COLORS[style], file=self.file, color=self.color)


class ConsoleReporter(TestVisitor):
    """Prints every node as ``<name>: <verdict>``, indenting children.

    The indentation prefix is explicit state: it grows before the
    reporter descends into a composite's children and shrinks after.
    In FULL mode each leaf message is printed below its leaf.
    """

    def __init__(
        self,
        console: LineSink | None = None,
        output_type: OutputType = OutputType.FULL,
        indent: str = "  ",
    ):
        self.console = console if console is not None else Console()
        self.output_type = OutputType(output_type)
        self.indent = indent
        self.prefix = ""

    def _write_verdict(self, test: Test) -> None:
        result = test.result()
        self.console.write_line(
            f"{self.prefix}{test.name}: {result.value}", _RESULT_STYLES[result]
        )

    def visit_composite(self, test: CompositeTest) -> None:
        self._write_verdict(test)
        outer = self.prefix
        self.prefix = outer + self.indent
        for child in test.subtests:
            child.accept(self)
        self.prefix = outer

    def visit_leaf(self, test: LeafTest) -> None:
        self._write_verdict(test)
        if self.output_type is not OutputType.FULL:
            return
        for message in test.output():
            marker, style = _MESSAGE_MARKERS[message.type]
            self.console.write_line(
                f"{self.prefix}{self.indent}{marker} {message.text}", style
            )


def console_print_results(
    test: Test,
    output_type: OutputType = OutputType.FULL,
    console: LineSink | None = None,
    indent: str = "  ",
) -> None:
    """Print the results of test and its subtree. Does not run anything."""
    logger.debug(f"Printing results of '{test.name}' ({OutputType(output_type).value})")
    test.accept(ConsoleReporter(console, output_type, indent))
