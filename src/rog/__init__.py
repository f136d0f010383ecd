"""Hierarchical test suites with inline assertions and tree-shaped reports."""

from rog.assertions import AssertionEngine
from rog.base import Test, TestVisitor
from rog.composite import CompositeTest
from rog.formatting import format_value, try_format
from rog.leaf import LeafTest, leaf_test
from rog.reporting.console import (
    Console,
    ConsoleReporter,
    OutputType,
    Style,
    console_print_results,
)
from rog.reporting.summary import Summary, SummaryVisitor, summarize
from rog.results import AssertPolicy, Step, TestMessage, TestMessageType, TestResult

__all__ = [
    "AssertPolicy",
    "AssertionEngine",
    "CompositeTest",
    "Console",
    "ConsoleReporter",
    "LeafTest",
    "OutputType",
    "Step",
    "Style",
    "Summary",
    "SummaryVisitor",
    "Test",
    "TestMessage",
    "TestMessageType",
    "TestResult",
    "TestVisitor",
    "console_print_results",
    "format_value",
    "leaf_test",
    "summarize",
    "try_format",
]
