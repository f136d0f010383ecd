"""Counts of verdicts and messages across a test hierarchy."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from rog.base import Test, TestVisitor
from rog.composite import CompositeTest
from rog.leaf import LeafTest
from rog.results import TestResult


@dataclass
class Summary:
    """Leaf verdict and message counts for one tree.

    Attributes:
        result: Verdict of the root.
        leaves: Number of leaf tests per verdict.
        messages: Number of messages per message type, over all leaves.
    """

    result: TestResult
    leaves: Counter = field(default_factory=Counter)
    messages: Counter = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(self.leaves.values())

    def describe(self) -> str:
        return (
            f"{self.total} tests: "
            f"{self.leaves[TestResult.PASS]} passed, "
            f"{self.leaves[TestResult.FAIL]} failed, "
            f"{self.leaves[TestResult.PARTIAL]} partial, "
            f"{self.leaves[TestResult.NOT_EVALUATED]} not evaluated"
        )


class SummaryVisitor(TestVisitor):
    def __init__(self):
        self.leaves: Counter = Counter()
        self.messages: Counter = Counter()

    def visit_leaf(self, test: LeafTest) -> None:
        self.leaves[test.result()] += 1
        for message in test.output():
            self.messages[message.type] += 1

    def visit_composite(self, test: CompositeTest) -> None:
        for child in test.subtests:
            child.accept(self)


def summarize(test: Test) -> Summary:
    visitor = SummaryVisitor()
    test.accept(visitor)
    return Summary(result=test.result(), leaves=visitor.leaves, messages=visitor.messages)
