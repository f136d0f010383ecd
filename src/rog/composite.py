"""Named container of child tests."""

from __future__ import annotations

import logging
from typing import Iterable

from rog.base import Test, TestVisitor
from rog.results import TestResult

logger = logging.getLogger(__name__)


class CompositeTest(Test):
    """Owns an ordered list of child tests and aggregates their verdicts.

    Children are exclusively owned: a test can belong to one composite
    only, and the hierarchy is a tree. Suites are composed either by
    passing ``tests`` to the constructor or by calling ``_add_test`` from
    a subclass::

        class MathSuite(CompositeTest):
            def __init__(self):
                super().__init__("Math")
                self._add_test(AdditionTest())
                self._add_test(DivisionTest())
    """

    def __init__(self, name: str, tests: Iterable[Test] = ()):
        super().__init__(name)
        self._tests: list[Test] = []
        for test in tests:
            self._add_test(test)

    @property
    def subtests(self) -> tuple[Test, ...]:
        return tuple(self._tests)

    def _add_test(self, test: Test) -> None:
        if not isinstance(test, Test):
            raise TypeError(f"Expected a Test, got {type(test).__name__}")
        if test._owned:
            raise ValueError(f"{test!r} already belongs to another composite test")
        if test is self or (
            isinstance(test, CompositeTest) and test._contains(self)
        ):
            raise ValueError(f"Adding {test!r} to {self!r} would create a cycle")
        test._owned = True
        self._tests.append(test)

    def _contains(self, target: Test) -> bool:
        for child in self._tests:
            if child is target:
                return True
            if isinstance(child, CompositeTest) and child._contains(target):
                return True
        return False

    def run(self) -> None:
        logger.debug(
            f"Running composite test '{self.name}' ({len(self._tests)} subtests)"
        )
        for test in self._tests:
            test.run()
        logger.debug(f"Composite test '{self.name}' finished: {self.result().value}")

    def result(self) -> TestResult:
        """Pass if all subtests passed, Fail if all failed, NotEvaluated if
        none was evaluated (or there are no subtests), Partial otherwise."""
        results = [test.result() for test in self._tests]
        if all(r is TestResult.NOT_EVALUATED for r in results):
            return TestResult.NOT_EVALUATED
        if all(r is TestResult.FAIL for r in results):
            return TestResult.FAIL
        if all(r is TestResult.PASS for r in results):
            return TestResult.PASS
        return TestResult.PARTIAL

    def accept(self, visitor: TestVisitor) -> None:
        visitor.visit_composite(self)
