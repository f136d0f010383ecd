"""Single test case with its own message log."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Generator

from rog.assertions import TERMINATED_MESSAGE, AssertionEngine
from rog.base import Test, TestVisitor
from rog.results import AssertPolicy, TestMessage, TestMessageType, TestResult

logger = logging.getLogger(__name__)

TestBody = Callable[["LeafTest"], Any]


class LeafTest(AssertionEngine, Test):
    """A test case whose body records assertions through this object.

    The body is either ``test()`` overridden in a subclass or a callable
    passed as ``body`` that receives the leaf test as its only argument.

    Under StopAtFirstFail a failed assertion does not raise. A plain body
    stops early only by checking the returned marker::

        def body(t):
            if t.assert_not_null(conn) is Step.ABORT:
                return
            t.assert_equals(200, conn.status)

    Code in a plain body that ignores the marker keeps executing after the
    abort, with every further assertion a no-op. A generator body yielding
    the markers is closed as soon as the test is aborted, so no further
    body code runs::

        def body(t):
            yield t.assert_not_null(conn)
            yield t.assert_equals(200, conn.status)
    """

    def __init__(
        self,
        name: str,
        body: TestBody | None = None,
        policy: AssertPolicy = AssertPolicy.STOP_AT_FIRST_FAIL,
    ):
        Test.__init__(self, name)
        AssertionEngine.__init__(self, policy)
        if body is None and type(self).test is LeafTest.test:
            raise TypeError(
                f"LeafTest '{name}' needs a body or an overridden test() method"
            )
        self._body = body

    def test(self) -> Any:
        return self._body(self)

    def run(self) -> None:
        self._reset()
        logger.debug(f"Running leaf test '{self.name}' ({self.policy.value})")

        try:
            outcome = self.test()
            if inspect.isgenerator(outcome):
                self._drive(outcome)
        except Exception as e:
            if self._aborted:
                # Nothing may be recorded after an abort.
                logger.debug(
                    f"Discarding error raised after abort in '{self.name}': {e!r}"
                )
            else:
                logger.debug(f"Unhandled exception in '{self.name}': {e!r}")
                description = str(e)
                text = (
                    f"Unhandled exception: {description}"
                    if description
                    else "Unhandled exception."
                )
                self._messages.append(TestMessage(TestMessageType.FAIL, text))

        if self._aborted:
            logger.debug(f"Leaf test '{self.name}' aborted after failed assertion")
            self._messages.append(
                TestMessage(TestMessageType.INFO, TERMINATED_MESSAGE)
            )

        logger.debug(f"Leaf test '{self.name}' finished: {self.result().value}")

    def _drive(self, steps: Generator[Any, None, Any]) -> None:
        for _ in steps:
            if self._aborted:
                steps.close()
                break

    def result(self) -> TestResult:
        if not self._messages:
            return TestResult.NOT_EVALUATED

        verdicts = [
            m.type for m in self._messages if m.type is not TestMessageType.INFO
        ]
        if all(v is TestMessageType.PASS for v in verdicts):
            return TestResult.PASS
        if not any(v is TestMessageType.PASS for v in verdicts):
            return TestResult.FAIL
        return TestResult.PARTIAL

    def output(self) -> tuple[TestMessage, ...]:
        return tuple(self._messages)

    def accept(self, visitor: TestVisitor) -> None:
        visitor.visit_leaf(self)


def leaf_test(
    name: str | None = None,
    policy: AssertPolicy = AssertPolicy.STOP_AT_FIRST_FAIL,
) -> Callable[[TestBody], LeafTest]:
    """Decorator turning a function ``fn(t)`` into a LeafTest.

    The test is named after the function unless ``name`` is given.
    """

    def decorator(fn: TestBody) -> LeafTest:
        return LeafTest(name or fn.__name__, body=fn, policy=policy)

    return decorator
