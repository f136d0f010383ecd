"""Assertion operations available inside a leaf test body."""

from __future__ import annotations

import numbers
import weakref
from typing import Any, Callable

from rog.formatting import try_format
from rog.results import AssertPolicy, Step, TestMessage, TestMessageType

TERMINATED_MESSAGE = "Terminated after failed assertion."


def _is_null(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, weakref.ref):
        return value() is None
    return False


def _require_epsilon(expected: Any, actual: Any) -> None:
    if isinstance(expected, float) or isinstance(actual, float):
        raise TypeError(
            "floating-point values must be compared with an explicit epsilon"
        )


def _comparison_args(
    args: tuple[Any, ...], epsilon: float | None, message: str | None
) -> tuple[float | None, str | None]:
    """Split ``[epsilon,] [message]`` positional arguments.

    A leading real number is the epsilon, anything else is the message.
    """
    rest = list(args)
    if rest and isinstance(rest[0], numbers.Real) and not isinstance(rest[0], bool):
        if epsilon is not None:
            raise TypeError("epsilon given both positionally and by keyword")
        epsilon = rest.pop(0)
    if rest:
        if message is not None:
            raise TypeError("message given both positionally and by keyword")
        message = rest.pop(0)
    if rest:
        raise TypeError(f"unexpected extra arguments: {rest!r}")
    return epsilon, message


class AssertionEngine:
    """Mixin that records assertion outcomes into an ordered message log.

    Every operation returns a Step marker. Under StopAtFirstFail the first
    recorded failure puts the engine into the aborted state: from then on
    nothing is recorded and every call returns ``Step.ABORT``.
    """

    def __init__(self, policy: AssertPolicy = AssertPolicy.STOP_AT_FIRST_FAIL):
        self._policy = AssertPolicy(policy)
        self._messages: list[TestMessage] = []
        self._aborted = False

    @property
    def policy(self) -> AssertPolicy:
        return self._policy

    @property
    def aborted(self) -> bool:
        return self._aborted

    def _reset(self) -> None:
        self._messages = []
        self._aborted = False

    def _record(self, type: TestMessageType, text: str) -> Step:
        if self._aborted:
            return Step.ABORT
        self._messages.append(TestMessage(type=type, text=str(text)))
        if (
            type is TestMessageType.FAIL
            and self._policy is AssertPolicy.STOP_AT_FIRST_FAIL
        ):
            self._aborted = True
            return Step.ABORT
        return Step.CONTINUE

    def info(self, message: str) -> Step:
        return self._record(TestMessageType.INFO, message)

    def pass_(self, message: str) -> Step:
        return self._record(TestMessageType.PASS, message)

    def fail(self, message: str) -> Step:
        return self._record(TestMessageType.FAIL, message)

    def assert_true(self, condition: Any, message: str) -> Step:
        if condition:
            return self.pass_(message)
        return self.fail(message)

    def assert_false(self, condition: Any, message: str) -> Step:
        return self.assert_true(not condition, message)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        *args: Any,
        epsilon: float | None = None,
        message: str | None = None,
    ) -> Step:
        """Assert expected == actual.

        Call as ``(expected, actual[, message])``, or for floating-point
        values ``(expected, actual, epsilon[, message])``, which passes when
        ``abs(expected - actual) < epsilon``.
        """
        epsilon, message = _comparison_args(args, epsilon, message)
        if epsilon is not None:
            if message is None:
                message = (
                    f"Expected {expected:.17g} got {actual:.17g} "
                    f"using precision {epsilon:.17g}"
                )
            return self.assert_true(abs(expected - actual) < epsilon, message)

        _require_epsilon(expected, actual)
        if message is None:
            expected_str = try_format(expected)
            actual_str = try_format(actual)
            if expected_str is not None and actual_str is not None:
                message = f"Expected {expected_str} got {actual_str}"
            else:
                message = "Expected value equals to the actual value"
        return self.assert_true(expected == actual, message)

    def assert_not_equals(
        self,
        expected: Any,
        actual: Any,
        *args: Any,
        epsilon: float | None = None,
        message: str | None = None,
    ) -> Step:
        """Assert expected != actual; with an epsilon, ``abs(expected - actual) >= epsilon``."""
        epsilon, message = _comparison_args(args, epsilon, message)
        if epsilon is not None:
            if message is None:
                message = (
                    f"Expected {expected:.17g} and {actual:.17g} to be different "
                    f"using precision {epsilon:.17g}"
                )
            return self.assert_true(abs(expected - actual) >= epsilon, message)

        _require_epsilon(expected, actual)
        if message is None:
            expected_str = try_format(expected)
            actual_str = try_format(actual)
            if expected_str is not None and actual_str is not None:
                message = f"Expected {expected_str} and {actual_str} to be different"
            else:
                message = "Values should be different"
        return self.assert_true(expected != actual, message)

    def assert_throws(
        self, fn: Callable[[], Any], message: str = "Function throws"
    ) -> Step:
        if self._aborted:
            return Step.ABORT
        try:
            fn()
        except Exception:
            return self.pass_(message)
        return self.fail(message)

    # None literals need no special overloads: the check below resolves
    # them to a constant verdict.
    def assert_null(self, value: Any) -> Step:
        return self.assert_true(_is_null(value), "Value is None")

    def assert_not_null(self, value: Any) -> Step:
        return self.assert_true(not _is_null(value), "Value is not None")

    def assert_nullopt(self, value: Any) -> Step:
        return self.assert_true(value is None, "Optional is empty")

    def assert_has_value(self, value: Any) -> Step:
        return self.assert_true(value is not None, "Optional has value")
