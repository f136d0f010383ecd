"""Verdicts, messages and policies shared by the test hierarchy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TestResult(str, Enum):
    __test__ = False

    PASS = "Pass"
    FAIL = "Fail"
    PARTIAL = "Partial"
    NOT_EVALUATED = "NotEvaluated"


class TestMessageType(str, Enum):
    __test__ = False

    PASS = "Pass"
    FAIL = "Fail"
    INFO = "Info"


class AssertPolicy(str, Enum):
    """Behavior of a leaf test after its first failed assertion."""

    STOP_AT_FIRST_FAIL = "StopAtFirstFail"
    RUN_ALL = "RunAll"


class Step(str, Enum):
    """Marker returned by every assertion.

    ``ABORT`` means the current test body has been terminated by the
    StopAtFirstFail policy and nothing else will be recorded for it.
    """

    CONTINUE = "continue"
    ABORT = "abort"


@dataclass(frozen=True)
class TestMessage:
    """Single entry of a leaf test's message log.

    Attributes:
        type: Pass and Fail entries decide the verdict, Info entries are
            annotations only.
        text: Human-readable detail shown by reporters.
    """

    type: TestMessageType
    text: str

    __test__ = False
