from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rog.composite import CompositeTest
    from rog.leaf import LeafTest
    from rog.results import TestResult


class TestVisitor(ABC):
    """Double-dispatch interface over the two kinds of test.

    A composite only dispatches to ``visit_composite`` for itself;
    descending into its children is up to the visitor.
    """

    __test__ = False

    @abstractmethod
    def visit_leaf(self, test: LeafTest) -> None: ...

    @abstractmethod
    def visit_composite(self, test: CompositeTest) -> None: ...


class Test(ABC):
    """Common base of LeafTest and CompositeTest."""

    __test__ = False

    def __init__(self, name: str):
        self._name = str(name)
        self._owned = False

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    def run(self) -> None:
        """Execute the test (and, for composites, the whole subtree)."""
        ...

    @abstractmethod
    def result(self) -> TestResult:
        """Verdict of the last run. Pure; never mutates state."""
        ...

    @abstractmethod
    def accept(self, visitor: TestVisitor) -> None:
        """Dispatch to the visitor operation matching this kind of test."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"
