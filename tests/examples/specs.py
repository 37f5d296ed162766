"""Example spec types used by tests.

This module demonstrates how to declare spec types with nested groups,
using both the decorator and the `with` block forms of the DSL.

It is imported by tests and never collected by pytest itself.
"""

from pytest_quickspec import QuickSpec


def add(left: int, right: int) -> int:
    return left + right


class CalculatorSpec(QuickSpec):
    """Arithmetic examples."""

    def spec(self, dsl):
        @dsl.describe('Calculator')
        def _():
            @dsl.context('Addition')
            def _():
                dsl.it('adds two positives', lambda: None)

                @dsl.it('adds negatives')
                def _():
                    assert add(-1, -1) == -2

            with dsl.context('Subtraction'):
                dsl.it('is not implemented', lambda: None)


class BrokenSpec(QuickSpec):
    """Spec evaluating an expectation outside of an example."""

    def spec(self, dsl):
        with dsl.describe('Broken'):
            assert add(2, 2) == 5, 'evaluated during compilation'
