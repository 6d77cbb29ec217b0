# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

"""
Total order over expression nodes.

Nodes are classified into categories, checked in registration order.
Nodes of the same category are compared by that category's comparison
function; otherwise, the node whose category was registered first sorts
first. The standard ordering is

    Empty < Boolean < Number < Symbol < Compound
"""

###############################################################################
# Imports
###############################################################################

from typing import Any, Callable, Final, List, Sequence, Tuple

from functools import cmp_to_key

from attrs import field, frozen
from attrs.validators import deep_iterable, instance_of
from typeguard import typechecked

from symnorm.ast import Expression
from symnorm.errors import ClassificationError

################################################################################
# Categories
################################################################################


Predicate = Callable[[Expression], bool]
Comparison = Callable[['Ordering', Expression, Expression], int]


@frozen
class Category:
    name: str
    predicate: Predicate = field(eq=False)
    compare: Comparison = field(eq=False)


def _sign(x: Any, y: Any) -> int:
    return (x > y) - (x < y)


def compare_booleans(_order: 'Ordering', a: Expression, b: Expression) -> int:
    return _sign(a.value, b.value)


def compare_numbers(_order: 'Ordering', a: Expression, b: Expression) -> int:
    return _sign(a.value, b.value)


def compare_symbols(_order: 'Ordering', a: Expression, b: Expression) -> int:
    return _sign(a.name, b.name)


def compare_compounds(order: 'Ordering', a: Expression, b: Expression) -> int:
    # shorter first, then operator, then arguments left to right.
    # Nested compounds of this category are walked with an explicit stack.
    stack: List[Tuple[Expression, Expression, bool]] = [(a, b, True)]
    while stack:
        x, y, nested = stack.pop()
        if not nested:
            result = order.compare(x, y)
            if result != 0:
                return result
            continue
        result = _sign(len(x.arguments), len(y.arguments))
        if result != 0:
            return result
        result = _sign(x.operator, y.operator)
        if result != 0:
            return result
        for u, v in reversed(tuple(zip(x.arguments, y.arguments))):
            stack.append((u, v, _both_compounds(order, u, v)))
    return 0


def _both_compounds(order: 'Ordering', a: Expression, b: Expression) -> bool:
    if not (a.is_compound and b.is_compound):
        return False
    category = order.classify(a)
    return category.compare is compare_compounds and order.classify(b) is category


def _same(_order: 'Ordering', _a: Expression, _b: Expression) -> int:
    return 0


################################################################################
# Ordering
################################################################################


@frozen
class Ordering:
    categories: Tuple[Category, ...] = field(
        factory=tuple,
        converter=tuple,
        validator=deep_iterable(instance_of(Category)),
    )

    def register(self, name: str, predicate: Predicate, compare: Comparison) -> 'Ordering':
        """
        Returns a new ordering with an additional category of lowest priority.
        """
        return Ordering(self.categories + (Category(name, predicate, compare),))

    def classify(self, expr: Expression) -> Category:
        for category in self.categories:
            if category.predicate(expr):
                return category
        raise ClassificationError(f'unable to order expression: {expr!r}')

    def compare(self, a: Expression, b: Expression) -> int:
        for category in self.categories:
            in_a = category.predicate(a)
            in_b = category.predicate(b)
            if in_a and in_b:
                return category.compare(self, a, b)
            if in_a:
                return -1
            if in_b:
                return 1
        raise ClassificationError(f'unable to order expressions: {a!r}, {b!r}')

    def less(self, a: Expression, b: Expression) -> bool:
        return self.compare(a, b) < 0

    @property
    def key(self) -> Callable[[Expression], Any]:
        return cmp_to_key(self.compare)

    def sort(self, exprs: Sequence[Expression]) -> List[Expression]:
        return sorted(exprs, key=self.key)

    def is_sorted(self, exprs: Sequence[Expression]) -> bool:
        for i in range(1, len(exprs)):
            if self.compare(exprs[i - 1], exprs[i]) > 0:
                return False
        return True


@typechecked
def standard_ordering() -> Ordering:
    return (
        Ordering()
        .register('empty', lambda x: x.is_empty, _same)
        .register('boolean', lambda x: x.is_boolean, compare_booleans)
        .register('number', lambda x: x.is_number, compare_numbers)
        .register('symbol', lambda x: x.is_symbol, compare_symbols)
        .register('compound', lambda x: x.is_compound, compare_compounds)
    )


STANDARD_ORDERING: Final[Ordering] = standard_ordering()
