# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from typing import Any, Final, Iterable, List, Tuple, Union

from enum import auto, Enum

from attrs import evolve, field, frozen
from attrs.validators import deep_iterable, instance_of, min_len
from typeguard import typechecked

################################################################################
# Expression Trees
################################################################################


class ExpressionType(Enum):
    EMPTY = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    SYMBOL = auto()
    COMPOUND = auto()
    PATTERN = auto()


@frozen
class Expression:
    """
    Base class of all nodes in an expression tree.
    Nodes are immutable; rewriting always builds new trees.
    """

    @property
    def type(self) -> ExpressionType:
        raise NotImplementedError()

    @property
    def is_empty(self) -> bool:
        return self.type == ExpressionType.EMPTY

    @property
    def is_boolean(self) -> bool:
        return self.type == ExpressionType.BOOLEAN

    @property
    def is_number(self) -> bool:
        return self.type == ExpressionType.NUMBER

    @property
    def is_symbol(self) -> bool:
        return self.type == ExpressionType.SYMBOL

    @property
    def is_compound(self) -> bool:
        return self.type == ExpressionType.COMPOUND

    @property
    def is_pattern(self) -> bool:
        return self.type == ExpressionType.PATTERN

    @property
    def is_atomic(self) -> bool:
        return not self.is_compound

    def is_application(self, operator: str) -> bool:
        return False


@frozen
class Empty(Expression):
    @property
    def type(self) -> ExpressionType:
        return ExpressionType.EMPTY

    def __str__(self) -> str:
        return '()'


@frozen
class Boolean(Expression):
    value: bool = field(validator=instance_of(bool))

    @property
    def type(self) -> ExpressionType:
        return ExpressionType.BOOLEAN

    def __str__(self) -> str:
        return '#t' if self.value else '#f'


def _check_number(_instance: Any, _attribute: Any, value: Any):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f'expected int or float, got {value!r}')


@frozen
class Number(Expression):
    value: Union[int, float] = field(validator=_check_number)

    @property
    def type(self) -> ExpressionType:
        return ExpressionType.NUMBER

    @property
    def is_int(self) -> bool:
        return isinstance(self.value, int)

    def __str__(self) -> str:
        return str(self.value)


@frozen
class Symbol(Expression):
    name: str = field(validator=[instance_of(str), min_len(1)])

    @property
    def type(self) -> ExpressionType:
        return ExpressionType.SYMBOL

    def __str__(self) -> str:
        return self.name


@frozen
class Compound(Expression):
    operator: str = field(validator=[instance_of(str), min_len(1)])
    arguments: Tuple[Expression, ...] = field(
        factory=tuple,
        converter=tuple,
        validator=deep_iterable(instance_of(Expression)),
    )

    @property
    def type(self) -> ExpressionType:
        return ExpressionType.COMPOUND

    @property
    def arity(self) -> int:
        return len(self.arguments)

    def is_application(self, operator: str) -> bool:
        return self.operator == operator

    def but(self, arguments: Iterable[Expression]) -> 'Compound':
        return evolve(self, arguments=arguments)

    def __str__(self) -> str:
        # explicit stack, nesting depth is not bounded by the interpreter
        parts: List[str] = []
        stack: List[Any] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Compound):
                parts.append(f'({item.operator}')
                stack.append(')')
                for arg in reversed(item.arguments):
                    stack.append(arg)
                    stack.append(' ')
            else:
                parts.append(str(item))
        return ''.join(parts)


EMPTY: Final[Empty] = Empty()
TRUE: Final[Boolean] = Boolean(True)
FALSE: Final[Boolean] = Boolean(False)
ZERO: Final[Number] = Number(0)
ONE: Final[Number] = Number(1)
MINUS_ONE: Final[Number] = Number(-1)

################################################################################
# Convenience Constructors
################################################################################


@typechecked
def as_expression(value: Any) -> Expression:
    if isinstance(value, Expression):
        return value
    if value is None:
        return EMPTY
    if isinstance(value, bool):
        return TRUE if value else FALSE
    if isinstance(value, (int, float)):
        return Number(value)
    if isinstance(value, str):
        return Symbol(value)
    raise TypeError(f'cannot convert to expression: {value!r}')


def call(operator: str, *arguments: Any) -> Compound:
    return Compound(operator, map(as_expression, arguments))


def is_integer(expr: Expression) -> bool:
    return expr.is_number and expr.is_int
