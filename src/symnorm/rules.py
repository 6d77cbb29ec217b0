# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

"""
Factories for single-purpose rewrite rules.

Each factory returns a `Rule` for an n-ary operator `op`.
These are the building blocks of the domain rule sets.
"""

###############################################################################
# Imports
###############################################################################

from typing import Callable, Final, List, Tuple, Union

from itertools import groupby

from typeguard import typechecked

from symnorm.ast import Compound, Expression, Number
from symnorm.matching import Bindings, compile_rule, REJECT, Rule, Segment, Var
from symnorm.ordering import Ordering, STANDARD_ORDERING

###############################################################################
# Constants
###############################################################################

PRE: Final[Segment] = Segment('pre')
POST: Final[Segment] = Segment('post')
ARGS: Final[Segment] = Segment('args')

NumericValue = Union[int, float]

################################################################################
# Identity and Absorbing Elements
################################################################################


@typechecked
def nullary_replacement(op: str, value: Expression) -> Rule:
    # (op) -> value
    return compile_rule(Compound(op), lambda _b: value, name=f'{op}-nullary')


@typechecked
def unary_elimination(op: str) -> Rule:
    # (op x) -> x
    return compile_rule(Compound(op, (Var('x'),)), lambda b: b['x'], name=f'{op}-unary')


@typechecked
def constant_elimination(op: str, constant: Expression) -> Rule:
    # (op ..pre c ..post) -> (op ..pre ..post)
    def handler(b: Bindings) -> Expression:
        return Compound(op, b['pre'] + b['post'])

    pattern = Compound(op, (PRE, constant, POST))
    return compile_rule(pattern, handler, name=f'{op}-drop-{constant}')


@typechecked
def constant_promotion(op: str, constant: Expression) -> Rule:
    # (op ..pre c ..post) -> c
    pattern = Compound(op, (PRE, constant, POST))
    return compile_rule(pattern, lambda _b: constant, name=f'{op}-absorb-{constant}')


################################################################################
# Algebraic Properties
################################################################################


@typechecked
def associativity(op: str) -> Rule:
    """
    Flattens every nested application of `op` into its parent at once.
    Pulling out one nested argument per rewrite would rematch the whole
    argument list for each element of a long chain.
    """

    def nested(args: Tuple[Expression, ...]) -> bool:
        return any(arg.is_application(op) for arg in args)

    def handler(b: Bindings) -> Expression:
        flat: List[Expression] = []
        for arg in b['args']:
            if arg.is_application(op):
                flat.extend(arg.arguments)
            else:
                flat.append(arg)
        return Compound(op, flat)

    pattern = Compound(op, (Segment('args', guard=nested),))
    return compile_rule(pattern, handler, name=f'{op}-associativity')


@typechecked
def commutativity(op: str, ordering: Ordering = STANDARD_ORDERING) -> Rule:
    """
    Sorts the arguments of `op` into canonical order.
    Rejects argument lists that are already sorted, so that
    canonical terms are left alone.
    """

    def handler(b: Bindings):
        args = b['args']
        if ordering.is_sorted(args):
            return REJECT
        return Compound(op, ordering.sort(args))

    return compile_rule(Compound(op, (ARGS,)), handler, name=f'{op}-commutativity')


@typechecked
def idempotence(op: str) -> Rule:
    """
    Collapses runs of equal adjacent arguments.
    Only catches every duplicate once the arguments are sorted.
    """

    def has_run(args: Tuple[Expression, ...]) -> bool:
        return any(args[i - 1] == args[i] for i in range(1, len(args)))

    def handler(b: Bindings) -> Expression:
        return Compound(op, [arg for arg, _run in groupby(b['args'])])

    pattern = Compound(op, (Segment('args', guard=has_run),))
    return compile_rule(pattern, handler, name=f'{op}-idempotence')


@typechecked
def adjacent_folding(op: str, fold: Callable[[NumericValue, NumericValue], NumericValue]) -> Rule:
    # (op ..pre a b ..post) -> (op ..pre fold(a, b) ..post), for literals a and b
    def handler(b: Bindings) -> Expression:
        value = Number(fold(b['a'].value, b['b'].value))
        return Compound(op, b['pre'] + (value,) + b['post'])

    a = Var('a', guard=lambda x: x.is_number)
    b = Var('b', guard=lambda x: x.is_number)
    pattern = Compound(op, (PRE, a, b, POST))
    return compile_rule(pattern, handler, name=f'{op}-fold')
