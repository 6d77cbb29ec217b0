# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from typing import Final, Optional

from typeguard import typechecked

from symnorm.ast import Compound, Expression, is_integer, Number, ONE, ZERO
from symnorm.matching import Bindings, compile_rule, REJECT, RuleSet, Segment, Var
from symnorm.rules import POST, PRE, unary_elimination
from symnorm.rulesets.arithmetic import DIVIDE, PLUS, TIMES
from symnorm.strategies import Iterated, Strategy

###############################################################################
# Constants
###############################################################################

POWER: Final[str] = '^'

MID: Final[Segment] = Segment('mid')

# integer powers whose result would need more bits are left unevaluated
MAX_FOLDED_BITS: Final[int] = 4096

################################################################################
# Helper Functions
################################################################################


def _power(base: Expression, exponent: Expression) -> Compound:
    return Compound(POWER, (base, exponent))


def _add(a: Expression, b: Expression) -> Expression:
    if a.is_number and b.is_number:
        return Number(a.value + b.value)
    return Compound(PLUS, (a, b))


def _multiply(a: Expression, b: Expression) -> Expression:
    if a.is_number and b.is_number:
        return Number(a.value * b.value)
    return Compound(TIMES, (a, b))


def _literal_power(base, exponent):
    # only exact, real results of bounded size
    if isinstance(base, int):
        if not isinstance(exponent, int) or exponent < 0:
            return None
        if abs(base) > 1 and exponent * abs(base).bit_length() > MAX_FOLDED_BITS:
            return None
    try:
        value = base ** exponent
    except (ZeroDivisionError, OverflowError):
        return None
    if isinstance(value, complex):
        return None
    return value


################################################################################
# Rule Sets
################################################################################


@typechecked
def power_folding_rules() -> RuleSet:
    # (^ 2 3) -> 8
    def handler(b: Bindings):
        value = _literal_power(b['a'].value, b['b'].value)
        if value is None:
            return REJECT
        return Number(value)

    a = Var('a', guard=lambda x: x.is_number)
    b = Var('b', guard=lambda x: x.is_number)
    rule = compile_rule(_power(a, b), handler, name='^-fold')
    return RuleSet((rule,), name='power-folding')


@typechecked
def degenerate_power_rules() -> RuleSet:
    x = Var('x')
    return RuleSet(
        (
            compile_rule(_power(x, ONE), lambda b: b['x'], name='^-one'),
            compile_rule(
                _power(x, Number(-1)),
                lambda b: Compound(DIVIDE, (ONE, b['x'])),
                name='^-minus-one',
            ),
            compile_rule(_power(x, ZERO), lambda _b: ONE, name='^-zero'),
            compile_rule(_power(ZERO, x), lambda _b: ZERO, name='^-zero-base'),
            compile_rule(_power(ONE, x), lambda _b: ONE, name='^-one-base'),
        ),
        name='degenerate-powers',
    )


@typechecked
def expansion_rules() -> RuleSet:
    """
    (^ x 3) -> (* x x x)
    (^ x -3) -> (/ 1 (* x x x))
    """

    def handler(b: Bindings) -> Expression:
        n = b['n'].value
        product = Compound(TIMES, (b['x'],) * abs(n))
        if n < 0:
            return Compound(DIVIDE, (ONE, product))
        return product

    n = Var('n', guard=lambda e: is_integer(e) and abs(e.value) >= 2)
    rule = compile_rule(_power(Var('x'), n), handler, name='^-expand')
    return RuleSet((rule,), name='power-expansion')


@typechecked
def contraction_rules() -> RuleSet:
    """
    Folds repeated factors of a product into powers.

    (* x x) -> (* (^ x 2))
    (* x (^ x n)) -> (* (^ x n+1))
    (* (^ x n) (^ x m)) -> (* (^ x n+m))
    (^ (^ x a) b) -> (^ x a*b)
    """
    x = Var('x')
    e = Var('e')
    f = Var('f')

    def square(b: Bindings) -> Expression:
        return Compound(TIMES, b['pre'] + (_power(b['x'], Number(2)),) + b['post'])

    def with_power(b: Bindings) -> Expression:
        power = _power(b['x'], _add(b['e'], ONE))
        return Compound(TIMES, b['pre'] + b['mid'] + (power,) + b['post'])

    def two_powers(b: Bindings) -> Expression:
        power = _power(b['x'], _add(b['e'], b['f']))
        return Compound(TIMES, b['pre'] + b['mid'] + (power,) + b['post'])

    def nested(b: Bindings) -> Expression:
        return _power(b['x'], _multiply(b['e'], b['f']))

    return RuleSet(
        (
            unary_elimination(TIMES),
            compile_rule(Compound(TIMES, (PRE, x, x, POST)), square, name='^-square'),
            compile_rule(
                Compound(TIMES, (PRE, x, MID, _power(x, e), POST)),
                with_power,
                name='^-absorb-left',
            ),
            compile_rule(
                Compound(TIMES, (PRE, _power(x, e), MID, x, POST)),
                with_power,
                name='^-absorb-right',
            ),
            compile_rule(
                Compound(TIMES, (PRE, _power(x, e), MID, _power(x, f), POST)),
                two_powers,
                name='^-merge',
            ),
            compile_rule(_power(_power(x, e), f), nested, name='^-nested'),
        ),
        name='power-contraction',
    )


################################################################################
# Interface
################################################################################


@typechecked
def expand_powers(max_iterations: Optional[int] = None) -> Strategy:
    rules = power_folding_rules() + degenerate_power_rules() + expansion_rules()
    return Iterated(rules, max_iterations=max_iterations)


@typechecked
def contract_powers(max_iterations: Optional[int] = None) -> Strategy:
    rules = power_folding_rules() + degenerate_power_rules() + contraction_rules()
    return Iterated(rules, max_iterations=max_iterations)
