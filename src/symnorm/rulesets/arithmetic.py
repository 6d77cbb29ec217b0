# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

"""
Rule sets for sums, products, quotients and subtraction, and the
top-level algebraic simplifier assembled from them.
"""

###############################################################################
# Imports
###############################################################################

from typing import Callable, Final, List, Optional

from typeguard import typechecked

from symnorm.ast import Compound, Expression, MINUS_ONE, ONE, ZERO
from symnorm.matching import Bindings, compile_rule, REJECT, Rule, RuleSet, Segment, Var
from symnorm.ordering import Ordering, STANDARD_ORDERING
from symnorm.rules import (
    adjacent_folding,
    associativity,
    commutativity,
    constant_elimination,
    constant_promotion,
    nullary_replacement,
    POST,
    PRE,
    unary_elimination,
)
from symnorm.rulesets._algebra import polynomial_divide, polynomial_gcd
from symnorm.strategies import Apply, Iterated, Sequential, Strategy

###############################################################################
# Constants
###############################################################################

PLUS: Final[str] = '+'
TIMES: Final[str] = '*'
MINUS: Final[str] = '-'
DIVIDE: Final[str] = '/'

GcdFunction = Callable[[Expression, Expression], Expression]

################################################################################
# Sums and Products
################################################################################


@typechecked
def sum_rules(ordering: Ordering = STANDARD_ORDERING, commutative: bool = True) -> RuleSet:
    rules: List[Rule] = [
        nullary_replacement(PLUS, ZERO),
        unary_elimination(PLUS),
        constant_elimination(PLUS, ZERO),
        adjacent_folding(PLUS, lambda a, b: a + b),
        associativity(PLUS),
    ]
    if commutative:
        rules.append(commutativity(PLUS, ordering))
    return RuleSet(rules, name='sums')


@typechecked
def product_rules(ordering: Ordering = STANDARD_ORDERING, commutative: bool = True) -> RuleSet:
    rules: List[Rule] = [
        nullary_replacement(TIMES, ONE),
        unary_elimination(TIMES),
        constant_promotion(TIMES, ZERO),
        constant_elimination(TIMES, ONE),
        adjacent_folding(TIMES, lambda a, b: a * b),
        associativity(TIMES),
    ]
    if commutative:
        rules.append(commutativity(TIMES, ordering))
    return RuleSet(rules, name='products')


################################################################################
# Distributive Law
################################################################################


@typechecked
def distributive_rules(
    ordering: Ordering = STANDARD_ORDERING,
    commutative: bool = True,
    max_iterations: Optional[int] = None,
) -> RuleSet:
    """
    (* ..pre (+ a b ...) ..post) -> (+ (* ..pre a ..post) (* ..pre b ..post) ...)

    Each new product is simplified right away, instead of waiting
    for the next pass of the enclosing loop.
    """
    products = Iterated(product_rules(ordering, commutative=commutative), max_iterations)

    def handler(b: Bindings) -> Expression:
        pre = b['pre']
        post = b['post']
        terms = [products(Compound(TIMES, pre + (term,) + post)) for term in b['terms']]
        return Compound(PLUS, terms)

    pattern = Compound(TIMES, (PRE, Compound(PLUS, (Segment('terms'),)), POST))
    rule = compile_rule(pattern, handler, name='distributive-law')
    return RuleSet((rule,), name='distributive-law')


################################################################################
# Quotients
################################################################################


@typechecked
def quotient_rules(
    gcd: GcdFunction = polynomial_gcd,
    divide: GcdFunction = polynomial_divide,
    max_iterations: Optional[int] = None,
) -> RuleSet:
    n = Var('n')
    d = Var('d')

    def cancel(b: Bindings):
        # computing the GCD is also the applicability test
        g = gcd(b['n'], b['d'])
        if g == ONE or g == ZERO:
            return REJECT
        quotient = Compound(DIVIDE, (divide(b['n'], g), divide(b['d'], g)))
        return Iterated(rules, max_iterations)(quotient)

    rules = RuleSet(
        (
            compile_rule(Compound(DIVIDE, (n, ONE)), lambda b: b['n'], name='/-one'),
            compile_rule(Compound(DIVIDE, (ZERO, d)), lambda _b: ZERO, name='/-zero'),
            compile_rule(
                Compound(DIVIDE, (ONE, Compound(DIVIDE, (n, d)))),
                lambda b: Compound(DIVIDE, (b['d'], b['n'])),
                name='/-reciprocal',
            ),
            compile_rule(Compound(DIVIDE, (n, d)), cancel, name='/-gcd'),
        ),
        name='quotients',
    )
    return rules


################################################################################
# Subtraction
################################################################################


def _negated(x: Expression) -> Expression:
    return Compound(TIMES, (MINUS_ONE, x))


@typechecked
def minus_rules() -> RuleSet:
    # (- a) -> (* -1 a)
    # (- a b c) -> (+ a (* -1 b) (* -1 c))
    def negate(b: Bindings) -> Expression:
        return _negated(b['x'])

    def subtract(b: Bindings) -> Expression:
        return Compound(PLUS, (b['x'],) + tuple(map(_negated, b['rest'])))

    rest = Segment('rest', guard=lambda args: len(args) > 0)
    return RuleSet(
        (
            compile_rule(Compound(MINUS, (Var('x'),)), negate, name='--negate'),
            compile_rule(Compound(MINUS, (Var('x'), rest)), subtract, name='--subtract'),
        ),
        name='remove-minus',
    )


################################################################################
# Interface
################################################################################


@typechecked
def algebra_simplifier(
    ordering: Ordering = STANDARD_ORDERING,
    commutative: bool = True,
    gcd: GcdFunction = polynomial_gcd,
    divide: GcdFunction = polynomial_divide,
    max_iterations: Optional[int] = None,
) -> Strategy:
    products = Iterated(product_rules(ordering, commutative=commutative), max_iterations)
    sums = Iterated(sum_rules(ordering, commutative=commutative), max_iterations)
    return Sequential(
        (
            Apply(minus_rules(), max_iterations=max_iterations),
            Iterated(
                Sequential(
                    (
                        products,
                        sums,
                        Apply(distributive_rules(ordering, commutative, max_iterations)),
                        Apply(quotient_rules(gcd, divide, max_iterations)),
                    )
                ),
                max_iterations=max_iterations,
            ),
        )
    )


DEFAULT_SIMPLIFIER: Final[Strategy] = algebra_simplifier()


def simplify(expr: Expression) -> Expression:
    return DEFAULT_SIMPLIFIER(expr)
