# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

"""
Rule sets for propositional logic: negation pushdown,
simplification of disjunctions and conjunctions,
and conversion to conjunctive normal form.
"""

###############################################################################
# Imports
###############################################################################

from typing import Final, List, Optional

from typeguard import typechecked

from symnorm.ast import Boolean, Compound, Expression, FALSE, TRUE
from symnorm.matching import Bindings, compile_rule, Rule, RuleSet, Segment, Var
from symnorm.ordering import Ordering, STANDARD_ORDERING
from symnorm.rules import (
    associativity,
    commutativity,
    constant_elimination,
    constant_promotion,
    idempotence,
    nullary_replacement,
    POST,
    PRE,
    unary_elimination,
)
from symnorm.strategies import Apply, Iterated, Sequential, Strategy

###############################################################################
# Constants
###############################################################################

NOT: Final[str] = 'not'
AND: Final[str] = 'and'
OR: Final[str] = 'or'
IMPLIES: Final[str] = 'implies'
IFF: Final[str] = 'iff'

MID: Final[Segment] = Segment('mid')

################################################################################
# Helper Functions
################################################################################


def _not(x: Expression) -> Compound:
    return Compound(NOT, (x,))


def _or(*args: Expression) -> Compound:
    return Compound(OR, args)


def _and(*args: Expression) -> Compound:
    return Compound(AND, args)


################################################################################
# Negation
################################################################################


@typechecked
def negation_rules() -> RuleSet:
    """
    Pushes negations towards the leaves, one level per rewrite.
    Implications and equivalences are rewritten first in terms
    of `not`, `or` and `and`.
    """
    x = Var('x')
    args = Segment('args')

    def de_morgan(op: str):
        def handler(b: Bindings) -> Expression:
            return Compound(op, [_not(arg) for arg in b['args']])
        return handler

    def implies(b: Bindings) -> Expression:
        # a -> b  ==  ~a | b
        return _or(_not(b['p']), b['q'])

    def iff(b: Bindings) -> Expression:
        # a <-> b  ==  (~a | b) & (a | ~b)
        return _and(_or(_not(b['p']), b['q']), _or(b['p'], _not(b['q'])))

    p = Var('p')
    q = Var('q')
    return RuleSet(
        (
            compile_rule(Compound(IMPLIES, (p, q)), implies, name='implies-elimination'),
            compile_rule(Compound(IFF, (p, q)), iff, name='iff-elimination'),
            compile_rule(_not(_not(x)), lambda b: b['x'], name='double-negation'),
            compile_rule(_not(TRUE), lambda _b: FALSE, name='not-true'),
            compile_rule(_not(FALSE), lambda _b: TRUE, name='not-false'),
            compile_rule(_not(Compound(OR, (args,))), de_morgan(AND), name='not-or'),
            compile_rule(_not(Compound(AND, (args,))), de_morgan(OR), name='not-and'),
        ),
        name='negation',
    )


################################################################################
# Disjunction and Conjunction
################################################################################


def _complement(op: str, value: Boolean) -> List[Rule]:
    # (op ..pre x ..mid (not x) ..post) -> value, in either order
    x = Var('x')
    return [
        compile_rule(
            Compound(op, (PRE, x, MID, _not(x), POST)),
            lambda _b: value,
            name=f'{op}-complement',
        ),
        compile_rule(
            Compound(op, (PRE, _not(x), MID, x, POST)),
            lambda _b: value,
            name=f'{op}-complement',
        ),
    ]


def _connective_rules(
    op: str,
    identity: Boolean,
    absorbing: Boolean,
    ordering: Ordering,
    commutative: bool,
) -> List[Rule]:
    rules: List[Rule] = [
        nullary_replacement(op, identity),
        unary_elimination(op),
        constant_promotion(op, absorbing),
        constant_elimination(op, identity),
    ]
    rules.extend(_complement(op, absorbing))
    rules.append(associativity(op))
    rules.append(idempotence(op))
    if commutative:
        rules.append(commutativity(op, ordering))
    return rules


@typechecked
def or_rules(ordering: Ordering = STANDARD_ORDERING, commutative: bool = True) -> RuleSet:
    return RuleSet(_connective_rules(OR, FALSE, TRUE, ordering, commutative), name='or')


@typechecked
def and_rules(ordering: Ordering = STANDARD_ORDERING, commutative: bool = True) -> RuleSet:
    return RuleSet(_connective_rules(AND, TRUE, FALSE, ordering, commutative), name='and')


@typechecked
def distribute_or_over_and(
    ordering: Ordering = STANDARD_ORDERING,
    commutative: bool = True,
    max_iterations: Optional[int] = None,
) -> RuleSet:
    """
    (or ..pre (and a b ...) ..post) -> (and (or ..pre a ..post) (or ..pre b ..post) ...)
    """
    disjunctions = Iterated(or_rules(ordering, commutative=commutative), max_iterations)

    def handler(b: Bindings) -> Expression:
        pre = b['pre']
        post = b['post']
        clauses = [disjunctions(Compound(OR, pre + (term,) + post)) for term in b['terms']]
        return Compound(AND, clauses)

    pattern = Compound(OR, (PRE, Compound(AND, (Segment('terms'),)), POST))
    rule = compile_rule(pattern, handler, name='or-over-and')
    return RuleSet((rule,), name='or-over-and')


################################################################################
# Interface
################################################################################


@typechecked
def logic_simplifier(
    ordering: Ordering = STANDARD_ORDERING,
    commutative: bool = True,
    max_iterations: Optional[int] = None,
) -> Strategy:
    return Sequential(
        (
            Iterated(negation_rules(), max_iterations=max_iterations),
            Iterated(
                Sequential(
                    (
                        Iterated(or_rules(ordering, commutative), max_iterations),
                        Iterated(and_rules(ordering, commutative), max_iterations),
                    )
                ),
                max_iterations=max_iterations,
            ),
        )
    )


@typechecked
def cnf_converter(
    ordering: Ordering = STANDARD_ORDERING,
    commutative: bool = True,
    max_iterations: Optional[int] = None,
) -> Strategy:
    return Sequential(
        (
            Iterated(negation_rules(), max_iterations=max_iterations),
            Iterated(
                Sequential(
                    (
                        Iterated(or_rules(ordering, commutative), max_iterations),
                        Iterated(and_rules(ordering, commutative), max_iterations),
                        Apply(distribute_or_over_and(ordering, commutative, max_iterations)),
                    )
                ),
                max_iterations=max_iterations,
            ),
        )
    )


DEFAULT_SIMPLIFIER: Final[Strategy] = logic_simplifier()
DEFAULT_CNF: Final[Strategy] = cnf_converter()


def simplify(expr: Expression) -> Expression:
    return DEFAULT_SIMPLIFIER(expr)


def to_cnf(expr: Expression) -> Expression:
    return DEFAULT_CNF(expr)
