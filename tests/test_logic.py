# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from hypothesis import given, settings
import pytest

from symnorm.ast import Expression, FALSE, Symbol, TRUE
from symnorm.errors import NonConvergenceError
from symnorm.matching import apply_rules
from symnorm.parser import parse_expression as parse
from symnorm.rulesets.logic import (
    cnf_converter,
    distribute_or_over_and,
    logic_simplifier,
    negation_rules,
    simplify,
    to_cnf,
)
from symnorm.strategies import Iterated

from generators import propositions

################################################################################
# Helpers
################################################################################


def _is_literal(expr: Expression) -> bool:
    if expr.is_symbol:
        return True
    return expr.is_application('not') and expr.arguments[0].is_symbol


def _is_clause(expr: Expression) -> bool:
    if expr.is_application('or'):
        return all(map(_is_literal, expr.arguments))
    return _is_literal(expr)


def _is_cnf(expr: Expression) -> bool:
    if expr.is_boolean:
        return True
    if expr.is_application('and'):
        return all(map(_is_clause, expr.arguments))
    return _is_clause(expr)


################################################################################
# Test Functions
################################################################################


def test_idempotence():
    assert simplify(parse('(or a a b)')) == parse('(or a b)')
    assert simplify(parse('(or b a b)')) == parse('(or a b)')
    assert simplify(parse('(and c a c b a)')) == parse('(and a b c)')


def test_complementary_pairs():
    assert simplify(parse('(or a (not a) b)')) == TRUE
    assert simplify(parse('(and a (not a) b)')) == FALSE
    assert simplify(parse('(and (not a) b a)')) == FALSE
    assert simplify(parse('(or (not (f x)) y (f x))')) == TRUE


def test_identity_and_absorbing_elements():
    assert simplify(parse('(or)')) == FALSE
    assert simplify(parse('(and)')) == TRUE
    assert simplify(parse('(or a)')) == Symbol('a')
    assert simplify(parse('(or #f a)')) == Symbol('a')
    assert simplify(parse('(or #t a)')) == TRUE
    assert simplify(parse('(and #t a b)')) == parse('(and a b)')
    assert simplify(parse('(and a #f)')) == FALSE


def test_associativity():
    assert simplify(parse('(or a (or b (or c d)))')) == parse('(or a b c d)')
    assert simplify(parse('(and (and b a) c)')) == parse('(and a b c)')


def test_negation():
    strategy = Iterated(negation_rules())
    assert strategy(parse('(not (not a))')) == Symbol('a')
    assert strategy(parse('(not #t)')) == FALSE
    assert strategy(parse('(not #f)')) == TRUE
    assert strategy(parse('(not (or a b))')) == parse('(and (not a) (not b))')
    assert strategy(parse('(not (and a b c))')) == parse('(or (not a) (not b) (not c))')


def test_de_morgan_one_level_per_rewrite():
    rules = negation_rules()
    expr = parse('(not (and a (or b c)))')
    result, changed = apply_rules(rules, expr)
    assert changed
    assert result == parse('(or (not a) (not (or b c)))')
    result, _ = apply_rules(rules, result)
    assert result == parse('(or (not a) (and (not b) (not c)))')


def test_connective_elimination():
    assert simplify(parse('(implies a b)')) == parse('(or b (not a))')
    assert simplify(parse('(iff a b)')) == parse('(and (or a (not b)) (or b (not a)))')
    assert simplify(parse('(implies a a)')) == TRUE


def test_simplifier_keeps_structure():
    expr = parse('(not (and a (or b c)))')
    assert simplify(expr) == parse('(or (not a) (and (not b) (not c)))')


def test_cnf():
    assert to_cnf(parse('(or (and a b) c)')) == parse('(and (or a c) (or b c))')
    assert to_cnf(parse('(or (and a b) (and c d))')) == parse(
        '(and (or a c) (or a d) (or b c) (or b d))'
    )
    assert to_cnf(parse('(not (or a (and b c)))')) == parse('(and (not a) (or (not b) (not c)))')
    assert to_cnf(parse('(or (and a (not a)) b)')) == Symbol('b')


def test_distribution_rule():
    rules = distribute_or_over_and()
    result, changed = apply_rules(rules, parse('(or c (and a b))'))
    assert changed
    assert result == parse('(and (or a c) (or b c))')


def test_cnf_without_commutativity():
    strategy = cnf_converter(commutative=False)
    assert strategy(parse('(or (and a b) c)')) == parse('(and (or a c) (or b c))')
    assert strategy(parse('(or c (and a b))')) == parse('(and (or c a) (or c b))')


def test_independent_configurations():
    a = logic_simplifier()
    b = logic_simplifier(commutative=False)
    expr = parse('(or b a)')
    assert a(expr) == parse('(or a b)')
    assert b(expr) == expr


@settings(max_examples=100, deadline=None)
@given(propositions)
def test_cnf_is_idempotent(expr):
    result = to_cnf(expr)
    assert to_cnf(result) == result
    assert _is_cnf(result)


@settings(max_examples=100, deadline=None)
@given(propositions)
def test_simplify_is_idempotent(expr):
    result = simplify(expr)
    assert simplify(result) == result


def test_distribution_bound():
    with pytest.raises(NonConvergenceError):
        apply_rules(distribute_or_over_and(max_iterations=1), parse('(or c (and a b))'))
