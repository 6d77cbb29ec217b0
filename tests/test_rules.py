# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from symnorm.ast import call, Compound, Number, ONE, Symbol, ZERO
from symnorm.matching import apply_rules, RuleSet
from symnorm.ordering import STANDARD_ORDERING
from symnorm.rules import (
    adjacent_folding,
    associativity,
    commutativity,
    constant_elimination,
    constant_promotion,
    idempotence,
    nullary_replacement,
    unary_elimination,
)

################################################################################
# Test Functions
################################################################################


def test_nullary_replacement():
    rule = nullary_replacement('+', ZERO)
    assert rule.apply(call('+')) == ZERO
    assert rule.apply(call('+', 1)) is None


def test_unary_elimination():
    rule = unary_elimination('*')
    assert rule.apply(call('*', 'x')) == Symbol('x')
    assert rule.apply(call('*', 'x', 'y')) is None


def test_constant_elimination_removes_one():
    rule = constant_elimination('+', ZERO)
    assert rule.apply(call('+', 0, 'x', 0)) == call('+', 'x', 0)
    assert rule.apply(call('+', 'x', 'y')) is None
    result, changed = apply_rules(RuleSet((rule,)), call('+', 0, 'x', 0))
    assert changed
    assert result == call('+', 'x')


def test_constant_promotion():
    rule = constant_promotion('*', ZERO)
    assert rule.apply(call('*', 'x', 0, 'y')) == ZERO
    assert rule.apply(call('*', 'x', 'y')) is None


def test_associativity_flattens_all_at_once():
    rule = associativity('+')
    expr = call('+', call('+', 'a', 'b'), 'c', call('+', 'd', 'e'))
    assert rule.apply(expr) == call('+', 'a', 'b', 'c', 'd', 'e')
    assert rule.apply(call('+', 'a', call('*', 'b', 'c'))) is None


def test_associativity_one_level():
    rule = associativity('+')
    expr = call('+', 'a', call('+', 'b', call('+', 'c', 'd')))
    assert rule.apply(expr) == call('+', 'a', 'b', call('+', 'c', 'd'))
    result, _ = apply_rules(RuleSet((rule,)), expr)
    assert result == call('+', 'a', 'b', 'c', 'd')


def test_associativity_wide():
    left = Compound('+', map(Number, range(200)))
    right = Compound('+', map(Number, range(200, 400)))
    result = associativity('+').apply(Compound('+', (left, right)))
    assert result == Compound('+', map(Number, range(400)))


def test_commutativity_sorts():
    rule = commutativity('+', STANDARD_ORDERING)
    expr = call('+', 'y', call('*', 'a', 'b'), 'x', 2)
    assert rule.apply(expr) == call('+', 2, 'x', 'y', call('*', 'a', 'b'))


def test_commutativity_canonical_is_unchanged():
    rule = commutativity('+', STANDARD_ORDERING)
    expr = call('+', 2, 'x', 'y')
    assert rule.apply(expr) is None
    result, changed = apply_rules(RuleSet((rule,)), expr)
    assert not changed
    assert result is expr


def test_idempotence():
    rule = idempotence('or')
    assert rule.apply(call('or', 'a', 'a', 'b', 'b', 'b', 'c')) == call('or', 'a', 'b', 'c')
    assert rule.apply(call('or', 'a', 'b')) is None
    # only adjacent duplicates
    assert rule.apply(call('or', 'a', 'b', 'a')) is None


def test_idempotence_with_commutativity():
    rules = RuleSet((idempotence('or'), commutativity('or', STANDARD_ORDERING)))
    result, changed = apply_rules(rules, call('or', 'a', 'b', 'a'))
    assert changed
    assert result == call('or', 'a', 'b')


def test_adjacent_folding():
    rule = adjacent_folding('+', lambda a, b: a + b)
    assert rule.apply(call('+', 'x', 2, 3, 'y')) == call('+', 'x', 5, 'y')
    assert rule.apply(call('+', 2, 'x', 3)) is None
    rule = adjacent_folding('*', lambda a, b: a * b)
    assert rule.apply(call('*', 2, 3, 4)) == call('*', 6, 4)
    assert rule.apply(call('*', 1.5, 2)) == Compound('*', (Number(3.0),))
    assert rule.apply(call('*', ONE)) is None
