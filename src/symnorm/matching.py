# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

"""
Pattern matching and rule dispatch.

This module provides the minimal engine that the simplifiers are built on:
patterns are ordinary expression trees that contain capture nodes,
rules pair a pattern with a handler, and `apply_rules` drives a rule set
across a whole tree, bottom-up, reporting whether anything changed.

A handler receives the `Bindings` of a match and returns one of:

- a replacement `Expression`;
- an `Accept` wrapping the replacement value;
- `REJECT`, meaning the match is declined and the engine should move on
  to the next binding, rule or site.
"""

###############################################################################
# Imports
###############################################################################

from typing import (
    Callable,
    Dict,
    Final,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
)

from collections.abc import Mapping as MappingABC
import logging

from attrs import field, frozen
from attrs.validators import deep_iterable, instance_of, min_len
from typeguard import typechecked

from symnorm.ast import Expression, ExpressionType
from symnorm.errors import NonConvergenceError

###############################################################################
# Constants
###############################################################################

logger: Final = logging.getLogger(__name__)

################################################################################
# Patterns
################################################################################


@frozen
class Var(Expression):
    """Captures exactly one subexpression."""

    name: str = field(validator=[instance_of(str), min_len(1)])
    guard: Optional[Callable[[Expression], bool]] = field(default=None, eq=False)

    @property
    def type(self) -> ExpressionType:
        return ExpressionType.PATTERN

    def __str__(self) -> str:
        return f'?{self.name}'


@frozen
class Segment(Expression):
    """Captures a contiguous run of zero or more sibling subexpressions."""

    name: str = field(validator=[instance_of(str), min_len(1)])
    guard: Optional[Callable[[Tuple[Expression, ...]], bool]] = field(default=None, eq=False)

    @property
    def type(self) -> ExpressionType:
        return ExpressionType.PATTERN

    def __str__(self) -> str:
        return f'?..{self.name}'


BoundValue = Union[Expression, Tuple[Expression, ...]]


@frozen(eq=False)
class Bindings(MappingABC):
    _values: Dict[str, BoundValue] = field(factory=dict)

    def __getitem__(self, key: str) -> BoundValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def bind(self, name: str, value: BoundValue) -> Optional['Bindings']:
        previous = self._values.get(name)
        if previous is not None:
            return self if previous == value else None
        values = dict(self._values)
        values[name] = value
        return Bindings(values)

    def __repr__(self) -> str:
        return f'Bindings({self._values!r})'


def match(pattern: Expression, expr: Expression, bindings: Optional[Bindings] = None) -> Iterator[Bindings]:
    """
    Yields every set of bindings under which `pattern` matches `expr`.
    Segments are tried shortest first.
    """
    if bindings is None:
        bindings = Bindings()
    if isinstance(pattern, Var):
        if pattern.guard is None or pattern.guard(expr):
            result = bindings.bind(pattern.name, expr)
            if result is not None:
                yield result
    elif isinstance(pattern, Segment):
        raise ValueError(f'segment outside of an argument list: {pattern}')
    elif pattern.is_compound:
        if expr.is_compound and expr.operator == pattern.operator:
            yield from _match_arguments(pattern.arguments, expr.arguments, 0, 0, bindings)
    elif pattern == expr:
        yield bindings


def _match_arguments(
    patterns: Tuple[Expression, ...],
    exprs: Tuple[Expression, ...],
    i: int,
    j: int,
    bindings: Bindings,
) -> Iterator[Bindings]:
    if i == len(patterns):
        if j == len(exprs):
            yield bindings
        return
    pattern = patterns[i]
    if isinstance(pattern, Segment):
        # a trailing segment can only take the remainder
        start = len(exprs) if i == len(patterns) - 1 else j
        follower = patterns[i + 1] if i + 1 < len(patterns) else None
        for k in range(start, len(exprs) + 1):
            if follower is not None and not _may_match(follower, exprs, k):
                continue
            run = exprs[j:k]
            if pattern.guard is not None and not pattern.guard(run):
                continue
            result = bindings.bind(pattern.name, run)
            if result is not None:
                yield from _match_arguments(patterns, exprs, i + 1, k, result)
    elif j < len(exprs):
        for result in match(pattern, exprs[j], bindings):
            yield from _match_arguments(patterns, exprs, i + 1, j + 1, result)


def _may_match(pattern: Expression, exprs: Tuple[Expression, ...], k: int) -> bool:
    # cheap test on the argument right after a segment that ends at `k`
    if isinstance(pattern, Segment):
        return True
    if k >= len(exprs):
        return False
    expr = exprs[k]
    if isinstance(pattern, Var):
        return pattern.guard is None or pattern.guard(expr)
    if pattern.is_compound:
        return expr.is_compound and expr.operator == pattern.operator
    return pattern == expr


################################################################################
# Handler Results
################################################################################


@frozen
class Accept:
    value: Expression = field(validator=instance_of(Expression))


@frozen
class Rejection:
    def __str__(self) -> str:
        return 'REJECT'


REJECT: Final[Rejection] = Rejection()

HandlerResult = Union[Expression, Accept, Rejection]
Handler = Callable[[Bindings], HandlerResult]

################################################################################
# Rules
################################################################################


@frozen
class Rule:
    pattern: Expression = field(validator=instance_of(Expression))
    handler: Handler = field(eq=False)
    name: str = ''

    def matches(self, expr: Expression) -> Iterator[Bindings]:
        return match(self.pattern, expr)

    def apply(self, expr: Expression) -> Optional[Expression]:
        """
        Returns the replacement for `expr` produced by the first binding
        that the handler accepts, or `None` if the rule does not fire.
        """
        for bindings in self.matches(expr):
            result = self.handler(bindings)
            if isinstance(result, Rejection):
                continue
            if isinstance(result, Accept):
                return result.value
            if isinstance(result, Expression):
                return result
            raise TypeError(f'rule {self.name!r} returned {result!r}')
        return None

    def __str__(self) -> str:
        return self.name or str(self.pattern)


@typechecked
def compile_rule(pattern: Expression, handler: Callable, name: str = '') -> Rule:
    return Rule(pattern, handler, name=name)


@frozen
class RuleSet:
    rules: Tuple[Rule, ...] = field(
        factory=tuple,
        converter=tuple,
        validator=deep_iterable(instance_of(Rule)),
    )
    name: str = ''

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __add__(self, other: 'RuleSet') -> 'RuleSet':
        if not isinstance(other, RuleSet):
            return NotImplemented
        name = '+'.join(n for n in (self.name, other.name) if n)
        return RuleSet(self.rules + other.rules, name=name)

    def rewrite(self, expr: Expression) -> Optional[Expression]:
        for rule in self.rules:
            result = rule.apply(expr)
            if result is not None:
                logger.debug('[%s] %s: %s -> %s', self.name, rule, expr, result)
                return result
        return None


################################################################################
# Rule Application
################################################################################


def apply_rules(
    rules: RuleSet,
    expr: Expression,
    max_iterations: Optional[int] = None,
) -> Tuple[Expression, bool]:
    """
    Rewrites `expr` bottom-up with the given rule set.
    Arguments are rewritten before their parent; at each site the rule set
    is applied until no rule fires.
    With `max_iterations`, a site that keeps changing after that many
    rewrites raises `NonConvergenceError`.
    Returns the new tree and whether it differs from the input.
    """
    # post-order walk over an explicit stack, depth is not bounded by recursion
    stack: List[Tuple[Expression, bool]] = [(expr, False)]
    done: List[Tuple[Expression, bool]] = []
    while stack:
        node, expanded = stack.pop()
        if node.is_compound and node.arguments and not expanded:
            stack.append((node, True))
            stack.extend((arg, False) for arg in reversed(node.arguments))
            continue
        changed = False
        if node.is_compound and node.arguments:
            n = len(node.arguments)
            arguments = done[-n:]
            del done[-n:]
            if any(arg_changed for _arg, arg_changed in arguments):
                node = node.but(arguments=[arg for arg, _arg_changed in arguments])
                changed = True
        node, site_changed = _rewrite_site(rules, node, max_iterations)
        done.append((node, changed or site_changed))
    return done.pop()


def _rewrite_site(
    rules: RuleSet,
    expr: Expression,
    max_iterations: Optional[int],
) -> Tuple[Expression, bool]:
    rewrites = 0
    while True:
        result = rules.rewrite(expr)
        if result is None or result == expr:
            return expr, rewrites > 0
        if max_iterations is not None and rewrites >= max_iterations:
            raise NonConvergenceError(result, rewrites)
        rewrites += 1
        expr = result
