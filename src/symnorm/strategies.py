# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from typing import Any, Final, Iterable, Optional, Tuple, Union

import logging

from attrs import field, frozen
from attrs.validators import deep_iterable, instance_of, optional
from typeguard import typechecked

from symnorm.ast import Expression
from symnorm.errors import NonConvergenceError
from symnorm.matching import apply_rules, RuleSet

###############################################################################
# Constants
###############################################################################

logger: Final = logging.getLogger(__name__)

################################################################################
# Strategy Combinators
################################################################################


@frozen
class Strategy:
    """
    Base class of rewriting strategies.
    `run` returns the rewritten tree and whether it changed.
    """

    def run(self, expr: Expression) -> Tuple[Expression, bool]:
        raise NotImplementedError()

    def __call__(self, expr: Expression) -> Expression:
        return self.run(expr)[0]

    def bounded(self, max_iterations: int) -> 'Strategy':
        """
        Returns a copy in which every rule application that has no bound
        of its own gives up after `max_iterations` rewrites at one site.
        """
        return self


@frozen
class Apply(Strategy):
    rules: RuleSet = field(validator=instance_of(RuleSet))
    max_iterations: Optional[int] = field(default=None, validator=optional(instance_of(int)))

    def run(self, expr: Expression) -> Tuple[Expression, bool]:
        return apply_rules(self.rules, expr, max_iterations=self.max_iterations)

    def bounded(self, max_iterations: int) -> Strategy:
        if self.max_iterations is not None:
            return self
        return Apply(self.rules, max_iterations=max_iterations)

    def __str__(self) -> str:
        return self.rules.name or 'rules'


def as_strategy(value: Union[Strategy, RuleSet]) -> Strategy:
    if isinstance(value, Strategy):
        return value
    if isinstance(value, RuleSet):
        return Apply(value)
    raise TypeError(f'expected Strategy or RuleSet, got {value!r}')


def _as_strategies(values: Iterable[Any]) -> Tuple[Strategy, ...]:
    return tuple(map(as_strategy, values))


@frozen
class Sequential(Strategy):
    strategies: Tuple[Strategy, ...] = field(
        factory=tuple,
        converter=_as_strategies,
        validator=deep_iterable(instance_of(Strategy)),
    )

    def run(self, expr: Expression) -> Tuple[Expression, bool]:
        changed = False
        for strategy in self.strategies:
            expr, step_changed = strategy.run(expr)
            changed = changed or step_changed
        return expr, changed

    def bounded(self, max_iterations: int) -> Strategy:
        return Sequential(s.bounded(max_iterations) for s in self.strategies)

    def __str__(self) -> str:
        return f'sequential({", ".join(map(str, self.strategies))})'


@frozen
class Iterated(Strategy):
    """
    Reapplies a strategy to its own output until a pass changes nothing.
    Without `max_iterations` there is no bound on the number of passes.
    The bound also applies to the rule applications inside the strategy.
    """

    strategy: Strategy = field(converter=as_strategy)
    max_iterations: Optional[int] = field(default=None, validator=optional(instance_of(int)))

    def __attrs_post_init__(self):
        if self.max_iterations is not None:
            object.__setattr__(self, 'strategy', self.strategy.bounded(self.max_iterations))

    def bounded(self, max_iterations: int) -> Strategy:
        if self.max_iterations is not None:
            return self
        return Iterated(self.strategy, max_iterations=max_iterations)

    def run(self, expr: Expression) -> Tuple[Expression, bool]:
        changed = False
        iterations = 0
        while True:
            if self.max_iterations is not None and iterations >= self.max_iterations:
                raise NonConvergenceError(expr, iterations)
            iterations += 1
            result, step_changed = self.strategy.run(expr)
            if not step_changed or result == expr:
                break
            expr = result
            changed = True
        logger.debug('%s: fixpoint after %d iteration(s)', self, iterations)
        return expr, changed

    def __str__(self) -> str:
        return f'iterated({self.strategy})'


################################################################################
# Convenience Functions
################################################################################


@typechecked
def sequential(*strategies: Union[Strategy, RuleSet]) -> Strategy:
    return Sequential(strategies)


@typechecked
def iterated(strategy: Union[Strategy, RuleSet], max_iterations: Optional[int] = None) -> Strategy:
    return Iterated(strategy, max_iterations=max_iterations)
