# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from typing import Any, Optional, Union

from pathlib import Path

from attrs import evolve, field, frozen
from attrs.validators import in_, instance_of, optional
from ruamel.yaml import YAML
from typeguard import typechecked

from symnorm._validation import (
    CONFIG_KEY_COMMUTATIVE,
    CONFIG_KEY_MAX_ITERATIONS,
    CONFIG_KEY_MODE,
    MODES,
    validate_config,
)
from symnorm.ordering import Ordering, STANDARD_ORDERING
from symnorm.rulesets.arithmetic import algebra_simplifier
from symnorm.rulesets.exponents import contract_powers, expand_powers
from symnorm.rulesets.logic import cnf_converter, logic_simplifier
from symnorm.strategies import Strategy

################################################################################
# Settings
################################################################################


@frozen
class Settings:
    mode: str = field(default=MODES[0], validator=in_(MODES))
    commutative: bool = field(default=True, validator=instance_of(bool))
    max_iterations: Optional[int] = field(default=None, validator=optional(instance_of(int)))

    def but(self, **kwargs: Any) -> 'Settings':
        return evolve(self, **kwargs)

    def strategy(self, ordering: Ordering = STANDARD_ORDERING) -> Strategy:
        if self.mode == 'algebra':
            return algebra_simplifier(
                ordering=ordering,
                commutative=self.commutative,
                max_iterations=self.max_iterations,
            )
        if self.mode == 'logic':
            return logic_simplifier(
                ordering=ordering,
                commutative=self.commutative,
                max_iterations=self.max_iterations,
            )
        if self.mode == 'cnf':
            return cnf_converter(
                ordering=ordering,
                commutative=self.commutative,
                max_iterations=self.max_iterations,
            )
        if self.mode == 'expand':
            return expand_powers(max_iterations=self.max_iterations)
        assert self.mode == 'contract', self.mode
        return contract_powers(max_iterations=self.max_iterations)


@typechecked
def settings_from_data(data: Any) -> Settings:
    validate_config(data)
    return Settings(
        mode=data.get(CONFIG_KEY_MODE, MODES[0]),
        commutative=data.get(CONFIG_KEY_COMMUTATIVE, True),
        max_iterations=data.get(CONFIG_KEY_MAX_ITERATIONS),
    )


@typechecked
def load_settings(path: Union[Path, str]) -> Settings:
    yaml = YAML(typ='safe')
    data = yaml.load(Path(path).resolve(strict=True))
    if data is None:
        return Settings()
    return settings_from_data(data)
