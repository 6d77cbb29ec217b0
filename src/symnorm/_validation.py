# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from typing import Any, Final, Mapping

###############################################################################
# Constants
###############################################################################

CONFIG_KEY_MAX_ITERATIONS: Final[str] = 'max_iterations'
CONFIG_KEY_COMMUTATIVE: Final[str] = 'commutative'
CONFIG_KEY_MODE: Final[str] = 'mode'

MODES: Final = ('algebra', 'logic', 'cnf', 'expand', 'contract')

###############################################################################
# Input Validation
###############################################################################


def validate_config(data: Mapping[str, Any]):
    if not isinstance(data, Mapping):
        raise TypeError(f'expected Mapping[str, Any], got {data!r}')
    for key in data:
        if not isinstance(key, str):
            raise TypeError(f'expected str keys, found {key!r}')
        if key not in (CONFIG_KEY_MAX_ITERATIONS, CONFIG_KEY_COMMUTATIVE, CONFIG_KEY_MODE):
            raise ValueError(f'unknown configuration key {key!r}')
    _validate_max_iterations(data.get(CONFIG_KEY_MAX_ITERATIONS))
    _validate_commutative(data.get(CONFIG_KEY_COMMUTATIVE, True))
    _validate_mode(data.get(CONFIG_KEY_MODE, MODES[0]))


def _validate_max_iterations(value: Any):
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int value for '{CONFIG_KEY_MAX_ITERATIONS}', found {value!r}")
    if value < 1:
        raise ValueError(f"expected positive '{CONFIG_KEY_MAX_ITERATIONS}', found {value!r}")


def _validate_commutative(value: Any):
    if not isinstance(value, bool):
        raise TypeError(f"expected bool value for '{CONFIG_KEY_COMMUTATIVE}', found {value!r}")


def _validate_mode(value: Any):
    if not isinstance(value, str):
        raise TypeError(f"expected str value for '{CONFIG_KEY_MODE}', found {value!r}")
    if value not in MODES:
        raise ValueError(f"unknown mode {value!r}, expected one of {', '.join(MODES)}")
