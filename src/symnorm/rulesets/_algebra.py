# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from math import gcd

from symnorm.ast import Expression, Number, ONE, is_integer
from symnorm.errors import UnsupportedAlgebraError

################################################################################
# Polynomial GCD and Division
################################################################################

# Only the trivial cases are supported. As an extension, two integer literals
# get their integer GCD instead of 1, so `(/ 6 4)` reduces to `(/ 3 2)`.
# A real multivariate implementation can be passed to `quotient_rules`.


def polynomial_gcd(a: Expression, b: Expression) -> Expression:
    if a == b:
        return a
    if is_integer(a) and is_integer(b):
        return Number(gcd(a.value, b.value))
    return ONE


def polynomial_divide(a: Expression, b: Expression) -> Expression:
    if b == ONE:
        return a
    if a == b:
        return ONE
    if is_integer(a) and is_integer(b) and b.value != 0 and a.value % b.value == 0:
        return Number(a.value // b.value)
    raise UnsupportedAlgebraError(f'polynomial division not implemented: {a} / {b}')
