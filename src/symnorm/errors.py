# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Exceptions
###############################################################################


class ClassificationError(TypeError):
    pass


class NonConvergenceError(RuntimeError):
    def __init__(self, expression, iterations: int):
        super().__init__(f'no fixpoint after {iterations} iterations: {expression}')
        self.expression = expression
        self.iterations = iterations


class UnsupportedAlgebraError(NotImplementedError):
    pass


class ParseError(ValueError):
    pass
