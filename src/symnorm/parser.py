# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

"""
Reading and printing expressions as S-expressions.

    #t #f           booleans
    42 -1 3.5       numbers
    x foo +         symbols
    ()              the empty expression
    (op a b ...)    compound expressions
    ; comment       ignored until the end of the line
"""

###############################################################################
# Imports
###############################################################################

from typing import Final, List, Tuple

import re

from typeguard import typechecked

from symnorm.ast import Compound, EMPTY, Expression, FALSE, Number, Symbol, TRUE
from symnorm.errors import ParseError

###############################################################################
# Constants
###############################################################################

TOKEN_REGEX: Final = re.compile(r'\s*(?:;[^\n]*\n?\s*)*(\(|\)|[^\s();]+)')
INT_REGEX: Final = re.compile(r'[+-]?\d+')
FLOAT_REGEX: Final = re.compile(r'[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?')

BOOLEANS: Final = {
    '#t': TRUE,
    '#true': TRUE,
    '#f': FALSE,
    '#false': FALSE,
}

################################################################################
# Parsing
################################################################################


def _tokenize(text: str) -> List[str]:
    tokens = []
    pos = 0
    while True:
        m = TOKEN_REGEX.match(text, pos)
        if m is None:
            break
        tokens.append(m.group(1))
        pos = m.end()
    rest = text[pos:].strip()
    if rest and not rest.startswith(';'):
        raise ParseError(f'unexpected input: {rest[:20]!r}')
    return tokens


def _atom(token: str) -> Expression:
    boolean = BOOLEANS.get(token)
    if boolean is not None:
        return boolean
    if INT_REGEX.fullmatch(token):
        return Number(int(token))
    if FLOAT_REGEX.fullmatch(token):
        return Number(float(token))
    return Symbol(token)


def _read(tokens: List[str], i: int) -> Tuple[Expression, int]:
    # compounds still open, innermost last
    stack: List[Tuple[str, List[Expression]]] = []
    while True:
        if i >= len(tokens):
            raise ParseError('missing )' if stack else 'unexpected end of input')
        token = tokens[i]
        i += 1
        if token == '(':
            if i >= len(tokens):
                raise ParseError('missing )')
            operator = tokens[i]
            i += 1
            if operator == ')':
                expr = EMPTY
            elif operator == '(' or not isinstance(_atom(operator), Symbol):
                raise ParseError(f'expected operator symbol, found {operator!r}')
            else:
                stack.append((operator, []))
                continue
        elif token == ')':
            if not stack:
                raise ParseError('unexpected )')
            operator, arguments = stack.pop()
            expr = Compound(operator, arguments)
        else:
            expr = _atom(token)
        if not stack:
            return expr, i
        stack[-1][1].append(expr)


@typechecked
def parse_expressions(text: str) -> List[Expression]:
    tokens = _tokenize(text)
    exprs = []
    i = 0
    while i < len(tokens):
        expr, i = _read(tokens, i)
        exprs.append(expr)
    return exprs


@typechecked
def parse_expression(text: str) -> Expression:
    exprs = parse_expressions(text)
    if len(exprs) != 1:
        raise ParseError(f'expected one expression, found {len(exprs)}')
    return exprs[0]


################################################################################
# Printing
################################################################################


def format_expression(expr: Expression) -> str:
    return str(expr)
