# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from typing import Iterable, List, Optional, Union

from pathlib import Path

from symnorm.ast import Expression
from symnorm.config import Settings
from symnorm.parser import parse_expression, parse_expressions

###############################################################################
# Interface
###############################################################################


def normalize_files(
    paths: Iterable[Union[Path, str]],
    settings: Optional[Settings] = None,
) -> List[Expression]:
    """
    Simplifies every expression found in the given files,
    in the order in which they appear.
    """
    exprs: List[Expression] = []
    for input_path in paths:
        path: Path = Path(input_path).resolve(strict=True)
        text: str = path.read_text(encoding='utf-8')
        exprs.extend(parse_expressions(text))
    return normalize(exprs, settings=settings)


def normalize(
    inputs: Iterable[Union[str, Expression]],
    settings: Optional[Settings] = None,
) -> List[Expression]:
    """
    Simplifies each input with the strategy selected by `settings`.
    String inputs are parsed as S-expressions first.
    """
    if settings is None:
        settings = Settings()
    strategy = settings.strategy()
    return [strategy(_parsed(x)) for x in inputs]


def _parsed(value: Union[str, Expression]) -> Expression:
    if isinstance(value, Expression):
        return value
    return parse_expression(value)
