# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

"""
Module that contains the command line program.

Why does this file exist, and why not put this in __main__?

  In some cases, it is possible to import `__main__.py` twice.
  This approach avoids that. Also see:
  https://click.palletsprojects.com/en/5.x/setuptools/#setuptools-integration

Some of the structure of this file came from this StackExchange question:
  https://softwareengineering.stackexchange.com/q/418600
"""

###############################################################################
# Imports
###############################################################################

from typing import Any, Final

import argparse
import logging
from pathlib import Path
import sys
from traceback import print_exc

from symnorm import __version__ as current_version
from symnorm._validation import MODES
from symnorm.config import load_settings, Settings
from symnorm.normalize import normalize, normalize_files

###############################################################################
# Constants
###############################################################################

PROG: Final[str] = 'symnorm'

###############################################################################
# Argument Parsing
###############################################################################


def parse_arguments(argv: list[str] | None) -> dict[str, Any]:
    description = 'Rule-based simplification of symbolic expressions.'
    parser = argparse.ArgumentParser(prog=PROG, description=description)

    parser.add_argument(
        '--version',
        action='version',
        version=f'{PROG} {current_version}',
        help='prints the program version',
    )

    parser.add_argument('-o', '--output', help='output file to place results')

    parser.add_argument(
        '-f',
        '--files',
        action='store_true',
        help='process args as files of S-expressions (default: S-expressions)',
    )

    parser.add_argument('-c', '--config', type=Path, help='path to a YAML configuration file')

    parser.add_argument('-m', '--mode', choices=MODES, help='simplification strategy')

    parser.add_argument(
        '--max-iterations',
        type=int,
        help='fail when a fixpoint loop needs more passes than this',
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='log every rewrite')

    parser.add_argument('exprs', nargs='+', help='input expressions')

    args = parser.parse_args(args=argv)
    return vars(args)


###############################################################################
# Setup
###############################################################################


def load_configs(args: dict[str, Any]) -> Settings:
    config_path: Path | None = args.get('config')
    settings = load_settings(config_path) if config_path else Settings()
    # command line options take precedence
    if args.get('mode'):
        settings = settings.but(mode=args['mode'])
    if args.get('max_iterations') is not None:
        settings = settings.but(max_iterations=args['max_iterations'])
    return settings


def setup_logging(args: dict[str, Any]):
    level = logging.DEBUG if args.get('verbose') else logging.WARNING
    logging.basicConfig(level=level, format='%(name)s: %(message)s', stream=sys.stderr)


###############################################################################
# Commands
###############################################################################


def handle_simplification(args: dict[str, Any], settings: Settings) -> int:
    if args.get('files'):
        results = normalize_files(args['exprs'], settings=settings)
    else:
        results = normalize(args['exprs'], settings=settings)
    output = '\n'.join(map(str, results))

    output_path: str | None = args.get('output')
    if output_path:
        path: Path = Path(output_path).resolve(strict=False)
        path.write_text(output + '\n', encoding='utf-8')
    else:
        print(output)

    return 0  # success


###############################################################################
# Entry Point
###############################################################################


def main(argv: list[str] | None = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args)

    try:
        settings = load_configs(args)
        return handle_simplification(args, settings)

    except KeyboardInterrupt:
        print('Aborted manually.', file=sys.stderr)
        return 1

    except Exception as err:
        print('An unhandled exception crashed the application!', file=sys.stderr)
        print(err, file=sys.stderr)
        print_exc()
        return 1
