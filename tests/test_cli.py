# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

import pytest

from symnorm.cli import load_configs, main, parse_arguments
from symnorm.config import Settings

################################################################################
# Test Functions
################################################################################


def test_simplify_arguments(capsys):
    assert main(['(+ 2 3 x)', '(* 2 (+ x 1))']) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ['(+ 5 x)', '(+ 2 (* 2 x))']


def test_cnf_mode(capsys):
    assert main(['--mode', 'cnf', '(or (and a b) c)']) == 0
    assert capsys.readouterr().out.strip() == '(and (or a c) (or b c))'


def test_files(tmp_path, capsys):
    path = tmp_path / 'input.sexp'
    path.write_text('(or a a)\n(and #t b)\n', encoding='utf-8')
    assert main(['-m', 'logic', '-f', str(path)]) == 0
    assert capsys.readouterr().out.splitlines() == ['a', 'b']


def test_output_file(tmp_path, capsys):
    path = tmp_path / 'out.txt'
    assert main(['-o', str(path), '(^ x 2)', '--mode', 'expand']) == 0
    assert capsys.readouterr().out == ''
    assert path.read_text(encoding='utf-8') == '(* x x)\n'


def test_config_file(tmp_path, capsys):
    path = tmp_path / 'symnorm.yaml'
    path.write_text('mode: logic\ncommutative: false\n', encoding='utf-8')
    assert main(['-c', str(path), '(or b a)']) == 0
    assert capsys.readouterr().out.strip() == '(or b a)'


def test_options_override_config(tmp_path):
    path = tmp_path / 'symnorm.yaml'
    path.write_text('mode: logic\nmax_iterations: 10\n', encoding='utf-8')
    args = parse_arguments(['-c', str(path), '-m', 'cnf', '--max-iterations', '3', 'x'])
    settings = load_configs(args)
    assert settings == Settings(mode='cnf', commutative=True, max_iterations=3)


def test_invalid_expression(capsys):
    assert main(['(+ 1']) == 1
    assert 'missing )' in capsys.readouterr().err


def test_non_convergence(capsys):
    assert main(['-m', 'contract', '--max-iterations', '1', '(* x x x)']) == 1


def test_unknown_mode():
    with pytest.raises(SystemExit):
        main(['--mode', 'magic', 'x'])
