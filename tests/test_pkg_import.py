# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

import symnorm

###############################################################################
# Tests
###############################################################################


def test_import_was_ok():
    assert True


def test_pkg_has_version():
    assert hasattr(symnorm, '__version__')
    assert isinstance(symnorm.__version__, str)
    assert symnorm.__version__ != ''
