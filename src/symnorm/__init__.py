# SPDX-License-Identifier: MIT
# Copyright © 2021 André Santos

###############################################################################
# Imports
###############################################################################

from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

from symnorm.normalize import normalize, normalize_files

###############################################################################
# Constants
###############################################################################

try:
    __version__ = version('symnorm')
except PackageNotFoundError:  # pragma: no cover
    # package is not installed
    __version__ = 'unknown'
