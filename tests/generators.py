# SPDX-License-Identifier: MIT
# Copyright © 2023 André Santos

###############################################################################
# Imports
###############################################################################

from hypothesis import strategies as st

from symnorm.ast import Boolean, Compound, EMPTY, Number, Symbol

################################################################################
# Expression Strategies
################################################################################

symbols = st.sampled_from('abcxyz').map(Symbol)
integers = st.integers(min_value=-5, max_value=5).map(Number)
booleans = st.booleans().map(Boolean)

atoms = st.one_of(st.just(EMPTY), booleans, integers, symbols)


def compounds(children, operators=('+', '*', 'f'), max_size=3):
    return st.builds(
        Compound,
        st.sampled_from(operators),
        st.lists(children, max_size=max_size),
    )


expressions = st.recursive(atoms, compounds, max_leaves=10)

algebra = st.recursive(
    st.one_of(integers, symbols),
    lambda children: compounds(children, operators=('+', '*', '-', '/'), max_size=3),
    max_leaves=8,
)

propositions = st.recursive(
    st.one_of(booleans, st.sampled_from('abc').map(Symbol)),
    lambda children: st.one_of(
        st.builds(lambda x: Compound('not', (x,)), children),
        compounds(children, operators=('and', 'or'), max_size=3),
    ),
    max_leaves=6,
)
