""" Package for first order properties of a lens system

    The :mod:`~.parax` subpackage provides functions deriving first order
    quantities from finite ray traces. These include:

        - Focal and principal points, :mod:`~.cardinal`
        - Focusing by axial shift of the lens, :mod:`~.focus`
"""
