""" package supplying utility functions for math and numpy support

    The :mod:`~lenssystem.util` subpackage provides vector functions used
    by the ray transport code, in :mod:`~.misc_math`
"""
