#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
"""Generators of 2d sample points on the unit square

    The exit pupil bound estimator draws its candidate points either from a
    numpy random Generator or from a low discrepancy R2 sequence.

.. Created on Sun Mar 15 09:48:12 2026
"""

import numpy as np


# Using the nested radical formula for g=phi_d
# phi(1) = 1.61803398874989484820458683436563
# phi(2) = 1.32471795724474602596090885447809
def phi(d):
    x = 2.0000
    for i in range(10):
        x = pow(1+x, 1/(d+1))
    return x


def R_2_quasi_random_samples(n, seed=0.5):
    """Return n points of the 2d R2 quasi-random sequence as an (n, 2) array

    See `The Unreasonable Effectiveness of Quasirandom Sequences
    <http://extremelearning.com.au/unreasonable-effectiveness-of-quasirandom-sequences/>`_
    """
    d = 2
    g = phi(d)
    alpha = np.array([pow(1/g, j+1) % 1 for j in range(d)])
    i = np.arange(1, n+1).reshape(-1, 1)
    return (seed + alpha*i) % 1


def uniform_samples(n, rng):
    """Return n uniform random points on the unit square as an (n, 2) array
    """
    return rng.random((n, 2))


def create_samples(n, rng=None, quasi_random=False):
    """Return n unit square sample points.

    Args:
        n: number of points
        rng: numpy random Generator, a new unseeded one if None
        quasi_random: if True, use the R2 sequence with a random offset
                      drawn from rng
    """
    if rng is None:
        rng = np.random.default_rng()
    if quasi_random:
        return R_2_quasi_random_samples(n, seed=rng.random())
    return uniform_samples(n, rng)
