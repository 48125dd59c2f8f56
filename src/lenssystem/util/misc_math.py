#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" miscellaneous functions for working with numpy vectors and floats

.. Created on Sat Mar 14 10:12:47 2026
"""
import numpy as np
from numpy.linalg import norm
from math import cos, sin, atan2, hypot


def normalize(v):
    """ return normalized version of input vector v """
    length = norm(v)
    if length == 0.0:
        return v
    else:
        return v/length


def rotate_2d(pt, theta):
    """ rotate 2d point pt about the origin by angle theta (radians) """
    c, s = cos(theta), sin(theta)
    return np.array([pt[0]*c - pt[1]*s, pt[0]*s + pt[1]*c])


def polar_2d(pt):
    """ return radius and polar angle of 2d point pt """
    return hypot(pt[0], pt[1]), atan2(pt[1], pt[0])
