#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Film (sensor) placed at the image plane of a lens system

.. Created on Sun Mar 15 10:20:37 2026
"""
from math import hypot

import attr
import numpy as np

import lenssystem.optical.model_constants as mc


@attr.s
class Film:
    """ A rectangular film centered on the optical axis at z = 0.

    Attributes:
        width: film extent along x
        height: film extent along y
    """
    width = attr.ib(default=mc.film_width)
    height = attr.ib(default=mc.film_height)

    @width.validator
    @height.validator
    def _check_positive(self, attribute, value):
        if value <= 0.0:
            raise ValueError(f"film {attribute.name} must be > 0")

    @property
    def diagonal(self):
        return hypot(self.width, self.height)

    @property
    def max_field_height(self):
        """ largest distance of a film point from the optical axis """
        return 0.5*self.diagonal

    def position(self, u, v):
        """ return the film point for normalized film coordinates (u, v)

        (0, 0) and (1, 1) are opposite corners of the film.
        """
        return np.array([(u - 0.5)*self.width, (v - 0.5)*self.height, 0.0])
