#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Module for lens element surface profile shapes

    The profiles module captures the geometric shape aspect of a lens
    element. Profiles are defined in a coordinate system with the surface
    vertex at the origin and the optical axis along z.

.. Created on Sat Mar 14 11:02:33 2026
"""
import numpy as np
from math import sqrt, isfinite

from lenssystem.util.misc_math import normalize
from lenssystem.raytr.traceerror import TraceMissedSurfaceError


class SurfaceProfile:
    """Base class for surface profiles. """

    def __repr__(self):
        return "{!s}()".format(type(self).__name__)

    def df(self, p):
        """Returns the gradient of the profile surface function at point p. """
        pass

    def normal(self, p):
        """Returns the unit normal of the profile at point p.

        The normal has a positive z component near the vertex.
        """
        return normalize(self.df(p))

    def intersect(self, p, d, z_dir):
        ''' Intersect a profile, starting from an arbitrary point.

        Args:
            p:  start point of the ray in the profile's coordinate system
            d:  unit direction of the ray in the profile's coordinate system
            z_dir: +1 if propagation positive direction, -1 if otherwise

        Returns:
            tuple: distance to intersection point *s1*, intersection point *p*

        Raises:
            :exc:`~lenssystem.raytr.traceerror.TraceMissedSurfaceError`
        '''
        pass


class Spherical(SurfaceProfile):
    """ Spherical surface profile parameterized by curvature.

    The sag :math:`z` is given by:

    :math:`z = R - \\sqrt{R^2 - x^2 - y^2}`

    where :math:`R = 1/c`. A zero curvature is a plane.
    """

    def __init__(self, c=0.0, r=None):
        """ initialize a Spherical profile.

        Args:
            c: curvature
            r: radius of curvature. If zero, taken as planar. If r is
                specified, it overrides any input for c (curvature).
        """
        if r is not None:
            self.r = r
        else:
            self.cv = c

    @property
    def r(self):
        if self.cv != 0.0:
            return 1.0/self.cv
        else:
            return 0.0

    @r.setter
    def r(self, radius):
        if radius != 0.0:
            self.cv = 1.0/radius
        else:
            self.cv = 0.0

    def __repr__(self):
        return "{!s}(c={})".format(type(self).__name__, self.cv)

    def intersect(self, p, d, z_dir):
        ''' Intersection with a sphere, starting from an arbitrary point. '''
        # For quadratic equation ax**2 + bx + c = 0:
        #  ax2 = 2a
        #  cx2 = 2c
        ax2 = self.cv
        cx2 = self.cv * p.dot(p) - 2*p[2]
        b = self.cv * d.dot(p) - d[2]
        disc = b*b - ax2*cx2
        if disc < 0.0:
            raise TraceMissedSurfaceError(self, p)
        # Use z_dir to pick correct root
        denom = z_dir*sqrt(disc) - b
        if denom == 0.0:
            raise TraceMissedSurfaceError(self, p)
        s = cx2/denom
        if not isfinite(s):
            raise TraceMissedSurfaceError(self, p)

        p1 = p + s*d
        return s, p1

    def df(self, p):
        return np.array(
                [-self.cv*p[0], -self.cv*p[1], 1.0-self.cv*p[2]])

