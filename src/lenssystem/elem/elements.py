#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Module for lens element modeling

    A lens system is an ordered stack of :class:`LensElement` instances.
    Two kinds of element are supported:

        - :class:`Aperture`, a stop with a circular clear opening and no
          refractive power
        - :class:`Lens`, a spherical refracting surface followed by a medium
          of index `ior`

    Elements are indexed from the object side. Each element's `thickness`
    is the axial distance to the next element toward the image side, and
    the medium filling that space is the element's `medium_ior`.

.. Created on Sat Mar 14 11:20:08 2026
"""

from collections.abc import Mapping
import logging
from math import isfinite

import attr
import numpy as np

import lenssystem.optical.model_constants as mc
from lenssystem.elem.profiles import Spherical
from lenssystem.optical.modelerror import LoadError
from lenssystem.raytr import Hit
from lenssystem.raytr.traceerror import TraceRayBlockedError

logger = logging.getLogger(__name__)

descriptor_keys = ('index', 'curvature_radius', 'thickness', 'eta',
                   'aperture_diameter')


@attr.s(eq=False)
class LensElement:
    """ Common interface of the elements in a lens stack.

    Attributes:
        index: position of the element in the stack, from the object side
        aperture_radius: radius of the clear aperture
        thickness: axial distance to the next element toward the image
        z: axial position of the element vertex, set by assembly
    """
    kind = None

    index = attr.ib()
    aperture_radius = attr.ib()
    thickness = attr.ib()
    z = attr.ib(default=0.0)

    @property
    def medium_ior(self):
        """ index of refraction of the medium on the image side """
        return mc.ior_air

    def listobj_str(self):
        o_str = (f"{type(self).__name__} {self.index}: "
                 f"ap radius={self.aperture_radius:.6g}   "
                 f"t={self.thickness:.6g}   z={self.z:.6g}\n")
        return o_str

    def shift(self, delta_z):
        """ translate the element along the optical axis by delta_z """
        self.z += delta_z

    def point_inside(self, x, y):
        """ Returns True if the point (x, y) is inside the clear aperture. """
        return x*x + y*y <= self.aperture_radius*self.aperture_radius

    def intersect(self, p, d, z_dir):
        ''' Intersect the element, starting from an arbitrary point.

        Args:
            p:  start point of the ray in lens coordinates
            d:  unit direction of the ray in lens coordinates
            z_dir: +1 if propagation positive direction, -1 if otherwise

        Returns:
            :class:`~lenssystem.raytr.Hit` with point, normal and distance

        Raises:
            :exc:`~lenssystem.raytr.traceerror.TraceMissedSurfaceError`
            :exc:`~lenssystem.raytr.traceerror.TraceRayBlockedError`
        '''
        vertex = np.array([0., 0., self.z])
        s, pt = self.profile.intersect(p - vertex, d, z_dir)
        if not self.point_inside(pt[0], pt[1]):
            raise TraceRayBlockedError(self, pt + vertex)
        return Hit(pt + vertex, self.profile.normal(pt), s)


@attr.s(eq=False)
class Aperture(LensElement):
    """ An aperture stop: a plane with a circular clear opening. """
    kind = mc.APERTURE

    def __attrs_post_init__(self):
        self.profile = Spherical(c=0.0)

    @property
    def curvature_radius(self):
        return 0.0


@attr.s(eq=False)
class Lens(LensElement):
    """ A spherical refracting surface.

    Attributes:
        curvature_radius: signed radius of curvature, positive when the
                          center of curvature is on the image side
        ior: index of refraction on the image side of the surface
    """
    kind = mc.LENS

    curvature_radius = attr.ib(default=0.0)
    ior = attr.ib(default=mc.ior_air)

    def __attrs_post_init__(self):
        self.profile = Spherical(r=self.curvature_radius)

    @property
    def medium_ior(self):
        return self.ior

    def listobj_str(self):
        o_str = super().listobj_str()
        o_str += (f"    r={self.curvature_radius:.6g}   "
                  f"ior={self.ior:.6g}\n")
        return o_str


def create_element(descriptor):
    """ create a lens element from a prescription descriptor

    Args:
        descriptor: a mapping with keys `index`, `curvature_radius`,
                    `thickness`, `eta` and `aperture_diameter`. Lengths are
                    in millimeters.

    Returns:
        an :class:`Aperture` if curvature_radius is zero, else a :class:`Lens`

    Raises:
        :exc:`~lenssystem.optical.modelerror.LoadError`
    """
    if not isinstance(descriptor, Mapping):
        raise LoadError(f"element descriptor is not a mapping: {descriptor!r}")
    missing = [k for k in descriptor_keys if k not in descriptor]
    if missing:
        raise LoadError(f"element descriptor missing {', '.join(missing)}")
    try:
        index = descriptor['index']
        if isinstance(index, bool) or int(index) != index:
            raise ValueError(f"non-integer index {index!r}")
        index = int(index)
        curvature_radius = float(descriptor['curvature_radius'])*mc.mm_to_m
        thickness = float(descriptor['thickness'])*mc.mm_to_m
        ior = float(descriptor['eta'])
        aperture_radius = 0.5*float(descriptor['aperture_diameter'])*mc.mm_to_m
    except (TypeError, ValueError, OverflowError) as err:
        raise LoadError(f"invalid element descriptor {dict(descriptor)!r}: "
                        f"{err}") from err

    values = (curvature_radius, thickness, ior, aperture_radius)
    if not all(isfinite(v) for v in values):
        raise LoadError(f"element {index}: non-finite value in "
                        f"{dict(descriptor)!r}")
    if aperture_radius <= 0.0:
        raise LoadError(f"element {index}: aperture diameter must be > 0")
    if thickness < 0.0:
        raise LoadError(f"element {index}: thickness must be >= 0")

    if curvature_radius == 0.0:
        return Aperture(index, aperture_radius, thickness)
    else:
        if ior <= 0.0:
            raise LoadError(f"element {index}: index of refraction must be > 0")
        return Lens(index, aperture_radius, thickness,
                    curvature_radius=curvature_radius, ior=ior)


def assemble_stack(descriptors):
    """ create a sorted, positioned stack of lens elements

    The elements are sorted by index and their vertex positions accumulated
    from the image side, so that the far face of the image-side-most element
    is at z = 0.

    Args:
        descriptors: iterable of prescription descriptors, see
                     :func:`create_element`

    Returns:
        list of lens elements

    Raises:
        :exc:`~lenssystem.optical.modelerror.LoadError`
    """
    elements = [create_element(dscr) for dscr in descriptors]
    if len(elements) == 0:
        raise LoadError("lens prescription contains no elements")

    elements.sort(key=lambda e: e.index)
    for e, e_next in zip(elements, elements[1:]):
        if e.index == e_next.index:
            raise LoadError(f"duplicate element index {e.index}")

    length = 0.0
    for e in reversed(elements):
        length += e.thickness
        e.z = -length

    logger.debug("assembled %d elements, total length %g",
                 len(elements), length)
    return elements


def stack_length(elements):
    """ axial distance from the first element to the image plane """
    return sum(e.thickness for e in elements)


def shifted_stack(elements, delta_z):
    """ return a copy of elements translated along the axis by delta_z """
    return [attr.evolve(e, z=e.z + delta_z) for e in elements]
