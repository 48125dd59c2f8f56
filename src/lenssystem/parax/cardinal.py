#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Estimation of cardinal points by finite ray tracing

    Rather than a separate paraxial trace, a pair of probe rays at a small
    height above the axis is traced through the real lens system. At a height
    of a millimeter the aberrations of a camera lens are negligible, so the
    outgoing probe rays locate the focal and principal planes.

.. Created on Sun Mar 15 11:02:55 2026
"""
import logging

import numpy as np

import lenssystem.optical.model_constants as mc
from lenssystem.optical.modelerror import CardinalPointError
from lenssystem.raytr import Ray
from lenssystem.raytr.raytrace import trace_raw
from lenssystem.raytr.traceerror import TraceError

logger = logging.getLogger(__name__)


class CardinalPoints:
    """ Container class for the cardinal points of a lens system

    All positions are axial (z) coordinates. The object side is toward
    negative z, the film plane is at z = 0.

    Attributes:
        object_focal_z: front focal point
        object_principal_z: front principal point
        object_focal_length: object_focal_z - object_principal_z
        image_focal_z: rear focal point
        image_principal_z: rear principal point
        image_focal_length: image_focal_z - image_principal_z
    """

    def __init__(self, object_focal_z, object_principal_z,
                 image_focal_z, image_principal_z):
        self.object_focal_z = object_focal_z
        self.object_principal_z = object_principal_z
        self.object_focal_length = object_focal_z - object_principal_z
        self.image_focal_z = image_focal_z
        self.image_principal_z = image_principal_z
        self.image_focal_length = image_focal_z - image_principal_z

    def __repr__(self):
        return ("{!s}(object_focal_z={}, object_principal_z={}, "
                "image_focal_z={}, image_principal_z={})"
                .format(type(self).__name__,
                        self.object_focal_z, self.object_principal_z,
                        self.image_focal_z, self.image_principal_z))

    @property
    def efl(self):
        """ effective focal length """
        return self.image_focal_length

    def listobj_str(self):
        o_str = f"efl        {self.efl:12.6g}\n"
        o_str += f"f          {self.object_focal_length:12.6g}\n"
        o_str += f"f'         {self.image_focal_length:12.6g}\n"
        o_str += f"F z        {self.object_focal_z:12.6g}\n"
        o_str += f"H z        {self.object_principal_z:12.6g}\n"
        o_str += f"F' z       {self.image_focal_z:12.6g}\n"
        o_str += f"H' z       {self.image_principal_z:12.6g}"
        return o_str


def axis_crossings(ray_out, height):
    """ return the z where ray_out crosses the axis and where it is at height

    Raises:
        :exc:`~lenssystem.optical.modelerror.CardinalPointError` if ray_out
        is parallel to the axis
    """
    p, d = ray_out.p, ray_out.d
    if d[1] == 0.0:
        raise CardinalPointError("outgoing probe ray is parallel to the axis; "
                                 "the lens system is afocal")
    t = -p[1]/d[1]
    focal_z = ray_out.at(t)[2]
    t = -(p[1] - height)/d[1]
    principal_z = ray_out.at(t)[2]
    return focal_z, principal_z


def trace_probe(elements, ray_in, direction):
    try:
        return trace_raw(elements, ray_in)
    except TraceError as ray_err:
        logger.debug("%s probe ray failed: %s", direction,
                     type(ray_err).__name__)
        raise CardinalPointError(f"failed to compute cardinal points: "
                                 f"{direction} probe ray "
                                 f"{type(ray_err).__name__}",
                                 direction=direction) from ray_err


def compute_cardinal_points(elements, probe_height=mc.probe_height,
                            probe_distance=mc.probe_distance):
    """ estimate the cardinal points of a stack of lens elements

    Args:
        elements: the sorted stack of lens elements
        probe_height: height of the probe rays above the axis
        probe_distance: distance in front of the first element that the
                        forward probe ray starts from

    Returns:
        :class:`CardinalPoints`

    Raises:
        :exc:`~lenssystem.optical.modelerror.CardinalPointError`
    """
    h = probe_height

    # trace from the object side toward the film
    z_start = elements[0].z - probe_distance
    ray_in = Ray(np.array([0., h, z_start]), np.array([0., 0., 1.]))
    ray_out = trace_probe(elements, ray_in, 'forward')
    image_focal_z, image_principal_z = axis_crossings(ray_out, h)

    # trace from the film plane toward the object side
    ray_in = Ray(np.array([0., h, 0.]), np.array([0., 0., -1.]))
    ray_out = trace_probe(elements, ray_in, 'backward')
    object_focal_z, object_principal_z = axis_crossings(ray_out, h)

    return CardinalPoints(object_focal_z, object_principal_z,
                          image_focal_z, image_principal_z)
