#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Focusing a lens system by a rigid axial shift of its elements

    The shift is first estimated in closed form by treating the lens system
    as a thick lens described by its cardinal points. The estimate is then
    refined by tracing a near-axial ray from the on-axis object point and
    driving its axis crossing onto the film plane.

.. Created on Sun Mar 15 14:37:10 2026
"""
import logging
from math import sqrt, isinf

import numpy as np
from scipy.optimize import newton

import lenssystem.optical.model_constants as mc
from lenssystem.elem.elements import shifted_stack
from lenssystem.optical.modelerror import FocusUnreachableError
from lenssystem.raytr import Ray
from lenssystem.raytr.raytrace import trace_raw
from lenssystem.raytr.traceerror import TraceError

logger = logging.getLogger(__name__)


def thick_lens_shift(cardinal_points, object_z):
    """ axial shift that images object_z onto the film plane, thick lens model

    Solves the Gaussian lens equation measured from the principal planes of
    the shifted lens system.

    Args:
        cardinal_points: :class:`~.cardinal.CardinalPoints` of the unshifted
                         lens system
        object_z: z coordinate of the object plane, -inf for infinity

    Raises:
        :exc:`~lenssystem.optical.modelerror.FocusUnreachableError` if no
        real shift satisfies the lens equation
    """
    f = cardinal_points.image_focal_length
    b = -cardinal_points.image_principal_z
    if isinf(object_z):
        return b - f
    a = cardinal_points.object_principal_z - object_z
    disc = (a + b)*(a + b - 4*f)
    if disc < 0.0:
        raise FocusUnreachableError(
            f"object at z={object_z:.6g} is too close to the film for a "
            f"focal length of {f:.6g}", object_distance=-object_z)
    return 0.5*((b - a) + sqrt(disc))


def image_z(elements, object_z, probe_height=mc.probe_height,
            probe_distance=mc.probe_distance):
    """ z where a near-axial ray from the on-axis object point crosses the axis
    """
    z_front = elements[0].z
    h = probe_height
    if isinf(object_z):
        ray_in = Ray(np.array([0., h, z_front - probe_distance]),
                     np.array([0., 0., 1.]))
    else:
        ray_in = Ray(np.array([0., 0., object_z]),
                     np.array([0., h, z_front - object_z]))
    ray_out = trace_raw(elements, ray_in)
    p, d = ray_out.p, ray_out.d
    if d[1] == 0.0:
        raise FocusUnreachableError("image of the object point is at infinity",
                                    object_distance=-object_z)
    return ray_out.at(-p[1]/d[1])[2]


def focus_shift(elements, cardinal_points, object_distance,
                probe_height=mc.probe_height, tol=mc.focus_tol,
                maxiter=mc.focus_maxiter):
    """ axial shift of elements that focuses the object plane on the film

    Args:
        elements: the sorted stack of lens elements
        cardinal_points: :class:`~.cardinal.CardinalPoints` of elements
        object_distance: distance of the object plane from the film plane;
                         math.inf focuses at infinity
        probe_height: height of the refinement ray at the first element
        tol: convergence tolerance on the shift
        maxiter: maximum number of refinement iterations

    Returns:
        the shift along z to apply to every element

    Raises:
        :exc:`~lenssystem.optical.modelerror.FocusUnreachableError`
    """
    if not object_distance > 0.0:
        raise FocusUnreachableError(
            f"object distance must be positive, got {object_distance}",
            object_distance=object_distance)
    object_z = -object_distance

    delta0 = thick_lens_shift(cardinal_points, object_z)
    if object_z >= elements[0].z + delta0:
        raise FocusUnreachableError(
            f"object at z={object_z:.6g} would be inside the lens",
            object_distance=object_distance)

    def film_defocus(delta):
        return image_z(shifted_stack(elements, delta), object_z,
                       probe_height=probe_height)

    try:
        delta = newton(film_defocus, delta0, tol=tol, maxiter=maxiter)
    except TraceError as ray_err:
        raise FocusUnreachableError(
            f"focus refinement ray failed: {type(ray_err).__name__}",
            object_distance=object_distance) from ray_err
    except RuntimeError as err:
        raise FocusUnreachableError(
            f"focus refinement did not converge: {err}",
            object_distance=object_distance) from err

    if not np.isfinite(delta):
        raise FocusUnreachableError("focus refinement diverged",
                                    object_distance=object_distance)
    if not isinf(object_z) and object_z >= elements[0].z + delta:
        raise FocusUnreachableError(
            f"object at z={object_z:.6g} would be inside the lens",
            object_distance=object_distance)

    logger.debug("focus shift: thick lens %g, refined %g", delta0, delta)
    return float(delta)
