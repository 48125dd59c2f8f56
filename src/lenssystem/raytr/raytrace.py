#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Functions to support ray tracing a stack of lens elements

    The lens elements are indexed from the object side. A ray travelling
    toward the image side (positive z direction) visits the elements in
    increasing index order, and in decreasing order otherwise. The walk ends
    successfully when it runs past either end of the stack.

.. Created on Sat Mar 14 13:05:41 2026
"""

from math import sqrt

import numpy as np

import lenssystem.optical.model_constants as mc
from lenssystem.raytr import Ray
from lenssystem.util.misc_math import normalize
from .traceerror import (TraceTIRError, TraceReflectionLimitError)


def reflect(v, n):
    """ reflect vector v about normal n

    Both v and the result point away from the surface.
    """
    return -v + 2.0*np.dot(v, n)*n


def fresnel(wo, n, ior1, ior2):
    """ Schlick's approximation of the reflectance for unpolarized light

    Args:
        wo: unit direction pointing away from the surface, on the incident side
        n: unit surface normal
        ior1: index of refraction on the incident side
        ior2: index of refraction on the transmitted side

    Returns:
        reflectance in [0, 1]
    """
    f0 = ((ior1 - ior2)/(ior1 + ior2))**2
    cos_i = min(abs(float(np.dot(wo, n))), 1.0)
    return f0 + (1.0 - f0)*(1.0 - cos_i)**5


def refract(wi, n, ior1, ior2):
    """ refract direction wi about normal n using Snell's law

    Args:
        wi: unit direction pointing away from the surface, on the incident side
        n: unit surface normal on the incident side, i.e. dot(wi, n) >= 0
        ior1: index of refraction on the incident side
        ior2: index of refraction on the transmitted side

    Returns:
        (**success**, **wt**)

        - success: False if the ray is totally internally reflected
        - wt: transmitted direction, or None if not success
    """
    eta = ior1/ior2
    cos_i = np.dot(wi, n)
    sin2_i = max(0.0, 1.0 - cos_i*cos_i)
    sin2_t = eta*eta*sin2_i
    if sin2_t >= 1.0:
        return False, None
    cos_t = sqrt(1.0 - sin2_t)
    wt = eta*(-wi) + (eta*cos_i - cos_t)*n
    return True, wt


def next_medium_ior(elements, indx, z_dir):
    """ index of refraction of the medium a ray enters crossing elements[indx]

    Travelling toward the image the ray enters the medium that follows the
    element; travelling toward the object it enters the medium that follows
    the previous element, or air beyond the first element.
    """
    next_indx = indx if z_dir > 0 else indx - 1
    if next_indx < 0:
        return mc.ior_air
    return elements[next_indx].medium_ior


def trace_raw(elements, ray, allow_reflection=False, sampler=None,
              max_reflections=mc.max_reflections):
    """ fundamental raytrace function

    Args:
        elements: the sorted stack of lens elements
        ray: the incoming :class:`~lenssystem.raytr.Ray`
        allow_reflection: if True, rays may reflect at lens surfaces
        sampler: a numpy random Generator used to choose between reflection
                 and refraction. If None, reflection is always chosen when
                 allow_reflection is True.
        max_reflections: maximum number of reflections before the ray is
                         abandoned

    Returns:
        the outgoing :class:`~lenssystem.raytr.Ray`

    Raises:
        :exc:`~.traceerror.TraceError` if the ray is blocked, misses an
        element, TIRs without reflection allowed, or exceeds max_reflections
    """
    num_elements = len(elements)
    pt = ray.p
    d = normalize(ray.d)
    indx = -1 if d[2] > 0 else num_elements
    ior = mc.ior_air
    num_reflections = 0

    while True:
        z_dir = 1.0 if d[2] > 0 else -1.0
        indx += 1 if z_dir > 0 else -1
        if indx < 0 or indx >= num_elements:
            break
        elem = elements[indx]

        hit = elem.intersect(pt, d, z_dir)

        if elem.kind == mc.APERTURE:
            pt = hit.p
            ior = mc.ior_air
            continue

        next_ior = next_medium_ior(elements, indx, z_dir)
        # orient the normal toward the incident side
        normal = hit.nrml if np.dot(d, hit.nrml) < 0 else -hit.nrml
        wi = -d

        is_transmitted, wt = refract(wi, normal, ior, next_ior)
        if allow_reflection:
            if is_transmitted:
                fr = fresnel(wi, normal, ior, next_ior)
                do_reflect = (sampler is None or sampler.random() < fr)
            else:
                do_reflect = True
            if do_reflect:
                num_reflections += 1
                if num_reflections > max_reflections:
                    raise TraceReflectionLimitError(num_reflections)
                pt = hit.p
                d = reflect(wi, normal)
                continue
        elif not is_transmitted:
            tir = TraceTIRError(d, normal, ior, next_ior)
            tir.elem = elem
            tir.int_pt = hit.p
            raise tir

        pt = hit.p
        d = normalize(wt)
        ior = next_ior

    return Ray(pt, d, ray.wvl)
