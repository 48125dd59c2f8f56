#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Exit pupil bounds and importance sampling of camera rays

    Rays leaving a film point only get through the lens system if they pass
    through the exit pupil, the image of the aperture stop seen from the
    film. The bounds of the exit pupil are estimated on the plane of the
    image-side-most element for a set of field heights along the +x axis.
    Because the lens system is rotationally symmetric, the bound for any
    film point is the bound at its radius, rotated by its polar angle.

    Camera rays are sampled uniformly over the bound and weighted by the
    corresponding solid angle density, so rays that fail to get through
    the lens contribute zero and no retry is needed.

.. Created on Mon Mar 16 09:15:26 2026
"""
from concurrent.futures import ThreadPoolExecutor
import logging
from math import sqrt

import attr
import numpy as np
import pandas as pd

import lenssystem.optical.model_constants as mc
from lenssystem.raytr import Ray, SampleResult
from lenssystem.raytr.raytrace import trace_raw
from lenssystem.raytr.sampler import create_samples
from lenssystem.raytr.traceerror import TraceError
from lenssystem.util.misc_math import polar_2d, rotate_2d

logger = logging.getLogger(__name__)


def _empty_min():
    return np.array([np.inf, np.inf])


def _empty_max():
    return np.array([-np.inf, -np.inf])


@attr.s(eq=False)
class Bounds2:
    """ An axis aligned 2d bounding box, empty until a point is added.

    Attributes:
        pmin: lower left corner
        pmax: upper right corner
    """
    pmin = attr.ib(factory=_empty_min, converter=np.asarray)
    pmax = attr.ib(factory=_empty_max, converter=np.asarray)

    @property
    def is_empty(self):
        return bool(np.any(self.pmin > self.pmax))

    @property
    def diagonal(self):
        return self.pmax - self.pmin

    def area(self):
        if self.is_empty:
            return 0.0
        d = self.diagonal
        return float(d[0]*d[1])

    def union_pt(self, pt):
        """ grow the bound to include 2d point pt """
        self.pmin = np.minimum(self.pmin, pt)
        self.pmax = np.maximum(self.pmax, pt)

    def expand(self, delta):
        """ return the bound grown by delta on every side """
        if self.is_empty:
            return Bounds2()
        return Bounds2(self.pmin - delta, self.pmax + delta)

    def lerp(self, u):
        """ return the point at fractional position u (in [0, 1]^2) """
        return self.pmin + np.asarray(u)*(self.pmax - self.pmin)


def compute_exit_pupil_bound(elements, film_x, num_samples=None, rng=None,
                             samples=None):
    """ estimate the exit pupil bound seen from film point (film_x, 0, 0)

    Candidate rays are aimed at points on a square on the plane of the
    image-side-most element. The bound of the points whose rays get through
    the lens is expanded by one sample spacing.

    Args:
        elements: the sorted stack of lens elements
        film_x: field height of the film point along +x
        num_samples: number of candidate rays
        rng: numpy random Generator used to draw candidate points
        samples: (n, 2) array of unit square points to use instead of
                 drawing num_samples points from rng

    Returns:
        :class:`Bounds2`, empty if no candidate ray got through
    """
    if samples is None:
        if num_samples is None:
            num_samples = mc.num_exit_pupil_bounds_samples
        samples = create_samples(num_samples, rng=rng)
    num_samples = len(samples)

    rear = elements[-1]
    pupil_z = rear.z
    proj_extent = mc.pupil_search_scale*rear.aperture_radius
    search_bound = Bounds2(np.array([-proj_extent, -proj_extent]),
                           np.array([proj_extent, proj_extent]))
    p_film = np.array([film_x, 0., 0.])

    pupil_bound = Bounds2()
    num_passed = 0
    for u in samples:
        p_rear = search_bound.lerp(u)
        ray_in = Ray(p_film, np.array([p_rear[0], p_rear[1], pupil_z]) - p_film)
        try:
            trace_raw(elements, ray_in)
        except TraceError:
            continue
        pupil_bound.union_pt(p_rear)
        num_passed += 1

    logger.debug("exit pupil bound at x=%g: %d of %d rays passed",
                 film_x, num_passed, num_samples)
    return pupil_bound.expand(2*proj_extent/sqrt(num_samples))


def field_heights(max_field_height, num_bounds):
    """ representative field height of each exit pupil bin """
    return [(i + 0.5)/num_bounds*max_field_height for i in range(num_bounds)]


def compute_exit_pupil_bounds(elements, max_field_height,
                              num_bounds=mc.num_exit_pupil_bounds,
                              num_samples=mc.num_exit_pupil_bounds_samples,
                              max_workers=None, seed=None,
                              quasi_random=False):
    """ estimate exit pupil bounds for bins of field height

    The bins are independent and are computed on a thread pool.

    Args:
        elements: the sorted stack of lens elements
        max_field_height: largest film radius, e.g. half the film diagonal
        num_bounds: number of field height bins
        num_samples: candidate rays per bin
        max_workers: thread pool size, the executor default if None
        seed: seed for the candidate point generators
        quasi_random: if True, use randomly offset R2 quasi-random points

    Returns:
        list of :class:`Bounds2`, one per bin
    """
    heights = field_heights(max_field_height, num_bounds)
    seeds = np.random.SeedSequence(seed).spawn(num_bounds)

    def bin_bound(i):
        rng = np.random.default_rng(seeds[i])
        samples = create_samples(num_samples, rng=rng,
                                 quasi_random=quasi_random)
        return compute_exit_pupil_bound(elements, heights[i], samples=samples)

    bounds = [None]*num_bounds
    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        for i, bound in enumerate(ex.map(bin_bound, range(num_bounds))):
            bounds[i] = bound

    num_empty = sum(1 for b in bounds if b.is_empty)
    if num_empty:
        logger.info("%d of %d exit pupil bounds are empty",
                    num_empty, num_bounds)
    return bounds


def bound_index(r, max_field_height, num_bounds):
    """ index of the field height bin containing film radius r """
    return min(int(r/max_field_height*num_bounds), num_bounds - 1)


def sample_ray(elements, film, bounds, u, v, wvl, rng, allow_reflection=False,
               max_reflections=mc.max_reflections):
    """ sample a camera ray leaving the film point at (u, v)

    Args:
        elements: the sorted stack of lens elements
        film: the :class:`~lenssystem.optical.film.Film`
        bounds: exit pupil bounds from :func:`compute_exit_pupil_bounds`,
                computed for film.max_field_height
        u: normalized film x coordinate
        v: normalized film y coordinate
        wvl: wavelength in nm
        rng: numpy random Generator supplying the pupil sample, and the
             choice between reflection and refraction
        allow_reflection: if True, the sampled ray may reflect at lens
                          surfaces, see :func:`~.raytrace.trace_raw`
        max_reflections: maximum number of reflections along the ray

    Returns:
        :class:`~lenssystem.raytr.SampleResult`. The pdf is the density,
        with respect to solid angle at the film point, of the film side ray
        direction. On failure the pdf is zero.
    """
    p_film = film.position(u, v)
    r, theta = polar_2d(p_film)
    bound = bounds[bound_index(r, film.max_field_height, len(bounds))]
    if bound.is_empty:
        return SampleResult(False, None, 0.0)

    p_bound = rotate_2d(bound.lerp(rng.random(2)), theta)
    p_rear = np.array([p_bound[0], p_bound[1], elements[-1].z])

    to_rear = p_rear - p_film
    dist_sqr = np.dot(to_rear, to_rear)
    d = to_rear/sqrt(dist_sqr)
    cos_theta = abs(d[2])
    area = bound.area()
    if cos_theta == 0.0 or area == 0.0:
        return SampleResult(False, None, 0.0)

    try:
        ray_out = trace_raw(elements, Ray(p_film, d, wvl),
                            allow_reflection=allow_reflection, sampler=rng,
                            max_reflections=max_reflections)
    except TraceError as ray_err:
        logger.debug("sampled ray failed: %s", type(ray_err).__name__)
        return SampleResult(False, None, 0.0)

    pdf = dist_sqr/(cos_theta*area)
    return SampleResult(True, ray_out, pdf)


def bounds_df(bounds, max_field_height=None):
    """ return a |DataFrame| listing exit pupil bounds """
    rows = [[b.pmin[0], b.pmin[1], b.pmax[0], b.pmax[1], b.area()]
            for b in bounds]
    df = pd.DataFrame(rows, columns=['xmin', 'ymin', 'xmax', 'ymax', 'area'])
    if max_field_height is not None:
        df.insert(0, 'field_ht', field_heights(max_field_height, len(bounds)))
    df.index.names = ['bin']
    return df
