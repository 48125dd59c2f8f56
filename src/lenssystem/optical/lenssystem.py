#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Top level lens system model

.. Created on Mon Mar 16 13:42:19 2026
"""
import logging

import pandas as pd

import lenssystem
import lenssystem.optical.model_constants as mc
from lenssystem.elem.elements import shifted_stack, stack_length
from lenssystem.optical.film import Film
from lenssystem.parax.cardinal import compute_cardinal_points
from lenssystem.parax.focus import focus_shift
from lenssystem.presc.reader import read_lens_file
from lenssystem.raytr import TraceResult
from lenssystem.raytr import exitpupil
from lenssystem.raytr.raytrace import trace_raw
from lenssystem.raytr.traceerror import TraceError

logger = logging.getLogger(__name__)


class LensSystem:
    """ Top level container for a camera lens system.

    The LensSystem holds the sorted stack of lens elements in front of a
    film, the cardinal points of the stack and, once computed, the exit
    pupil bounds used to sample camera rays.

    Tracing and sampling do not modify the model and may run concurrently.
    :meth:`focus` moves the elements and must not run concurrently with
    tracing or sampling on the same instance.

    Attributes:
        elements: list of :class:`~lenssystem.elem.elements.LensElement`
        film: :class:`~lenssystem.optical.film.Film`
        cardinal_points: :class:`~lenssystem.parax.cardinal.CardinalPoints`
        num_exit_pupil_bounds: number of field height bins
        num_exit_pupil_bounds_samples: candidate rays per bin
        probe_height: height of the cardinal point probe rays
    """

    def __init__(self, elements, film=None,
                 num_exit_pupil_bounds=mc.num_exit_pupil_bounds,
                 num_exit_pupil_bounds_samples=(
                     mc.num_exit_pupil_bounds_samples),
                 probe_height=mc.probe_height, **kwargs):
        """ create a LensSystem from an assembled stack of elements

        Raises:
            :exc:`~lenssystem.optical.modelerror.CardinalPointError` if the
            stack cannot image a near-axial ray
        """
        self.ls_version = lenssystem.__version__
        self.elements = list(elements)
        self.film = film if film is not None else Film()
        self.num_exit_pupil_bounds = num_exit_pupil_bounds
        self.num_exit_pupil_bounds_samples = num_exit_pupil_bounds_samples
        self.probe_height = probe_height
        self.max_reflections = kwargs.get('max_reflections',
                                          mc.max_reflections)
        self._exit_pupil_bounds = None
        self.cardinal_points = None
        self.compute_cardinal_points()

    @classmethod
    def from_file(cls, filename, film=None, **kwargs):
        """ create a LensSystem from a lens prescription file

        Raises:
            :exc:`~lenssystem.optical.modelerror.LoadError`
        """
        elements = read_lens_file(filename)
        lens_system = cls(elements, film=film, **kwargs)
        logger.info("loaded %s: %d elements, efl %g", filename,
                    len(elements), lens_system.cardinal_points.efl)
        return lens_system

    def __repr__(self):
        return "{!s}({} elements, film={!r})".format(
            type(self).__name__, len(self.elements), self.film)

    def listobj_str(self):
        o_str = f"{type(self).__name__}: {len(self.elements)} elements, "
        o_str += f"length {stack_length(self.elements):.6g}\n"
        for e in self.elements:
            o_str += e.listobj_str()
        o_str += f"{self.film!r}\n"
        o_str += self.cardinal_points.listobj_str()
        return o_str

    def elements_df(self):
        """ return a |DataFrame| listing the lens elements """
        rows = [[e.kind, e.curvature_radius, e.thickness, e.medium_ior,
                 e.aperture_radius, e.z] for e in self.elements]
        df = pd.DataFrame(rows, columns=['kind', 'radius', 'thi', 'ior',
                                         'ap_radius', 'z'],
                          index=[e.index for e in self.elements])
        df.index.names = ['index']
        return df

    def raytrace(self, ray_in, allow_reflection=False, sampler=None):
        """ trace ray_in through the lens system

        Args:
            ray_in: :class:`~lenssystem.raytr.Ray` in lens coordinates
            allow_reflection: if True, rays may reflect at lens surfaces
            sampler: numpy random Generator choosing reflection or refraction

        Returns:
            :class:`~lenssystem.raytr.TraceResult`; a failed trace is a
            normal outcome, reported with the TraceError that caused it
        """
        try:
            ray_out = trace_raw(self.elements, ray_in,
                                allow_reflection=allow_reflection,
                                sampler=sampler,
                                max_reflections=self.max_reflections)
        except TraceError as ray_err:
            return TraceResult(False, None, ray_err)
        return TraceResult(True, ray_out, None)

    def compute_cardinal_points(self):
        """ recompute and return the cardinal points of the lens system """
        self.cardinal_points = compute_cardinal_points(
            self.elements, probe_height=self.probe_height)
        return self.cardinal_points

    @property
    def object_focal_z(self):
        return self.cardinal_points.object_focal_z

    @property
    def object_principal_z(self):
        return self.cardinal_points.object_principal_z

    @property
    def object_focal_length(self):
        return self.cardinal_points.object_focal_length

    @property
    def image_focal_z(self):
        return self.cardinal_points.image_focal_z

    @property
    def image_principal_z(self):
        return self.cardinal_points.image_principal_z

    @property
    def image_focal_length(self):
        return self.cardinal_points.image_focal_length

    def focus(self, object_distance):
        """ move the lens so an object at object_distance is sharp on the film

        The whole element stack is translated along the axis. The cardinal
        points are recomputed and the exit pupil bounds invalidated.

        Args:
            object_distance: distance of the object plane from the film
                             plane; math.inf focuses at infinity

        Returns:
            True

        Raises:
            :exc:`~lenssystem.optical.modelerror.FocusUnreachableError`
            :exc:`~lenssystem.optical.modelerror.CardinalPointError` if the
            moved stack cannot image a near-axial ray; the model is left
            unchanged
        """
        delta = focus_shift(self.elements, self.cardinal_points,
                            object_distance, probe_height=self.probe_height)
        cardinal_points = compute_cardinal_points(
            shifted_stack(self.elements, delta),
            probe_height=self.probe_height)

        for e in self.elements:
            e.shift(delta)
        self.cardinal_points = cardinal_points
        self._exit_pupil_bounds = None
        logger.info("focused at %g: lens moved %g, efl %g",
                    object_distance, delta, self.cardinal_points.efl)
        return True

    def compute_exit_pupil_bounds(self, max_workers=None, seed=None,
                                  quasi_random=False):
        """ compute and return the exit pupil bounds for the current focus """
        self._exit_pupil_bounds = exitpupil.compute_exit_pupil_bounds(
            self.elements, self.film.max_field_height,
            num_bounds=self.num_exit_pupil_bounds,
            num_samples=self.num_exit_pupil_bounds_samples,
            max_workers=max_workers, seed=seed, quasi_random=quasi_random)
        return self._exit_pupil_bounds

    @property
    def exit_pupil_bounds(self):
        """ exit pupil bounds, computed on first use after each focus """
        if self._exit_pupil_bounds is None:
            self.compute_exit_pupil_bounds()
        return self._exit_pupil_bounds

    def exit_pupil_df(self):
        """ return a |DataFrame| listing the exit pupil bounds """
        return exitpupil.bounds_df(self.exit_pupil_bounds,
                                   self.film.max_field_height)

    def sample_ray(self, u, v, wvl, sampler, allow_reflection=False):
        """ sample a camera ray from film point (u, v) through the exit pupil

        Args:
            u: normalized film x coordinate, in [0, 1]
            v: normalized film y coordinate, in [0, 1]
            wvl: wavelength in nm
            sampler: numpy random Generator
            allow_reflection: if True, sample ghost paths that reflect at
                              lens surfaces

        Returns:
            :class:`~lenssystem.raytr.SampleResult`
        """
        return exitpupil.sample_ray(self.elements, self.film,
                                    self.exit_pupil_bounds, u, v, wvl,
                                    sampler, allow_reflection=allow_reflection,
                                    max_reflections=self.max_reflections)
