""" Package for ray transport through a lens system

    The :mod:`~.raytr` subpackage provides core classes and functions
    for ray tracing a stack of lens elements. These include:

        - Base level ray tracing and the reflect/refract/fresnel
          functions, :mod:`~.raytrace`
        - Exit pupil bound estimation and importance sampling of camera
          rays, :mod:`~.exitpupil`
        - Warping of uniform samples, :mod:`~.sampler`
        - Exception classes for reporting ray trace errors, :mod:`~.traceerror`

    The overall lens model is managed by the :class:`~.LensSystem` class
"""

from collections import namedtuple

import attr
import numpy as np

Hit = namedtuple('Hit', ['p', 'nrml', 'dst'])
Hit.__doc__ = "ray intersection data for a lens element"
Hit.p.__doc__ = "the point of incidence"
Hit.nrml.__doc__ = "unit surface normal at the point of incidence"
Hit.dst.__doc__ = "geometric distance from the ray origin to the point"

TraceResult = namedtuple('TraceResult', ['success', 'ray', 'err'])
TraceResult.__doc__ = "outcome of tracing a ray through a lens system"
TraceResult.success.__doc__ = "True if the ray exited the lens system"
TraceResult.ray.__doc__ = "the outgoing Ray, or None on failure"
TraceResult.err.__doc__ = "a TraceError, or None if success"

SampleResult = namedtuple('SampleResult', ['success', 'ray', 'pdf'])
SampleResult.__doc__ = "a sampled camera ray and its probability density"
SampleResult.success.__doc__ = "True if the sampled ray exited the lens"
SampleResult.ray.__doc__ = "the outgoing Ray, or None on failure"
SampleResult.pdf.__doc__ = "solid angle density of the film side direction"


def _as_vector(v):
    return np.array(v, dtype=float)


@attr.s(frozen=True, eq=False)
class Ray:
    """ A ray in lens coordinates, the optical axis is z.

    The sign of the z direction component is the direction of propagation,
    positive toward the image side.

    Attributes:
        p: origin of the ray
        d: direction of the ray
        wvl: wavelength in nm that the ray is traced in
    """
    p = attr.ib(converter=_as_vector)
    d = attr.ib(converter=_as_vector)
    wvl = attr.ib(default=550.0)

    def at(self, t):
        """ return the point at parameter t along the ray """
        return self.p + t*self.d

    def reversed(self):
        """ return the ray with the same origin travelling the other way """
        return Ray(self.p, -self.d, self.wvl)
