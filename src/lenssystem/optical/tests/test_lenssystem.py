#!/usr/bin/env python3
# -*- coding: utf-8 -*-
""" tests for the LensSystem model and Film

.. Created on Sat Mar 21 13:17:45 2026
"""

import unittest

import numpy as np
import numpy.testing as npt
from pytest import approx

import lenssystem
from lenssystem.optical.film import Film
from lenssystem.optical.lenssystem import LensSystem
from lenssystem.optical.modelerror import CardinalPointError, LoadError
from lenssystem.presc.reader import model_path, read_lens
from lenssystem.raytr import Ray
from lenssystem.raytr.traceerror import TraceRayBlockedError


class CenterSampler:
    """ draws the bound center for the pupil point and 0 otherwise """
    def random(self, size=None):
        if size is None:
            return 0.0
        return np.full(size, 0.5)


class FilmTestCase(unittest.TestCase):
    def test_default_film(self):
        film = Film()
        assert film.diagonal == approx(0.04326662, rel=1e-6)
        assert film.max_field_height == approx(0.5*film.diagonal)
        npt.assert_allclose(film.position(0.5, 0.5), np.zeros(3))
        npt.assert_allclose(film.position(0., 1.),
                            np.array([-0.018, 0.012, 0.]))

    def test_bad_film(self):
        with self.assertRaises(ValueError):
            Film(width=0.0)
        with self.assertRaises(ValueError):
            Film(height=-0.01)


class DGaussTestCase(unittest.TestCase):
    def setUp(self):
        self.ls = LensSystem.from_file(model_path('dgauss50mm.json'),
                                       num_exit_pupil_bounds=4,
                                       num_exit_pupil_bounds_samples=256)

    def test_cardinal_points(self):
        ls = self.ls
        assert 0.04 < ls.image_focal_length < 0.06
        assert ls.object_focal_length == approx(-ls.image_focal_length,
                                                rel=2e-2)
        assert ls.image_focal_z == ls.cardinal_points.image_focal_z
        assert ls.object_principal_z == ls.cardinal_points.object_principal_z
        assert ls.image_principal_z == ls.cardinal_points.image_principal_z
        assert ls.object_focal_z < ls.elements[0].z

    def test_listings(self):
        ls = self.ls
        assert ls.ls_version == lenssystem.__version__
        o_str = ls.listobj_str()
        assert o_str.startswith('LensSystem: 11 elements, length 0.07204\n')
        assert o_str.startswith('LensSystem: 11 elements')
        assert 'efl' in o_str
        assert repr(ls).startswith('LensSystem(11 elements')
        lenssystem.listobj(ls)

        df = ls.elements_df()
        assert df.shape == (11, 6)
        assert df.loc[5, 'kind'] == 'aperture'
        assert df['z'].iloc[-1] == approx(-0.040)

    def test_raytrace(self):
        ls = self.ls
        z_start = ls.elements[0].z - 0.1
        ray = Ray(np.array([0., 0.002, z_start]), np.array([0., 0., 1.]))
        result = ls.raytrace(ray)
        assert result.success
        assert result.err is None
        assert result.ray.d[2] > 0.0
        assert result.ray.d[1] < 0.0

        ray = Ray(np.array([0., 0.02, z_start]), np.array([0., 0., 1.]))
        result = ls.raytrace(ray)
        assert not result.success
        assert result.ray is None
        assert isinstance(result.err, TraceRayBlockedError)

    def test_raytrace_with_reflection(self):
        ls = self.ls
        z_start = ls.elements[0].z - 0.1
        ray = Ray(np.array([0., 0.002, z_start]), np.array([0., 0., 1.]))
        result = ls.raytrace(ray, allow_reflection=True)
        assert result.success
        assert result.ray.d[2] < 0.0

    def test_sample_ray(self):
        ls = self.ls
        ls.focus(5.0)
        rng = np.random.default_rng(17)
        results = [ls.sample_ray(0.5, 0.5, 550.0, rng) for i in range(100)]
        successes = [r for r in results if r.success]
        assert len(successes) > 0
        for r in successes:
            assert r.pdf > 0.0
            assert r.ray.d[2] < 0.0
        for r in results:
            if not r.success:
                assert r.pdf == 0.0

        df = ls.exit_pupil_df()
        assert len(df) == 4
        assert df['area'].iloc[0] > 0.0

    def test_sample_reflected_ray(self):
        ls = self.ls
        result = ls.sample_ray(0.5, 0.5, 550.0, CenterSampler(),
                               allow_reflection=True)
        assert result.success
        assert result.ray.d[2] > 0.0
        assert ls.sample_ray(0.5, 0.5, 550.0,
                             CenterSampler()).ray.d[2] < 0.0


class LensSystemErrorTestCase(unittest.TestCase):
    def test_missing_file(self):
        with self.assertRaises(LoadError):
            LensSystem.from_file(model_path('no_such_lens.json'))

    def test_afocal(self):
        elements = read_lens([{'index': 0, 'curvature_radius': 0.0,
                               'thickness': 5.0, 'eta': 0.0,
                               'aperture_diameter': 8.0}])
        with self.assertRaises(CardinalPointError):
            LensSystem(elements)


if __name__ == '__main__':
    unittest.main(verbosity=3)
