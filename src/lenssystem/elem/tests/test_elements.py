#!/usr/bin/env python3
# -*- coding: utf-8 -*-
""" tests for lens element creation and stack assembly

.. Created on Wed Mar 18 10:37:15 2026
"""

import unittest
from math import inf, nan

import numpy as np
import numpy.testing as npt
from pytest import approx

import lenssystem.optical.model_constants as mc
from lenssystem.elem.elements import (Aperture, Lens, create_element,
                                      assemble_stack, stack_length,
                                      shifted_stack)
from lenssystem.optical.modelerror import LoadError
from lenssystem.raytr.traceerror import TraceRayBlockedError


def descr(index, radius, thickness, eta, diameter):
    return {'index': index, 'curvature_radius': radius,
            'thickness': thickness, 'eta': eta, 'aperture_diameter': diameter}


class CreateElementTestCase(unittest.TestCase):
    def test_aperture(self):
        e = create_element(descr(3, 0.0, 4.5, 0.0, 17.1))
        assert isinstance(e, Aperture)
        assert e.kind == mc.APERTURE
        assert e.index == 3
        assert e.curvature_radius == 0.0
        assert e.medium_ior == 1.0
        assert e.aperture_radius == approx(0.00855)
        assert e.thickness == approx(0.0045)

    def test_lens(self):
        e = create_element(descr(0, 29.475, 3.76, 1.67, 25.2))
        assert isinstance(e, Lens)
        assert e.kind == mc.LENS
        assert e.curvature_radius == approx(0.029475)
        assert e.medium_ior == 1.67
        assert e.aperture_radius == approx(0.0126)
        assert e.profile.cv == approx(1/0.029475)

    def test_bad_descriptors(self):
        with self.assertRaises(LoadError):
            create_element([0, 10.0, 1.0, 1.5, 10.0])
        d = descr(0, 10.0, 1.0, 1.5, 10.0)
        del d['eta']
        with self.assertRaises(LoadError):
            create_element(d)
        with self.assertRaises(LoadError):
            create_element(descr(0, 'flat', 1.0, 1.5, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(0.5, 10.0, 1.0, 1.5, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(0, 10.0, 1.0, 1.5, 0.0))
        with self.assertRaises(LoadError):
            create_element(descr(0, 10.0, -1.0, 1.5, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(0, 10.0, 1.0, 0.0, 10.0))

    def test_non_finite_descriptors(self):
        with self.assertRaises(LoadError):
            create_element(descr(inf, 10.0, 1.0, 1.5, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(nan, 10.0, 1.0, 1.5, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(0, 10.0, 1.0, 1.5, nan))
        with self.assertRaises(LoadError):
            create_element(descr(0, 10.0, nan, 1.5, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(0, 10.0, inf, 1.5, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(0, 10.0, 1.0, nan, 10.0))
        with self.assertRaises(LoadError):
            create_element(descr(0, -inf, 1.0, 1.5, 10.0))


class AssembleStackTestCase(unittest.TestCase):
    def setUp(self):
        self.descriptors = [descr(2, -50.0, 40.0, 1.0, 20.0),
                            descr(0, 50.0, 5.0, 1.5, 20.0),
                            descr(1, 0.0, 3.0, 0.0, 12.0)]

    def test_sort_and_position(self):
        elements = assemble_stack(self.descriptors)
        assert [e.index for e in elements] == [0, 1, 2]
        assert isinstance(elements[1], Aperture)

        assert elements[-1].z == approx(-elements[-1].thickness)
        for e, e_next in zip(elements, elements[1:]):
            assert e.z == approx(e_next.z - e.thickness)
        assert elements[0].z == approx(-0.048)
        assert stack_length(elements) == approx(0.048)

    def test_single_element(self):
        elements = assemble_stack([descr(0, 0.0, 10.0, 0.0, 10.0)])
        assert len(elements) == 1
        assert elements[0].z == approx(-0.01)

    def test_empty_stack(self):
        with self.assertRaises(LoadError):
            assemble_stack([])

    def test_duplicate_index(self):
        self.descriptors.append(descr(1, 20.0, 1.0, 1.6, 10.0))
        with self.assertRaises(LoadError):
            assemble_stack(self.descriptors)

    def test_shifted_stack(self):
        elements = assemble_stack(self.descriptors)
        z_before = [e.z for e in elements]
        moved = shifted_stack(elements, -0.002)

        npt.assert_allclose([e.z for e in moved],
                            np.array(z_before) - 0.002, rtol=1e-14)
        assert [e.z for e in elements] == z_before
        assert moved[0] is not elements[0]
        assert isinstance(moved[1], Aperture)
        assert moved[0].profile.cv == approx(elements[0].profile.cv)

    def test_shift(self):
        elements = assemble_stack(self.descriptors)
        e = elements[0]
        z0 = e.z
        e.shift(0.001)
        assert e.z == approx(z0 + 0.001)


class ElementIntersectTestCase(unittest.TestCase):
    def setUp(self):
        self.elements = assemble_stack([descr(0, 0.0, 10.0, 0.0, 10.0)])

    def test_aperture_pass(self):
        e = self.elements[0]
        p = np.array([0.003, 0., -0.05])
        d = np.array([0., 0., 1.])
        hit = e.intersect(p, d, 1.0)
        npt.assert_allclose(hit.p, np.array([0.003, 0., -0.01]), atol=1e-15)
        assert hit.dst == approx(0.04)
        npt.assert_allclose(hit.nrml, np.array([0., 0., 1.]))

    def test_aperture_blocked(self):
        e = self.elements[0]
        p = np.array([0.006, 0., -0.05])
        d = np.array([0., 0., 1.])
        with self.assertRaises(TraceRayBlockedError) as cm:
            e.intersect(p, d, 1.0)
        assert cm.exception.elem is e
        npt.assert_allclose(cm.exception.int_pt, np.array([0.006, 0., -0.01]),
                            atol=1e-15)

    def test_point_inside(self):
        e = self.elements[0]
        assert e.point_inside(0.0049, 0.0)
        assert e.point_inside(0.003, 0.0039)
        assert not e.point_inside(0.004, 0.004)

    def test_listobj_str(self):
        o_str = self.elements[0].listobj_str()
        assert o_str.startswith('Aperture 0:')
        lens = create_element(descr(1, 50.0, 5.0, 1.5, 20.0))
        assert 'ior=1.5' in lens.listobj_str()


if __name__ == '__main__':
    unittest.main(verbosity=3)
