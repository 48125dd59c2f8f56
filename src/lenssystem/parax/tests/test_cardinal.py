#!/usr/bin/env python3
# -*- coding: utf-8 -*-
""" tests for cardinal point estimation

.. Created on Fri Mar 20 10:51:36 2026
"""

import unittest

import numpy as np
from pytest import approx

from lenssystem.elem.elements import assemble_stack
from lenssystem.optical.modelerror import CardinalPointError
from lenssystem.parax.cardinal import (CardinalPoints, axis_crossings,
                                       compute_cardinal_points)
from lenssystem.raytr import Ray


def descr(index, radius, thickness, eta, diameter):
    return {'index': index, 'curvature_radius': radius,
            'thickness': thickness, 'eta': eta, 'aperture_diameter': diameter}


def biconvex_stack():
    """ symmetric biconvex singlet, f = 100mm nominal """
    return assemble_stack([descr(0, 100.0, 1.0, 1.5, 20.0),
                           descr(1, -100.0, 100.0, 1.0, 20.0)])


class CardinalPointsTestCase(unittest.TestCase):
    def test_focal_lengths(self):
        cp = CardinalPoints(-0.2, -0.1, 0.05, -0.05)
        assert cp.object_focal_length == approx(-0.1)
        assert cp.image_focal_length == approx(0.1)
        assert cp.efl == approx(0.1)
        assert 'efl' in cp.listobj_str()
        assert repr(cp).startswith('CardinalPoints(')

    def test_axis_crossings(self):
        ray = Ray(np.array([0., 0.001, -0.1]), np.array([0., -0.01, 1.]))
        focal_z, principal_z = axis_crossings(ray, 0.001)
        assert focal_z == approx(0.0, abs=1e-15)
        assert principal_z == approx(-0.1)

        with self.assertRaises(CardinalPointError):
            axis_crossings(Ray(np.array([0., 0.001, -0.1]),
                               np.array([0., 0., 1.])), 0.001)


class ComputeCardinalPointsTestCase(unittest.TestCase):
    def test_biconvex(self):
        elements = biconvex_stack()
        cp = compute_cardinal_points(elements)

        assert cp.image_focal_length == approx(0.1, rel=0.01)
        assert cp.object_focal_length == approx(-cp.image_focal_length,
                                                rel=1e-3)
        lens_center = elements[0].z + 0.5*elements[0].thickness
        assert cp.image_principal_z == approx(lens_center, abs=1e-3)
        assert cp.object_principal_z == approx(lens_center, abs=1e-3)
        assert cp.image_focal_z > cp.image_principal_z
        assert cp.object_focal_z < cp.object_principal_z

    def test_planoconvex_orientation(self):
        # the rear principal plane of a plano-convex lens is at its curved face
        elements = assemble_stack([descr(0, 50.0, 10.0, 1.5, 20.0),
                                   descr(1, 1e9, 100.0, 1.0, 20.0)])
        cp = compute_cardinal_points(elements)
        assert cp.image_focal_length == approx(0.1, rel=0.01)
        assert cp.image_principal_z == approx(elements[0].z, abs=5e-4)

    def test_afocal(self):
        elements = assemble_stack([descr(0, 0.0, 10.0, 0.0, 10.0)])
        with self.assertRaises(CardinalPointError):
            compute_cardinal_points(elements)

    def test_blocked_probe(self):
        elements = assemble_stack([descr(0, 0.0, 1.0, 0.0, 1.0),
                                   descr(1, 100.0, 1.0, 1.5, 20.0),
                                   descr(2, -100.0, 100.0, 1.0, 20.0)])
        with self.assertRaises(CardinalPointError) as cm:
            compute_cardinal_points(elements)
        assert cm.exception.direction == 'forward'


if __name__ == '__main__':
    unittest.main(verbosity=3)
