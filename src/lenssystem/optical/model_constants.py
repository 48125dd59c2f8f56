#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" lens system model constants

    Lengths are in meters unless noted otherwise.

.. Created on Sat Mar 14 10:44:50 2026
"""

# prescription files are in millimeters
mm_to_m = 1e-3

# element kinds
APERTURE, LENS = 'aperture', 'lens'

# index of refraction of the medium surrounding the lens
ior_air = 1.0

# cardinal point probe rays: height above the axis, and distance in front
# of the object-side-most element that the forward probe starts from
probe_height = 1e-3
probe_distance = 1.0

# exit pupil bounds: number of field height bins and candidate rays per bin
num_exit_pupil_bounds = 64
num_exit_pupil_bounds_samples = 1024

# size of the candidate square on the rear element plane, relative to the
# rear element's aperture radius
pupil_search_scale = 1.5

# maximum number of reflections allowed within a single ray trace
max_reflections = 16

# convergence tolerance for the focus refinement
focus_tol = 1e-12
focus_maxiter = 50

# default film size, a 35mm full frame sensor
film_width = 0.036
film_height = 0.024
