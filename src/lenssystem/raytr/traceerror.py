#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Support for ray trace exception handling

    Trace errors describe the expected, frequent ways a ray fails to get
    through a lens system. :meth:`.LensSystem.raytrace` reports them as part
    of its result rather than raising them.

.. Created on Sat Mar 14 10:31:02 2026
"""


class TraceError(Exception):
    """ Exception raised when ray tracing a lens system """


class TraceMissedSurfaceError(TraceError):
    """ Exception raised when ray misses an element's surface """
    def __init__(self, elem=None, pt=None):
        self.elem = elem
        self.pt = pt


class TraceTIRError(TraceError):
    """ Exception raised when ray TIRs at an element """
    def __init__(self, inc_dir, normal, prev_indx, follow_indx):
        self.elem = None
        self.int_pt = None
        self.inc_dir = inc_dir
        self.normal = normal
        self.prev_indx = prev_indx
        self.follow_indx = follow_indx


class TraceRayBlockedError(TraceError):
    """ Exception raised when ray is blocked by an element's clear aperture """
    def __init__(self, elem, int_pt):
        self.elem = elem
        self.int_pt = int_pt


class TraceReflectionLimitError(TraceError):
    """ Exception raised when ray exceeds the allowed number of reflections """
    def __init__(self, num_reflections):
        self.num_reflections = num_reflections
