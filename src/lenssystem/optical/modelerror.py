#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Exceptions for configuration level failures of a lens system

    These are raised to the caller of model construction and focusing, who
    decides whether to abort or retry with different input.

.. Created on Sat Mar 14 10:40:19 2026
"""


class ModelError(Exception):
    """ Base exception for lens system configuration failures """


class LoadError(ModelError):
    """ Exception raised when a lens prescription is missing or malformed """


class CardinalPointError(ModelError):
    """ Exception raised when a probe ray fails to get through the lens

    The lens, as given, cannot form a real image of a near-axial ray.
    """
    def __init__(self, msg, direction=None):
        super().__init__(msg)
        self.direction = direction


class FocusUnreachableError(ModelError):
    """ Exception raised when no rigid shift focuses at the requested distance
    """
    def __init__(self, msg, object_distance=None):
        super().__init__(msg)
        self.object_distance = object_distance
