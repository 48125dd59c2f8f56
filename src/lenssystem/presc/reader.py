#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 lenssystem developers
""" Read and write lens prescription files

    A lens prescription is a JSON object of named entries, one per element::

        {
         "surface0": {"index": 0, "curvature_radius": 29.475,
                      "thickness": 3.76, "eta": 1.67,
                      "aperture_diameter": 25.2},
         ...
        }

    Lengths are in millimeters. A zero curvature radius marks an aperture
    stop. The order of the entries is not significant; elements are sorted
    by index.

.. Created on Tue Mar 17 09:26:44 2026
"""
from collections.abc import Mapping
import logging
from pathlib import Path

import json_tricks

import lenssystem.optical.model_constants as mc
from lenssystem.elem.elements import assemble_stack
from lenssystem.optical.modelerror import LoadError

logger = logging.getLogger(__name__)


def model_path(name=None):
    """ path to the bundled lens models, or to the model file name """
    pth = Path(__file__).resolve().parent.parent / 'models'
    return pth if name is None else pth / name


def read_lens_file(filename):
    """ given a lens prescription filename, return the assembled stack

    Args:
        filename (str or pathlib.Path): a JSON lens prescription file

    Returns:
        list of lens elements, sorted and positioned

    Raises:
        :exc:`~lenssystem.optical.modelerror.LoadError`
    """
    filename = Path(filename)
    try:
        with filename.open('r', encoding='utf-8') as f:
            inpt = f.read()
    except (OSError, UnicodeDecodeError) as err:
        raise LoadError(f"failed to open {filename}: {err}") from err

    elements = read_lens(inpt)
    logger.info("read %d elements from %s", len(elements), filename.name)
    return elements


def read_lens(inpt):
    """ given a JSON str or an already decoded prescription, return the stack

    Args:
        inpt: a JSON str, a mapping of named element entries, or a list of
              element entries

    Returns:
        list of lens elements, sorted and positioned

    Raises:
        :exc:`~lenssystem.optical.modelerror.LoadError`
    """
    if isinstance(inpt, str):
        try:
            inpt = json_tricks.loads(inpt, preserve_order=True)
        except ValueError as err:
            raise LoadError(f"malformed lens prescription: {err}") from err

    if isinstance(inpt, Mapping):
        for label, entry in inpt.items():
            logger.debug("%s: %s", label, entry)
        descriptors = list(inpt.values())
    elif isinstance(inpt, (list, tuple)):
        descriptors = list(inpt)
    else:
        raise LoadError(f"lens prescription must be a JSON object, "
                        f"got {type(inpt).__name__}")

    return assemble_stack(descriptors)


def element_descriptor(e):
    """ return the prescription entry, in millimeters, for lens element e """
    return {'index': e.index,
            'curvature_radius': e.curvature_radius/mc.mm_to_m,
            'thickness': e.thickness/mc.mm_to_m,
            'eta': e.medium_ior,
            'aperture_diameter': 2.0*e.aperture_radius/mc.mm_to_m}


def write_lens_file(elements, filename):
    """ write the stack of lens elements as a lens prescription file

    Args:
        elements: list of lens elements
        filename (str or pathlib.Path): the output file path
    """
    presc = {f"surface{e.index}": element_descriptor(e) for e in elements}
    file_pth = Path(filename)
    if not file_pth.parent.exists():
        file_pth.parent.mkdir(parents=True)
    with file_pth.open('w', encoding='utf-8') as f:
        json_tricks.dump(presc, f, indent=1, separators=(',', ':'))
    logger.info("wrote %d elements to %s", len(elements), file_pth.name)
