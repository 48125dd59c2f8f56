# -*- coding: utf-8 -*-
""" The **lenssystem** camera lens ray transport package

    A lens system is a stack of refracting lens surfaces and aperture stops
    placed in front of a film plane. The package traces rays through the
    stack so that a renderer can replace an idealized pinhole with a
    physically based compound lens.

    The top level model is contained in the :mod:`~.optical` subpackage. It
    is supported by the following subpackages:

        - :mod:`~.optical`: LensSystem, Film, model constants and errors
        - :mod:`~.elem`: lens elements, surface profiles and stack assembly
        - :mod:`~.raytr`: ray transport, exit pupil bounds and ray sampling
        - :mod:`~.parax`: cardinal points and focusing
        - :mod:`~.presc`: reading and writing of lens prescription files

    The :mod:`~.util` subpackage provides vector math helpers.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = 'unknown'


def listobj(obj):
    """ Print wrapper function for listobj_str() method of `obj`.

    Classes may implement the `listobj_str` method that returns a string
    containing a formatted description of the object, for example
    :meth:`.CardinalPoints.listobj_str` and :meth:`.LensSystem.listobj_str`.
    """
    try:
        print(obj.listobj_str())
    except AttributeError:
        print(repr(obj))
