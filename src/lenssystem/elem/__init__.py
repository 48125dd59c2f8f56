""" Package providing support for element based lens modeling

    The :mod:`~.elem` subpackage provides classes and functions
    for the elements of a lens system. These include:

        - Aperture and Lens elements and stack assembly, :mod:`~.elements`
        - Geometric surface shapes, :mod:`~.profiles`
"""
