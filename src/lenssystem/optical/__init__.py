""" Package encompassing the top level lens system model

    The ``lenssystem.optical`` subpackage provides the
    :class:`~.lenssystem.LensSystem` model, the :class:`~.film.Film` it
    images onto, model constants in :mod:`~.model_constants` and the
    configuration level exceptions in :mod:`~.modelerror`.
"""
