""" Package for lens prescription file input and output

    The :mod:`~.presc` subpackage reads JSON lens prescriptions into a
    sorted, positioned stack of lens elements and writes them back out,
    see :mod:`~.reader`
"""
