class OfonoError(Exception):
    """ Base class for the errors raised by the ofono connector. """
    pass
