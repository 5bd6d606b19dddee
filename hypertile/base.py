class GeometryError(Exception):
    """Thrown if there's an attempt to construct a geometric object with
    numerical data that doesn't make sense for that type of object.

    """
    pass

class TilingError(GeometryError):
    """Thrown if a tiling is configured with parameters which do not
    describe a tiling of the hyperbolic plane (or which we refuse to
    generate, e.g. an unreasonable depth).

    """
    pass

class FragmentTableError(TilingError):
    """Thrown if a fragment table refers to fragments it does not
    contain.

    """
    pass

class TilingDefinitionWarning(UserWarning):
    """Issued when a line of a tiling definition is dropped or repaired
    while loading.

    """
    pass
