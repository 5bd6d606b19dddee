"""Provide utility functions used by the various tiling tools in
this package.

"""

import numpy as np

def rotation_matrix(angle):
    """Get a 2x2 rotation matrix (or an array of such matrices) rotating
    counterclockwise by the specified angle(s).

    """
    angle = np.asarray(angle, dtype=float)
    c, s = np.cos(angle), np.sin(angle)

    return np.stack([np.stack([c, -s], axis=-1),
                     np.stack([s, c], axis=-1)], axis=-2)

def apply_bilinear(v1, v2, bilinear_form=None):
    """apply a bilinar form to a pair of arrays of vectors.

    if v1 and v2 are ndarrays of shape (..., n) and (..., n), apply
    the bilinear form elementwise to them, using standard broadcasting
    rules.

    """
    v1 = np.asarray(v1)
    v2 = np.asarray(v2)

    if bilinear_form is None:
        bilinear_form = np.identity(v1.shape[-1])

    return ((v1 @ bilinear_form) * v2).sum(-1)

def normsq(vectors, bilinear_form=None):
    """norm of an ndarray of vectors"""
    return apply_bilinear(vectors, vectors, bilinear_form)

def lerp(v1, v2, t):
    """Linearly interpolate between two (arrays of) vectors.

    `t` may be an array, in which case the result has an extra axis
    in front of the vector axis.

    """
    t = np.expand_dims(np.asarray(t, dtype=float), axis=-1)
    return (1 - t) * np.asarray(v1) + t * np.asarray(v2)

def apply_matrix(matrix, points):
    """Apply a (column-vector) linear map to an ndarray of row vectors.

    Parameters
    ----------
    matrix : ndarray
        Matrix of shape (..., n, n), acting on column vectors.
    points : ndarray
        Array of shape (..., n) of vectors to transform.

    Returns
    -------
    ndarray
        The images of `points`, with the same shape as `points`.

    """
    return np.asarray(points) @ np.swapaxes(np.asarray(matrix), -1, -2)
