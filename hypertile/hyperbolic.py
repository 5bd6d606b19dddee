r"""Numerical isometries of the hyperbolic plane, and conversions
between models of the hyperbolic plane.

Everything in this module works on plain numpy arrays. Points in the
hyperboloid model are row vectors `(x, y, w)` with \(w^2 - x^2 - y^2 =
1\), and isometries are 3x3 matrices acting on *column* vectors, so
that composing isometries is just matrix multiplication:

```python
import numpy as np
from hypertile import hyperbolic

# translate the origin by a vector, then turn around
iso = hyperbolic.translation([0.5, 0.]) @ hyperbolic.turn_around()

# apply the isometry to the origin and get Poincare coordinates
pt = hyperbolic.apply(iso, hyperbolic.origin())
hyperbolic.project(pt, model="poincare")
```
    array([0.23606798, 0.        ])

All of the constructors broadcast, so an array of translation vectors
gives an array of isometries:

```python
deltas = np.array([[0.1, 0.0], [0.0, 0.2], [-0.3, 0.3]])
hyperbolic.translation(deltas).shape
```
    (3, 3, 3)

Generation of tilings always happens in hyperboloid coordinates. The
Klein and Poincare models are only used when a mesh is projected for
display.

"""

from enum import Enum

import numpy as np

from hypertile import utils
from hypertile.base import GeometryError

#arbitrary
ERROR_THRESHOLD = 1e-8

class Model(Enum):
    """Enumerate implemented models of the hyperbolic plane.

    Models can have different aliases, and can be compared to strings
    with the == operator, which returns `True` if the strings match
    any alias name (case insensitive).

    """
    POINCARE = "poincare"
    KLEIN = "klein"
    KLEINIAN = "klein"
    HYPERBOLOID = "hyperboloid"

    def aliases(self):
        """List all of the different accepted names for this hyperbolic model."""
        return [name for name, member in Model.__members__.items()
                if member is self]

    def __eq__(self, other):
        if self is other:
            return True

        try:
            if other.upper() in self.aliases():
                return True
        except AttributeError:
            pass

        return False

    def __hash__(self):
        return hash(self.value)

    @staticmethod
    def get(model):
        """Get the `Model` matching a `Model` or an alias string.

        Raises
        ------
        GeometryError
            Raised if `model` does not name a known model.

        """
        for member in Model:
            if member == model:
                return member

        raise GeometryError("Unknown model of the hyperbolic plane: '{}'".format(
            model))

def minkowski():
    """Get the Minkowski form diag(1, 1, -1) preserved by isometries."""
    return np.diag([1.0, 1.0, -1.0])

def identity():
    return np.identity(3)

def origin():
    """Get the hyperboloid coordinates of the origin of the plane."""
    return np.array([0.0, 0.0, 1.0])

def translation(delta):
    r"""Get the hyperbolic translation moving the origin by `delta`.

    `delta` is measured in the local metric of the hyperboloid: the
    image of the origin is the point `(delta_x, delta_y, w)`, where \(w
    = \sqrt{1 + |\delta|^2}\). The result is the Lorentz boost in the
    direction of `delta`.

    Parameters
    ----------
    delta : ndarray
        Translation vector(s), of shape (..., 2).

    Returns
    -------
    ndarray
        Isometries of shape (..., 3, 3).

    """
    delta = np.asarray(delta, dtype=float)
    if delta.shape[-1:] != (2,):
        raise GeometryError(
            "Translation vectors must have shape (..., 2), got shape {}".format(
                delta.shape)
        )

    w = np.sqrt(1 + utils.normsq(delta))
    scaled = delta / np.expand_dims(w + 1, axis=-1)
    lifted = np.concatenate(
        [scaled, np.ones(delta.shape[:-1] + (1,))], axis=-1
    )

    iso = np.zeros(delta.shape[:-1] + (3, 3))
    iso[..., :, 0] = delta[..., 0, np.newaxis] * lifted
    iso[..., :, 1] = delta[..., 1, np.newaxis] * lifted
    iso[..., 0, 0] += 1
    iso[..., 1, 1] += 1
    iso[..., :2, 2] = delta
    iso[..., 2, 2] = w

    return iso

def translation_by_distance(distance, angle=0.):
    """Get the translation moving the origin a given hyperbolic distance in
    the direction of `angle`.

    """
    distance = np.asarray(distance, dtype=float)
    angle = np.asarray(angle, dtype=float)
    length = np.sinh(distance)
    return translation(np.stack([length * np.cos(angle),
                                 length * np.sin(angle)], axis=-1))

def rotation(angle):
    """Get the rotation(s) about the origin counterclockwise by `angle`.

    Parameters
    ----------
    angle : float or ndarray
        Rotation angle(s), in radians.

    Returns
    -------
    ndarray
        Isometries of shape (..., 3, 3), block diagonal with the planar
        rotation in the upper left and 1 in the lower right.

    """
    block = utils.rotation_matrix(angle)
    iso = np.zeros(block.shape[:-2] + (3, 3))
    iso[..., :2, :2] = block
    iso[..., 2, 2] = 1.0

    return iso

def turn_around():
    """Get the half-turn about the origin."""
    return np.diag([-1.0, -1.0, 1.0])

def inverse(iso):
    """Invert an isometry (or an array of isometries).

    For matrices preserving the Minkowski form J, the inverse is the
    adjoint J A^T J. This is exact up to the error already present in
    `iso`; use `np.linalg.inv` for matrices which are far from being
    isometries.

    """
    form = minkowski()
    return form @ np.swapaxes(np.asarray(iso), -1, -2) @ form

def apply(iso, points):
    """Apply isometries to hyperboloid points.

    Parameters
    ----------
    iso : ndarray
        Isometries of shape (..., 3, 3).
    points : ndarray
        Points of shape (..., 3).

    """
    return utils.apply_matrix(iso, points)

def is_isometry(matrix, tolerance=ERROR_THRESHOLD):
    """Determine if a matrix (or each of an array of matrices) preserves
    the Minkowski form, up to `tolerance`.

    """
    matrix = np.asarray(matrix)
    form = minkowski()
    pulled_back = np.swapaxes(matrix, -1, -2) @ form @ matrix
    return np.all(np.abs(pulled_back - form) < tolerance, axis=(-1, -2))

def hyperboloid_normsq(points):
    """Get w^2 - x^2 - y^2 for an array of vectors in R^(2,1)."""
    return -1 * utils.normsq(points, minkowski())

def distance(p1, p2):
    """Compute hyperbolic distances between (arrays of) hyperboloid
    points.

    """
    products = -1 * utils.apply_bilinear(p1, p2, minkowski())
    #clip to combat roundoff error near the diagonal
    return np.arccosh(np.maximum(products, 1.0))

def kleinian_to_hyperboloid(points):
    """Lift points in the Klein disk to the hyperboloid.

    Raises
    ------
    GeometryError
        Raised if some point does not lie in the open unit disk.

    """
    points = np.asarray(points, dtype=float)
    euc_norms = utils.normsq(points)
    if np.any(euc_norms >= 1):
        raise GeometryError(
            "Kleinian coordinates must lie in the open unit disk"
        )

    w = 1 / np.sqrt(1 - euc_norms)
    homogeneous = np.concatenate(
        [points, np.ones(points.shape[:-1] + (1,))], axis=-1
    )
    return homogeneous * np.expand_dims(w, axis=-1)

def hyperboloid_to_kleinian(points):
    points = np.asarray(points)
    return points[..., :2] / points[..., 2:]

def hyperboloid_to_poincare(points):
    points = np.asarray(points)
    return points[..., :2] / (points[..., 2:] + 1)

def kleinian_to_poincare(points):
    points = np.asarray(points)
    euc_norms = utils.normsq(points)
    #we take absolute value to combat roundoff error
    mult_factor = 1 / (1 + np.sqrt(np.abs(1 - euc_norms)))

    return points * np.expand_dims(mult_factor, axis=-1)

def poincare_to_kleinian(points):
    points = np.asarray(points)
    euc_norms = utils.normsq(points)
    mult_factor = 2 / (1 + euc_norms)

    return points * np.expand_dims(mult_factor, axis=-1)

def project(points, model=Model.POINCARE):
    """Get coordinates for hyperboloid points in some model.

    Parameters
    ----------
    points : ndarray
        Hyperboloid coordinates, of shape (..., 3).
    model : Model or str
        Which model to take coordinates in. Hyperboloid coordinates are
        passed through unchanged.

    Returns
    -------
    ndarray
        Array of shape (..., 2) for the Klein and Poincare models, or
        (..., 3) for the hyperboloid model.

    Raises
    ------
    GeometryError
        Raised if an unsupported model is specified.

    """
    model = Model.get(model)

    if model == Model.KLEIN:
        return hyperboloid_to_kleinian(points)
    if model == Model.POINCARE:
        return hyperboloid_to_poincare(points)

    return np.asarray(points)
