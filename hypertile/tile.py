"""Build the polygon shared by every tile of a regular {p, q} tiling.

A `TileTemplate` is a regular p-gon centered at the origin of the
hyperbolic plane, with each side subdivided into `subdiv` segments
and triangulated as a fan around the center. Tiles are placed by
applying isometries to the template's points, so the template is
computed once and then only read.

```python
from hypertile import tile

params = tile.polygon_parameters(4, 5)
template = tile.generate_polygon(4, params.klein_radius, subdiv=4)
template.points.shape, template.triangles.shape
```
    ((17, 3), (16, 3))

"""

from collections import namedtuple

import numpy as np

from hypertile import hyperbolic, utils
from hypertile.base import TilingError
from hypertile.hyperbolic import ERROR_THRESHOLD

DEFAULT_SUBDIV = 16

PolygonParameters = namedtuple(
    "PolygonParameters",
    ["cosh_inradius", "sinh_inradius", "klein_radius", "step_length"]
)

def is_hyperbolic(p, q):
    """Determine whether regular p-gons meeting q at a vertex tile the
    hyperbolic plane (rather than the sphere or the Euclidean plane).

    """
    return p >= 3 and q >= 3 and (p - 2) * (q - 2) > 4

def polygon_parameters(p, q):
    r"""Compute the dimensions of the tile of a regular {p, q} tiling.

    With central angle \(2\pi/p\) and inner angle \(2\pi/q\), the
    hyperbolic law of cosines gives the cosine of the inradius

    \[ v = \cos(\pi / q) / \sin(\pi / p). \]

    Parameters
    ----------
    p : int
        number of sides of each tile
    q : int
        number of tiles meeting at each vertex

    Returns
    -------
    PolygonParameters
        `cosh_inradius` and `sinh_inradius` are `v` and \(w =
        \sqrt{v^2 - 1}\). `klein_radius` is the distance from the
        center to a vertex in the Klein model, and `step_length` is
        the length (in the sense of `hyperbolic.translation`) of the
        translation carrying a tile's center to the center of its
        neighbor.

    Raises
    ------
    TilingError
        Raised if the {p, q} tiling is spherical or Euclidean.

    """
    if not is_hyperbolic(p, q):
        raise TilingError(
            "A regular {{{}, {}}} tiling does not live in the hyperbolic"
            " plane".format(p, q)
        )

    half_central = np.pi / p
    half_inner = np.pi / q

    v = np.cos(half_inner) / np.sin(half_central)
    if v < 1 + ERROR_THRESHOLD:
        raise TilingError(
            "Degenerate {{{}, {}}} tiling (inradius parameter {})".format(
                p, q, v)
        )

    w = np.sqrt(v * v - 1)
    return PolygonParameters(cosh_inradius=v,
                             sinh_inradius=w,
                             klein_radius=w / v / np.cos(half_central),
                             step_length=2 * v * w)

class TileTemplate:
    """A triangulated polygon in hyperboloid coordinates.

    Attributes
    ----------
    points : ndarray
        Array of shape (n, 3). Index 0 is the center of the polygon;
        the rest is the subdivided boundary, in counterclockwise order.
    triangles : ndarray
        Integer array of shape (m, 3) of indices into `points`.

    """
    def __init__(self, points, triangles):
        self.points = np.array(points, dtype=float)
        self.triangles = np.array(triangles, dtype=np.uint32)

        self.points.setflags(write=False)
        self.triangles.setflags(write=False)

    @property
    def num_points(self):
        return len(self.points)

    @property
    def num_triangles(self):
        return len(self.triangles)

    def __repr__(self):
        return "{}({} points, {} triangles)".format(
            self.__class__.__name__, self.num_points, self.num_triangles
        )

def generate_polygon(sides, side_length, subdiv=DEFAULT_SUBDIV):
    """Generate a regular polygon in the hyperbolic plane.

    The polygon is built in the Klein model (where its edges are
    straight), then lifted to the hyperboloid. The first vertex sits
    at angle pi + pi / sides, so that the sides face the directions
    pi + 2 pi k / sides.

    Parameters
    ----------
    sides : int
        number of sides
    side_length : float
        Kleinian distance from the center to each vertex
    subdiv : int
        number of segments each side is divided into

    Returns
    -------
    TileTemplate
        The polygon, fanned from its center.

    """
    if sides < 3:
        raise TilingError("A polygon needs at least 3 sides, not {}".format(sides))
    if subdiv < 1:
        raise TilingError("Subdivision must be positive, not {}".format(subdiv))

    central_angle = 2 * np.pi / sides
    half = central_angle / 2

    first = np.array([-side_length * np.cos(half), -side_length * np.sin(half)])
    corners = utils.apply_matrix(
        utils.rotation_matrix(central_angle * np.arange(sides + 1)), first
    )

    steps = np.arange(subdiv) / subdiv
    edges = utils.lerp(corners[:-1, np.newaxis, :],
                       corners[1:, np.newaxis, :],
                       steps)
    boundary = hyperbolic.kleinian_to_hyperboloid(edges.reshape(-1, 2))

    points = np.concatenate([hyperbolic.origin()[np.newaxis], boundary])

    num_boundary = len(boundary)
    ring = np.arange(num_boundary)
    triangles = np.stack([np.zeros(num_boundary, dtype=int),
                          1 + ring,
                          1 + (ring + 1) % num_boundary], axis=-1)

    return TileTemplate(points, triangles)
