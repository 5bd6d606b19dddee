"""Assemble tile placements into a single triangle mesh.

A `Mesh` is a flat vertex array (positions and RGB colors) together
with an index array, three indices per triangle. Meshes are
read-only once built: to change the depth of a tiling, generate a new
mesh and drop the old one.

"""

import numpy as np

from hypertile import hyperbolic
from hypertile.base import GeometryError
from hypertile.hyperbolic import Model

class Mesh:
    """A triangle mesh with per-vertex colors.

    Attributes
    ----------
    positions : ndarray
        Vertex positions, of shape (n, 3) for a mesh in hyperboloid
        coordinates and (n, 2) for a mesh in the Klein or Poincare
        model.
    colors : ndarray
        RGB vertex colors, of shape (n, 3).
    indices : ndarray
        Flat array of vertex indices (uint32), three per triangle.
    model : Model
        The model `positions` are given in.
    num_tiles : int
        Number of tile instances which went into this mesh.

    """
    def __init__(self, positions, colors, indices, model=Model.HYPERBOLOID,
                 num_tiles=0):
        self.model = Model.get(model)
        self.positions = np.array(positions, dtype=float)
        self.colors = np.array(colors, dtype=float)
        self.indices = np.array(indices, dtype=np.uint32).reshape(-1)
        self.num_tiles = num_tiles

        if len(self.positions) != len(self.colors):
            raise GeometryError(
                "Mesh has {} positions but {} colors".format(
                    len(self.positions), len(self.colors))
            )

        if len(self.indices) % 3 != 0:
            raise GeometryError(
                "Mesh index count must be a multiple of 3, got {}".format(
                    len(self.indices))
            )

        if len(self.indices) > 0 and self.indices.max() >= len(self.positions):
            raise GeometryError("Mesh indices refer to missing vertices")

        for array in (self.positions, self.colors, self.indices):
            array.setflags(write=False)

    @property
    def num_vertices(self):
        return len(self.positions)

    @property
    def num_triangles(self):
        return len(self.indices) // 3

    @property
    def triangles(self):
        return self.indices.reshape(-1, 3)

    def project(self, model=Model.POINCARE, transform=None):
        """Get vertex positions in some model of the hyperbolic plane.

        Parameters
        ----------
        model : Model
            model to get coordinates in
        transform : ndarray
            isometry to apply to the mesh before projecting (e.g. a
            camera transform). If `None`, don't move the mesh.

        Raises
        ------
        GeometryError
            Raised if this mesh is not in hyperboloid coordinates and
            either `transform` is given or `model` is not the mesh's
            own model.

        """
        model = Model.get(model)

        if self.model != Model.HYPERBOLOID:
            if transform is not None or model != self.model:
                raise GeometryError(
                    "Cannot reproject a mesh stored in the {} model".format(
                        self.model.value)
                )
            return self.positions

        positions = self.positions
        if transform is not None:
            positions = hyperbolic.apply(transform, positions)

        return hyperbolic.project(positions, model)

    def triangle_coords(self, model=Model.POINCARE, transform=None):
        """Get an array of shape (m, 3, k) of triangle vertex coordinates."""
        return self.project(model, transform)[self.triangles]

    def triangle_colors(self):
        return self.colors[self.triangles].mean(axis=-2)

    def vertex_buffer(self):
        """Interleave positions and colors into a float32 array, one row
        per vertex.

        """
        return np.concatenate([self.positions, self.colors],
                              axis=-1).astype(np.float32)

    def index_buffer(self):
        return self.indices.astype(np.uint32)

    def __repr__(self):
        return "{}({} tiles, {} vertices, {} triangles, model={})".format(
            self.__class__.__name__, self.num_tiles, self.num_vertices,
            self.num_triangles, self.model.value
        )

class MeshBuilder:
    """Accumulate copies of a tile template into a mesh.

    Each call to `add` appends one block of vertices (the template
    moved by an isometry and projected) and one block of indices
    (the template's triangles, offset by the number of vertices added
    so far).

    """
    def __init__(self, template, table, model=Model.HYPERBOLOID):
        self.template = template
        self.table = table
        self.model = Model.get(model)

        self._positions = []
        self._colors = []
        self._indices = []
        self._vertex_count = 0

    def add(self, fragment_id, transform):
        points = hyperbolic.apply(transform, self.template.points)
        positions = hyperbolic.project(points, self.model)

        color = np.array(self.table.color(fragment_id), dtype=float)

        self._positions.append(positions)
        self._colors.append(np.broadcast_to(color, (len(positions), 3)))
        self._indices.append(self.template.triangles.reshape(-1).astype(np.int64)
                             + self._vertex_count)

        self._vertex_count += len(positions)

    def build(self):
        if not self._positions:
            dim = 3 if self.model == Model.HYPERBOLOID else 2
            return Mesh(np.zeros((0, dim)), np.zeros((0, 3)),
                        np.zeros(0), model=self.model)

        return Mesh(np.concatenate(self._positions),
                    np.concatenate(self._colors),
                    np.concatenate(self._indices),
                    model=self.model,
                    num_tiles=len(self._positions))

def assemble(instances, template, table, model=Model.HYPERBOLOID):
    """Build a mesh out of a stream of tile instances.

    Parameters
    ----------
    instances : iterable
        `(fragment_id, transform)` pairs
    template : tile.TileTemplate
        the polygon copied for every tile
    table : fragments.FragmentTable
        used to look up the color of each fragment
    model : Model
        model to store the mesh's vertex positions in

    Returns
    -------
    Mesh

    """
    builder = MeshBuilder(template, table, model=model)
    for fragment_id, transform in instances:
        builder.add(fragment_id, transform)

    return builder.build()
