"""Generate tilings of the hyperbolic plane from a fragment table.

The `TilingGenerator` class walks the tree of tiles reachable from a
root tile, up to a fixed depth. Every tile is a copy of a single
`tile.TileTemplate`, placed by an isometry which is the product of
the isometries along the path from the root. Which tiles exist, and
what type they have, is determined by a `fragments.FragmentTable`.

```python
from hypertile import tiling

generator = tiling.TilingGenerator(4, 5, "1,1,1,1")

# lazily enumerate tile placements...
instances = list(generator.instances(2))
len(instances)
```
    17

```python
# ...or build a mesh from them
mesh = generator.generate(2)
mesh.num_tiles
```
    17

Placements are computed by multiplying floating-point matrices, with
no renormalization, so deep tilings accumulate some numerical error.
Different paths in the tree may also lead to the same tile; these
tiles are generated (and drawn) once for each path.

"""

from collections import namedtuple

import numpy as np

from hypertile import fragments, hyperbolic, mesh, tile
from hypertile.base import TilingError
from hypertile.hyperbolic import Model

# the number of tiles grows exponentially with depth, so anything
# past this is almost certainly a mistake
MAX_DEPTH = 15

ROOT_FRAGMENT = 0

TileInstance = namedtuple("TileInstance", ["fragment_id", "transform"])

class TilingGenerator:
    """Generate meshes for a tiling by regular p-gons, q meeting at each
    vertex.

    """
    def __init__(self, p, q, definition, subdiv=tile.DEFAULT_SUBDIV):
        """
        Parameters
        ----------
        p : int
            number of sides of each tile
        q : int
            number of tiles meeting at each vertex
        definition : str or FragmentTable
            the tiling definition. If a string, parse it as the text of
            a definition (see `hypertile.fragments`).
        subdiv : int
            number of segments each side of a tile is divided into

        Raises
        ------
        TilingError
            Raised if the {p, q} tiling is not hyperbolic, or if the
            fragment table is inconsistent.

        """
        self.p = p
        self.q = q
        self.subdiv = subdiv

        self.parameters = tile.polygon_parameters(p, q)
        self.template = tile.generate_polygon(
            p, self.parameters.klein_radius, subdiv
        )

        if isinstance(definition, fragments.FragmentTable):
            if definition.sides != p:
                raise TilingError(
                    "Fragment table is for {}-gons, not {}-gons".format(
                        definition.sides, p)
                )
            self.table = definition
        else:
            self.table = fragments.parse_definition(definition, p)

        self.rotation = hyperbolic.rotation(2 * np.pi / p)
        self.forward = (
            hyperbolic.translation([-self.parameters.step_length, 0.]) @
            hyperbolic.turn_around()
        )
        self.side_transforms = self._side_transforms()

    @classmethod
    def open(cls, filename, p, q, **kwargs):
        """Build a generator from a tiling definition stored in a file.

        Raises
        ------
        OSError
            Raised if the file cannot be read.

        """
        return cls(p, q, fragments.load_file(filename, p), **kwargs)

    @classmethod
    def builtin(cls, name, p, q, **kwargs):
        """Build a generator from one of the definitions shipped with
        this package (see `fragments.builtin_names`).

        """
        return cls(p, q, fragments.load_builtin(name, p), **kwargs)

    def _side_transforms(self):
        # the i-th transform is rotation^i @ forward
        transforms = []
        current = self.forward
        for _ in range(self.p):
            transforms.append(current)
            current = self.rotation @ current

        return transforms

    def instances(self, depth):
        """Enumerate the tiles of the tiling, out to a given depth.

        The root tile has fragment id 0 and the identity placement. A
        tile at depth `d` has a child across each side, except for the
        side it was entered from and for sides whose branch has no
        neighbor.

        Parameters
        ----------
        depth : int
            maximum number of steps from the root tile

        Yields
        ------
        TileInstance
            (fragment id, placement isometry) pairs, in depth-first
            order.

        """
        self._check_depth(depth)
        return self._layer(hyperbolic.identity(), ROOT_FRAGMENT, 0, depth,
                           root=True)

    def _layer(self, transform, fragment_id, incoming_rotation, depth,
               root=False):
        yield TileInstance(fragment_id, transform)

        if depth == 0:
            return

        for side, side_transform in enumerate(self.side_transforms):
            # side 0 faces the parent tile
            if side == 0 and not root:
                continue

            branch = self.table.branch(fragment_id, side + incoming_rotation)
            if branch.neighbor is None:
                continue

            yield from self._layer(transform @ side_transform,
                                   branch.neighbor, branch.rotation,
                                   depth - 1)

    def count(self, depth):
        """Count the tiles generated out to a given depth."""
        return sum(1 for _ in self.instances(depth))

    def generate(self, depth, model=Model.HYPERBOLOID):
        """Build a mesh for the tiling out to a given depth.

        Parameters
        ----------
        depth : int
            maximum number of steps from the root tile
        model : Model
            model to store vertex positions in. Keep the default
            (hyperboloid coordinates) if the mesh is going to be moved
            by a camera isometry before drawing.

        Returns
        -------
        mesh.Mesh
            A new mesh. Nothing is shared with meshes returned by
            earlier calls.

        """
        return mesh.assemble(self.instances(depth), self.template,
                             self.table, model=model)

    def _check_depth(self, depth):
        if depth < 0 or depth > MAX_DEPTH:
            raise TilingError(
                "Tiling depth must be between 0 and {}, not {}".format(
                    MAX_DEPTH, depth)
            )

    def __repr__(self):
        return "{}({{{}, {}}}, {} fragments)".format(
            self.__class__.__name__, self.p, self.q, len(self.table)
        )
