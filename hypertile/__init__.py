r"""
hypertile
=========

`hypertile` is a small Python package for generating (and looking at)
tilings of the hyperbolic plane.

The package is built on top of [numpy](https://numpy.org) and
[matplotlib](https://matplotlib.org), and provides modules to:

- build hyperbolic isometries as 3x3 matrices acting on the hyperboloid
  model, and convert points between the hyperboloid, Klein, and
  Poincare models (`hypertile.hyperbolic`)

- describe a tiling combinatorially, as a table of tile types and the
  tile types across each of their sides (`hypertile.fragments`)

- enumerate the tiles of a tiling out to some depth, and assemble them
  into a triangle mesh (`hypertile.tiling`, `hypertile.mesh`)

- pan around a drawing of the tiling with the mouse
  (`hypertile.camera`, `hypertile.drawtools`)

## Example usage

To draw the {4, 5} tiling by squares meeting five at a vertex:

```python
from hypertile import tiling, drawtools

generator = tiling.TilingGenerator(4, 5, "1,1,1,1")
mesh = generator.generate(4)

figure = drawtools.TilingDrawing(model="poincare")
figure.draw_plane()
figure.draw_mesh(mesh)

figure.show()
```
"""

from hypertile.base import (GeometryError, TilingError, FragmentTableError,
                            TilingDefinitionWarning)
from hypertile import hyperbolic, tile, fragments, mesh, tiling, camera
