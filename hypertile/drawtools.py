"""This submodule provides an interface between tiling meshes and
[matplotlib](https://matplotlib.org/).

`TilingDrawing` draws a `mesh.Mesh` in the Klein or Poincare disk.
`TilingView` adds a camera to this, and hooks matplotlib's mouse
events up to it so the tiling can be dragged around:

```python
from hypertile import tiling, drawtools

generator = tiling.TilingGenerator.builtin("square", 4, 5)

view = drawtools.TilingView(generator, depth=5, model="poincare")
view.show()
```

"""

import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection
from matplotlib.patches import Circle

from hypertile import hyperbolic
from hypertile.camera import Camera
from hypertile.hyperbolic import Model

#the default amount of "room" we leave outside the boundary of our model
DRAW_NEIGHBORHOOD = 0.1

LEFT_BUTTON = 1

def default_model_limits(model):
    if model == Model.POINCARE or model == Model.KLEIN:
        return ((-1 - DRAW_NEIGHBORHOOD, 1 + DRAW_NEIGHBORHOOD),
                (-1 - DRAW_NEIGHBORHOOD, 1 + DRAW_NEIGHBORHOOD))

    raise DrawingError(
        "Drawing in model '{}' is not implemented".format(model)
    )

class DrawingError(Exception):
    """Thrown if we try and draw an object in a model which we haven't
    implemented yet.

    """
    pass

class TilingDrawing:
    def __init__(self, figsize=8,
                 ax=None,
                 fig=None,
                 facecolor="aliceblue",
                 edgecolor="lightgray",
                 linewidth=1,
                 model=Model.POINCARE,
                 xlim=None,
                 ylim=None,
                 transform=None):

        self.model = Model.get(model)
        default_x, default_y = default_model_limits(self.model)

        if ax is None or fig is None:
            fig, ax = plt.subplots(figsize=(figsize, figsize))

        self.xlim, self.ylim = xlim, ylim
        if xlim is None:
            self.xlim = default_x
        if ylim is None:
            self.ylim = default_y

        self.ax, self.fig = ax, fig

        self.ax.axis("off")
        self.ax.set_aspect("equal")
        self.ax.set_xlim(self.xlim)
        self.ax.set_ylim(self.ylim)

        self.facecolor = facecolor
        self.edgecolor = edgecolor
        self.linewidth = linewidth

        self.transform = hyperbolic.identity()
        if transform is not None:
            self.transform = transform

    def draw_plane(self, **kwargs):
        default_kwargs = {
            "facecolor": self.facecolor,
            "edgecolor": self.edgecolor,
            "linewidth": self.linewidth,
            "zorder": 0
        }
        for key, value in kwargs.items():
            default_kwargs[key] = value

        plane = Circle((0., 0.), 1.0, **default_kwargs)
        self.ax.add_patch(plane)
        return plane

    def draw_mesh(self, mesh, **kwargs):
        """Add the triangles of a mesh to the drawing, colored by the mesh's
        vertex colors.

        Meshes in hyperboloid coordinates are moved by this drawing's
        transform before projecting. Meshes already projected to this
        drawing's model are drawn as they are.

        Returns
        -------
        PolyCollection
            the matplotlib collection holding the triangles.

        """
        default_kwargs = {
            "edgecolor": "face",
            "linewidth": 0.2,
            "zorder": 1
        }
        for key, value in kwargs.items():
            default_kwargs[key] = value

        transform = None
        if mesh.model == Model.HYPERBOLOID:
            transform = self.transform

        triangles = mesh.triangle_coords(self.model, transform=transform)
        polys = PolyCollection(triangles,
                               facecolors=mesh.triangle_colors(),
                               **default_kwargs)
        self.ax.add_collection(polys)
        return polys

    def set_transform(self, transform):
        self.transform = transform

    def add_transform(self, transform):
        self.transform = transform @ self.transform

    def show(self):
        plt.show()

class TilingView:
    """An interactive drawing of a tiling.

    Dragging with the left mouse button pans the view. The depth of the
    tiling and the model used to draw it can be changed with
    `set_depth` and `set_projection`; both redraw the tiling.

    """
    def __init__(self, generator, depth=3, model=Model.POINCARE,
                 camera=None, **kwargs):
        self.generator = generator
        self.model = Model.get(model)

        self.drawing = TilingDrawing(model=self.model, **kwargs)

        if camera is None:
            width, height = self.drawing.fig.canvas.get_width_height()
            camera = Camera(width, height)
        self.camera = camera

        self.depth = depth
        self.mesh = generator.generate(depth)

        self._collection = None
        self._dragging = False
        self._connect()

        self.drawing.draw_plane()
        self.redraw()

    def _connect(self):
        canvas = self.drawing.fig.canvas
        self._callbacks = [
            canvas.mpl_connect("button_press_event", self.on_press),
            canvas.mpl_connect("button_release_event", self.on_release),
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("resize_event", self.on_resize),
        ]

    def set_depth(self, depth):
        # build the new mesh before dropping the old one
        mesh = self.generator.generate(depth)
        self.mesh = mesh
        self.depth = depth
        self.redraw()

    def set_projection(self, model):
        model = Model.get(model)
        if model == self.model:
            return

        # raises DrawingError for models we can't draw
        default_model_limits(model)

        self.model = model
        self.drawing.model = model
        self.redraw()

    def redraw(self):
        if self._collection is not None:
            self._collection.remove()

        self.drawing.set_transform(self.camera.transform)
        self._collection = self.drawing.draw_mesh(self.mesh)
        self.drawing.fig.canvas.draw_idle()

    def on_press(self, event):
        if event.button == LEFT_BUTTON:
            self._dragging = True
            self.camera.reset()
            self.camera.update_delta((event.x, event.y))

    def on_release(self, event):
        if event.button == LEFT_BUTTON:
            self._dragging = False
            self.camera.reset()

    def on_motion(self, event):
        if not self._dragging:
            return

        if self.camera.update_delta((event.x, event.y)):
            self.redraw()

    def on_resize(self, event):
        if event.width <= 0 or event.height <= 0:
            return

        self.camera.resize(event.width, event.height)
        self.redraw()

    def show(self):
        self.drawing.show()
