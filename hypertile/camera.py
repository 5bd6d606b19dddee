"""Track the viewpoint of a drawing of the hyperbolic plane.

The camera is a single isometry, built up by composing translations as
the user drags the view around. Drags are given as pointer deltas in
screen pixels (with the y axis pointing up) and converted to
translations using the height of the viewport, so that dragging across
the full height of the view moves the plane by 2 units (the diameter
of the disk) in the local metric.

The camera's state is read by whatever draws the plane and written by
whatever handles input, so all access goes through a lock.

"""

import threading

import numpy as np

from hypertile import hyperbolic
from hypertile.base import GeometryError

class CameraController:
    """Turn a stream of pointer positions into pointer deltas."""

    def __init__(self):
        self.value = None

    def update(self, pos):
        """Record a new pointer position.

        Returns
        -------
        ndarray or None
            The change since the last recorded position, or `None` if
            this is the first position of a drag.

        """
        pos = np.array(pos, dtype=float)
        old, self.value = self.value, pos
        if old is None:
            return None

        return pos - old

    def reset(self):
        self.value = None

def ortho(aspect):
    """Get the 4x4 orthographic matrix scaling x by 1 / aspect, and
    remapping depth from [-1, 1] to [0, 1].

    """
    if aspect <= 0:
        raise GeometryError(
            "Viewport aspect ratio must be positive, got {}".format(aspect)
        )

    return np.array([
        [1.0 / aspect, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, -0.5, 0.5],
        [0.0, 0.0, 0.0, 1.0]
    ])

def embed_isometry(iso):
    """Embed a 3x3 isometry in the upper left block of a 4x4 matrix."""
    mat = np.identity(4)
    mat[:3, :3] = iso
    return mat

class Camera:
    """The current viewpoint, and the shape of the viewport.

    Attributes
    ----------
    transform : ndarray
        The isometry applied to the plane before drawing. Reading this
        attribute returns a copy.
    viewport : ndarray
        4x4 orthographic scaling matrix for the viewport's aspect ratio.

    """
    def __init__(self, width=1.0, height=1.0, transform=None):
        self._lock = threading.Lock()
        self.controller = CameraController()

        self._transform = hyperbolic.identity()
        if transform is not None:
            self._transform = np.array(transform, dtype=float)

        self.width = None
        self.height = None
        self._viewport = None
        self.resize(width, height)

    @property
    def transform(self):
        with self._lock:
            return self._transform.copy()

    @property
    def viewport(self):
        with self._lock:
            return self._viewport.copy()

    def resize(self, width, height):
        """Update the viewport for a new size (in pixels)."""
        if width <= 0 or height <= 0:
            raise GeometryError(
                "Viewport dimensions must be positive, got {}x{}".format(
                    width, height)
            )

        viewport = ortho(width / height)
        with self._lock:
            self.width = width
            self.height = height
            self._viewport = viewport

    def update_viewport(self, aspect):
        viewport = ortho(aspect)
        with self._lock:
            self._viewport = viewport

    def translate(self, delta):
        """Move the view by a translation, given in plane coordinates.

        The translation is composed on the left, so successive drags
        always move the view in screen directions, no matter how the
        view has already been moved.

        """
        iso = hyperbolic.translation(delta)
        with self._lock:
            self._transform = iso @ self._transform

    def apply_drag(self, delta):
        """Move the view by a pointer delta, given in screen pixels."""
        with self._lock:
            scale = 2.0 / self.height

        self.translate(np.asarray(delta, dtype=float) * scale)

    def update_delta(self, pos):
        """Feed a pointer position (in screen pixels) from an ongoing drag.

        Returns
        -------
        bool
            `True` if the view moved (so it should be redrawn).

        """
        delta = self.controller.update(pos)
        if delta is None:
            return False

        self.apply_drag(delta)
        return True

    def reset(self):
        """Forget the pointer position, so that the next position starts a
        new drag. The view itself is unchanged.

        """
        self.controller.reset()

    def uniform(self):
        """Get the (viewport, transform) pair as 4x4 float32 matrices."""
        with self._lock:
            return (self._viewport.astype(np.float32),
                    embed_isometry(self._transform).astype(np.float32))
