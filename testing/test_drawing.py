from types import SimpleNamespace

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

import pytest
import numpy as np

from hypertile import drawtools, hyperbolic, tiling
from hypertile.drawtools import DrawingError
from hypertile.hyperbolic import Model

@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")

@pytest.fixture
def generator():
    return tiling.TilingGenerator(4, 5, "ff8800;2,2,2,2\n0066cc;1,1,1,1",
                                  subdiv=2)

@pytest.fixture(params=[Model.POINCARE, Model.KLEIN])
def models_figure(request):
    return drawtools.TilingDrawing(model=request.param)

@pytest.fixture
def view(generator):
    return drawtools.TilingView(generator, depth=1)

def test_draw_mesh(models_figure, generator):
    mesh = generator.generate(2)
    models_figure.draw_plane()
    polys = models_figure.draw_mesh(mesh)

    assert len(polys.get_paths()) == mesh.num_triangles

def test_draw_projected_mesh(generator):
    figure = drawtools.TilingDrawing(model="klein")
    mesh = generator.generate(1, model="klein")

    polys = figure.draw_mesh(mesh)
    assert len(polys.get_paths()) == mesh.num_triangles

def test_unsupported_model():
    with pytest.raises(DrawingError):
        drawtools.TilingDrawing(model=Model.HYPERBOLOID)

def test_drawing_transform(models_figure):
    iso = hyperbolic.translation([0.2, 0.])
    models_figure.add_transform(iso)
    models_figure.add_transform(iso)

    assert np.allclose(models_figure.transform, iso @ iso)

def test_view_set_depth(view):
    triangles = view.mesh.num_triangles
    old_mesh = view.mesh

    view.set_depth(2)

    assert view.depth == 2
    assert view.mesh.num_triangles > triangles
    assert old_mesh.num_tiles == 5

def test_view_set_projection(view):
    view.set_projection("klein")
    assert view.model == Model.KLEIN
    assert view.drawing.model == Model.KLEIN

    with pytest.raises(DrawingError):
        view.set_projection("hyperboloid")

    assert view.model == Model.KLEIN

def test_view_drag(view):
    view.on_press(SimpleNamespace(button=1, x=100., y=100.))
    view.on_motion(SimpleNamespace(x=100., y=140.))
    view.on_release(SimpleNamespace(button=1, x=100., y=140.))

    moved = view.camera.transform
    assert not np.allclose(moved, np.identity(3))
    assert np.allclose(view.drawing.transform, moved)

    # motion without a pressed button does nothing
    view.on_motion(SimpleNamespace(x=300., y=300.))
    assert np.allclose(view.camera.transform, moved)

def test_view_right_button_ignored(view):
    view.on_press(SimpleNamespace(button=3, x=100., y=100.))
    view.on_motion(SimpleNamespace(x=100., y=140.))

    assert np.allclose(view.camera.transform, np.identity(3))

def test_view_resize(view):
    view.on_resize(SimpleNamespace(width=1000, height=500))
    assert np.allclose(view.camera.viewport[0, 0], 0.5)

    view.on_resize(SimpleNamespace(width=0, height=0))
    assert np.allclose(view.camera.viewport[0, 0], 0.5)
