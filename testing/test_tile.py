import pytest
import numpy as np

from hypertile import hyperbolic, tile
from hypertile import TilingError

@pytest.fixture
def params():
    return tile.polygon_parameters(4, 5)

@pytest.fixture
def square(params):
    return tile.generate_polygon(4, params.klein_radius, subdiv=4)

def corners(template, sides, subdiv):
    return template.points[1::subdiv][:sides]

def test_polygon_parameters(params):
    v = np.cos(np.pi / 5) / np.sin(np.pi / 4)
    inradius = np.arccosh(v)

    assert np.allclose(params.cosh_inradius, v)
    assert np.allclose(params.sinh_inradius, np.sinh(inradius))
    assert np.allclose(params.klein_radius,
                       np.tanh(inradius) / np.cos(np.pi / 4))
    assert np.allclose(params.step_length, np.sinh(2 * inradius))

@pytest.mark.parametrize("p, q", [(4, 4), (3, 6), (6, 3), (3, 3), (5, 3),
                                  (2, 7), (7, 2)])
def test_non_hyperbolic(p, q):
    assert not tile.is_hyperbolic(p, q)
    with pytest.raises(TilingError):
        tile.polygon_parameters(p, q)

@pytest.mark.parametrize("p, q", [(4, 5), (3, 7), (7, 3), (5, 4), (8, 8)])
def test_hyperbolic(p, q):
    assert tile.is_hyperbolic(p, q)
    assert tile.polygon_parameters(p, q).cosh_inradius > 1

def test_template_shape(square):
    assert square.points.shape == (17, 3)
    assert square.triangles.shape == (16, 3)
    assert square.num_points == 17
    assert square.num_triangles == 16

def test_template_on_hyperboloid(square):
    assert np.allclose(square.points[0], hyperbolic.origin())
    assert np.allclose(hyperbolic.hyperboloid_normsq(square.points), 1.0)

def test_template_fan(square):
    assert np.all(square.triangles[:, 0] == 0)
    assert set(square.triangles[:, 1:].flatten()) == set(range(1, 17))

def test_template_corners(square, params):
    klein = hyperbolic.project(corners(square, 4, 4), model="klein")
    assert np.allclose(np.linalg.norm(klein, axis=-1), params.klein_radius)

def test_template_orientation(square):
    # every triangle in the fan should be counterclockwise
    coords = hyperbolic.project(square.points, model="klein")[square.triangles]
    e1 = coords[:, 1] - coords[:, 0]
    e2 = coords[:, 2] - coords[:, 0]
    assert np.all(e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0] > 0)

def test_template_readonly(square):
    with pytest.raises(ValueError):
        square.points[0, 0] = 1.0

@pytest.mark.parametrize("p, q", [(4, 5), (5, 4), (3, 7), (7, 3)])
def test_neighbor_shares_edge(p, q):
    params = tile.polygon_parameters(p, q)
    template = tile.generate_polygon(p, params.klein_radius, subdiv=2)

    forward = (hyperbolic.translation([-params.step_length, 0.]) @
               hyperbolic.turn_around())

    ours = corners(template, p, 2)
    theirs = hyperbolic.apply(forward, ours)

    distances = np.linalg.norm(theirs[:, np.newaxis] - ours[np.newaxis], axis=-1)
    shared = np.count_nonzero(distances.min(axis=-1) < 1e-8)
    assert shared == 2

def test_bad_polygon():
    with pytest.raises(TilingError):
        tile.generate_polygon(2, 0.5)

    with pytest.raises(TilingError):
        tile.generate_polygon(4, 0.5, subdiv=0)
