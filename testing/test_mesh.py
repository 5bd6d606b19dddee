import pytest
import numpy as np

from hypertile import hyperbolic, mesh, tiling
from hypertile import GeometryError
from hypertile.hyperbolic import Model

SUBDIV = 4

@pytest.fixture
def checker():
    return tiling.TilingGenerator(4, 5, "ff8800;2,2,2,2\n0066cc;1,1,1,1",
                                  subdiv=SUBDIV)

@pytest.fixture
def checker_mesh(checker):
    return checker.generate(1)

def test_mesh_counts(checker, checker_mesh):
    points = checker.template.num_points
    triangles = checker.template.num_triangles

    assert points == 1 + 4 * SUBDIV
    assert checker_mesh.num_tiles == 5
    assert checker_mesh.num_vertices == 5 * points
    assert checker_mesh.num_triangles == 5 * triangles
    assert len(checker_mesh.indices) == 3 * 5 * triangles

def test_index_offsets(checker, checker_mesh):
    points = checker.template.num_points
    triangles = checker_mesh.triangles.reshape(5, -1, 3)

    for k, block in enumerate(triangles):
        assert block.min() == k * points
        assert block.max() < (k + 1) * points
        assert np.array_equal(block - k * points, checker.template.triangles)

def test_mesh_colors(checker_mesh):
    points = checker_mesh.num_vertices // 5
    colors = checker_mesh.colors.reshape(5, points, 3)

    root_color = (1.0, 0x88 / 255, 0.0)
    child_color = (0.0, 0x66 / 255, 0xcc / 255)

    assert np.allclose(colors[0], root_color)
    assert np.allclose(colors[1:], child_color)
    assert np.allclose(checker_mesh.triangle_colors()[0], root_color)

def test_mesh_on_hyperboloid(checker_mesh):
    assert checker_mesh.model == Model.HYPERBOLOID
    assert np.allclose(hyperbolic.hyperboloid_normsq(checker_mesh.positions),
                       1.0)

def test_project(checker_mesh):
    klein = checker_mesh.project(Model.KLEIN)
    poincare = checker_mesh.project("poincare")

    assert klein.shape == (checker_mesh.num_vertices, 2)
    assert np.all(np.linalg.norm(klein, axis=-1) < 1)
    assert np.allclose(hyperbolic.kleinian_to_poincare(klein), poincare)

def test_project_with_transform(checker_mesh):
    iso = hyperbolic.translation([0.3, -0.2])
    moved = checker_mesh.project(Model.HYPERBOLOID, transform=iso)

    assert np.allclose(moved[0], hyperbolic.apply(iso, hyperbolic.origin()))

def test_projected_mesh(checker):
    klein_mesh = checker.generate(1, model=Model.KLEIN)

    assert np.allclose(klein_mesh.project(Model.KLEIN),
                       checker.generate(1).project(Model.KLEIN))

    with pytest.raises(GeometryError):
        klein_mesh.project(Model.POINCARE)

    with pytest.raises(GeometryError):
        klein_mesh.project(Model.KLEIN, transform=np.identity(3))

def test_triangle_coords(checker_mesh):
    coords = checker_mesh.triangle_coords(Model.KLEIN)
    assert coords.shape == (checker_mesh.num_triangles, 3, 2)

def test_mesh_readonly(checker_mesh):
    with pytest.raises(ValueError):
        checker_mesh.positions[0, 0] = 0.5

    with pytest.raises(ValueError):
        checker_mesh.indices[0] = 1

def test_buffers(checker_mesh):
    vertices = checker_mesh.vertex_buffer()

    assert vertices.dtype == np.float32
    assert vertices.shape == (checker_mesh.num_vertices, 6)
    assert checker_mesh.index_buffer().dtype == np.uint32

def test_regenerate_is_fresh(checker, checker_mesh):
    deeper = checker.generate(2)

    assert deeper.num_tiles > checker_mesh.num_tiles
    assert checker_mesh.num_tiles == 5
    assert not np.shares_memory(deeper.positions, checker_mesh.positions)

def test_assemble_nothing(checker):
    empty = mesh.assemble([], checker.template, checker.table)

    assert empty.num_vertices == 0
    assert empty.num_triangles == 0
    assert empty.num_tiles == 0

def test_bad_mesh():
    with pytest.raises(GeometryError):
        mesh.Mesh(np.zeros((3, 3)), np.zeros((2, 3)), [0, 1, 2])

    with pytest.raises(GeometryError):
        mesh.Mesh(np.zeros((3, 3)), np.zeros((3, 3)), [0, 1])

    with pytest.raises(GeometryError):
        mesh.Mesh(np.zeros((3, 3)), np.zeros((3, 3)), [0, 1, 3])
