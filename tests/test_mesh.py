import pytest

from voxelcore.mesh import Face, Instance, Mesh, quad_indices, quad_vertices
from voxelcore.voxel import Texture


def test_instance_bytes_layout():
    data = Instance((1, -1, 3), 1).to_bytes()
    assert data == (
        b"\x01\x00\x00\x00" b"\xff\xff\xff\xff" b"\x03\x00\x00\x00" b"\x01\x00\x00\x00"
    )
    assert len(data) == Instance.SIZE


def test_add_places_instance_in_face_list():
    mesh = Mesh()
    mesh.add(Face.PY, (4, 5, 6), Texture.DIRT)
    assert mesh.py == [Instance((4, 5, 6), int(Texture.DIRT))]
    assert mesh.faces(Face.PY) is mesh.py
    assert len(mesh) == 1


@pytest.mark.parametrize("face", list(Face))
def test_each_face_has_own_list(face):
    mesh = Mesh()
    mesh.add(face, (0, 0, 0), Texture.STONE)
    for other in Face:
        expected = 1 if other is face else 0
        assert len(mesh.faces(other)) == expected


def test_add_converts_position_to_ints():
    mesh = Mesh()
    mesh.add(Face.NX, [1.0, 2.0, 3.0], Texture.STONE)
    assert mesh.nx[0].pos == (1, 2, 3)


def test_addition_concatenates_in_order():
    first = Mesh()
    first.add(Face.NZ, (0, 0, 0), Texture.STONE)
    second = Mesh()
    second.add(Face.NZ, (1, 1, 1), Texture.DIRT)
    second.add(Face.PX, (2, 2, 2), Texture.DIRT)
    combined = first + second
    assert [i.pos for i in combined.nz] == [(0, 0, 0), (1, 1, 1)]
    assert [i.pos for i in combined.px] == [(2, 2, 2)]
    assert len(first) == 1


def test_in_place_addition_extends():
    mesh = Mesh()
    mesh.add(Face.PZ, (0, 0, 0), Texture.STONE)
    other = Mesh()
    other.add(Face.PZ, (9, 9, 9), Texture.STONE)
    before = mesh
    mesh += other
    assert mesh is before
    assert [i.pos for i in mesh.pz] == [(0, 0, 0), (9, 9, 9)]


def test_extend_collects_all_faces():
    mesh = Mesh()
    other = Mesh()
    for face in Face:
        other.add(face, (int(face), 0, 0), Texture.DIRT)
    mesh.extend(other)
    assert len(mesh) == len(other)
    assert mesh == other


def test_quad_geometry():
    assert quad_vertices() == [0, 1, 2, 3]
    assert quad_indices() == [0, 1, 2, 0, 2, 3]
    assert set(quad_indices()) <= set(quad_vertices())