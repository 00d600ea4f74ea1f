"""Tests for the entity model: identity, geometries, nodes and scenes."""

import numpy as np
import pytest

from threegraph import (
    BoxGeometry,
    CycleError,
    CylinderGeometry,
    DanglingReferenceError,
    Geometry,
    InvalidArgumentError,
    MeshBasicMaterial,
    MeshStandardMaterial,
    Node,
    Scene,
    SphereGeometry,
    Vector3,
)


@pytest.mark.parametrize("factory", [Geometry, BoxGeometry, MeshStandardMaterial, Node])
@pytest.mark.parametrize("missing", [None, ""])
def test_uuid_generated_when_missing(factory, missing):
    first = factory(uuid=missing)
    second = factory(uuid=missing)
    assert first.uuid
    assert first.uuid != second.uuid


def test_uuid_kept_when_given():
    assert BoxGeometry(uuid="g1").uuid == "g1"
    assert Node(uuid="n1").uuid == "n1"


def test_identity_is_uuid_ignoring_case():
    a = BoxGeometry(uuid="ABC-1", width=2)
    b = Geometry(uuid="abc-1")
    assert a == b
    assert hash(a) == hash(b)
    assert BoxGeometry(uuid="abc-2") != a

    # Content does not matter
    assert Node("one", uuid="n") == Node("two", uuid="N")


def test_uuid_is_fixed():
    geometry = BoxGeometry(uuid="g1")
    with pytest.raises(AttributeError):
        geometry.uuid = "g2"
    node = Node(uuid="n1")
    with pytest.raises(AttributeError):
        node.uuid = "n2"


def test_kind_is_fixed():
    geometry = BoxGeometry()
    assert geometry.kind == "BoxGeometry"
    with pytest.raises(AttributeError):
        geometry.kind = "Geometry"

    node = Node(kind="Mesh")
    with pytest.raises(AttributeError):
        node.kind = "Group"


def test_content_stays_mutable():
    geometry = BoxGeometry(width=1)
    geometry.width = 5
    assert geometry.width == 5
    material = MeshBasicMaterial()
    material.color = 0x00FF00
    assert material.color == 0x00FF00


def test_kind_per_variant():
    assert Geometry().kind == "Geometry"
    assert SphereGeometry().kind == "SphereGeometry"
    assert CylinderGeometry().kind == "CylinderGeometry"
    assert MeshStandardMaterial().kind == "MeshStandardMaterial"


def test_add_vertex_triplet():
    geometry = Geometry()
    geometry.add_vertex_triplet(Vector3(1, 2, 3))
    geometry.add_vertex_triplet(Vector3(4, 5, 6))
    assert geometry.data.vertices == [1, 2, 3, 4, 5, 6]
    assert geometry.vertex_count == 2
    np.testing.assert_array_equal(geometry.vertex_array(), [[1, 2, 3], [4, 5, 6]])


def test_add_vertex_triplet_rejects_none():
    geometry = Geometry()
    with pytest.raises(InvalidArgumentError):
        geometry.add_vertex_triplet(None)
    assert geometry.data.vertices == []


def test_add_face_indices():
    geometry = Geometry()
    geometry.add_face_indices(0, 1, 2)
    geometry.add_face_indices(2, 3, 0)
    assert geometry.data.faces == [0, 1, 2, 2, 3, 0]
    assert geometry.face_array().shape == (2, 3)
    with pytest.raises(InvalidArgumentError):
        geometry.add_face_indices(1, None, 2)


def test_geometry_data_defaults():
    data = Geometry().data
    assert data.cast_shadow is True
    assert data.double_sided is True
    assert data.receive_shadow is False
    assert data.scale == 1.0
    assert data.visible is True
    assert data.vertices == [] and data.faces == []
    assert data.colors == [] and data.normals == [] and data.uvs == []


def _assert_outward(geometry):
    vertices = geometry.vertex_array()
    for face in geometry.face_array():
        v0, v1, v2 = vertices[face]
        normal = np.cross(v1 - v0, v2 - v0)
        center = (v0 + v1 + v2) / 3
        assert np.dot(normal, center) > 0


def test_box_build():
    box = BoxGeometry(width=2, height=4, depth=6).build()
    assert box.vertex_count == 24
    assert len(box.face_array()) == 12
    assert len(box.data.uvs) == 24 * 2
    vertices = box.vertex_array()
    np.testing.assert_allclose(vertices.min(axis=0), [-1, -2, -3])
    np.testing.assert_allclose(vertices.max(axis=0), [1, 2, 3])
    _assert_outward(box)


def test_box_build_with_segments():
    box = BoxGeometry(width_segments=2).build()
    # Four faces span X and get two quads each, two faces keep one
    assert len(box.face_array()) == (4 * 2 + 2 * 1) * 2
    assert box.face_array().max() < box.vertex_count
    _assert_outward(box)


def test_sphere_build():
    sphere = SphereGeometry(radius=2, width_segments=8, height_segments=4).build()
    assert sphere.vertex_count == 8 + 3 * 9 + 8
    assert len(sphere.face_array()) == 8 + 2 * 8 * 2 + 8
    assert sphere.face_array().max() < sphere.vertex_count
    np.testing.assert_allclose(np.linalg.norm(sphere.vertex_array(), axis=1), 2.0)


def test_sphere_build_rejects_too_few_segments():
    with pytest.raises(ValueError):
        SphereGeometry(width_segments=2).build()


@pytest.mark.parametrize("open_ended,triangles", [(False, 4 * 6), (True, 2 * 6)])
def test_cylinder_build(open_ended, triangles):
    cylinder = CylinderGeometry(height=2, radial_segments=6, open_ended=open_ended).build()
    assert len(cylinder.face_array()) == triangles
    assert cylinder.face_array().max() < cylinder.vertex_count
    ys = cylinder.vertex_array()[:, 1]
    assert ys.min() == pytest.approx(-1.0)
    assert ys.max() == pytest.approx(1.0)


def test_add_child_sets_parent():
    parent = Node("parent")
    child = parent.add_child(Node("child"))
    assert child.parent is parent
    assert parent.children == [child]
    assert child.depth == 1
    assert child.root is parent


def test_add_child_reparents():
    first = Node("first")
    second = Node("second")
    child = first.add_child(Node("child"))
    second.add_child(child)
    assert first.children == []
    assert second.children == [child]
    assert child.parent is second


def test_add_child_rejects_none():
    with pytest.raises(InvalidArgumentError):
        Node().add_child(None)


def test_add_child_rejects_cycles():
    a = Node("a")
    b = a.add_child(Node("b"))
    c = b.add_child(Node("c"))
    with pytest.raises(CycleError):
        a.add_child(a)
    with pytest.raises(CycleError):
        c.add_child(a)
    with pytest.raises(CycleError):
        b.add_child(a)
    # Tree unchanged
    assert a.parent is None
    assert c.children == []


def test_children_given_to_constructor_get_parent():
    leaf = Node("leaf")
    group = Node("group", kind="Group", children=[leaf])
    assert leaf.parent is group
    assert group.children == [leaf]


def test_remove_child():
    parent = Node("parent")
    child = parent.add_child(Node("child"))
    assert parent.remove_child(child) is True
    assert child.parent is None
    assert parent.remove_child(child) is False


def test_find_and_world_position():
    root = Node("root", position=Vector3(1, 0, 0))
    group = root.add_child(Node("group", position=Vector3(0, 2, 0)))
    leaf = group.add_child(Node("leaf", position=Vector3(0, 0, 3)))
    group.add_child(Node("leaf"))
    assert root.find("leaf") is leaf
    assert len(root.find_all("leaf")) == 2
    assert root.find("missing") is None
    assert leaf.world_position() == Vector3(1, 2, 3)
    assert [n.name for n in root.iter_leaves()] == ["leaf", "leaf"]


def test_iter_nodes_order():
    root = Node("root")
    a = root.add_child(Node("a"))
    a.add_child(Node("a1"))
    a.add_child(Node("a2"))
    root.add_child(Node("b"))
    assert [n.name for n in root.iter_nodes()] == ["root", "a", "a1", "a2", "b"]
    assert [n.name for n in root.iter_nodes(include_self=False)] == ["a", "a1", "a2", "b"]


def test_deep_chain_traversal():
    top = Node("n0", position=Vector3(1, 0, 0))
    bottom = top
    for i in range(1, 3000):
        bottom = bottom.add_child(Node(f"n{i}", position=Vector3(1, 0, 0)))

    assert sum(1 for _ in top.iter_nodes()) == 3000
    assert bottom.depth == 2999
    assert bottom.root is top
    assert bottom.world_position() == Vector3(3000, 0, 0)
    assert top.find("n2999") is bottom

    scene = Scene(top)
    bottom.geometry_ref = "missing"
    with pytest.raises(DanglingReferenceError):
        scene.validate()


def test_scene_default_root():
    scene = Scene()
    assert scene.root.kind == "Scene"
    assert scene.geometries == []
    assert scene.materials == []


def test_add_geometry_keeps_first_entry():
    scene = Scene()
    first = BoxGeometry(uuid="g1", width=1)
    second = BoxGeometry(uuid="G1", width=2)
    assert scene.add_geometry(first) is True
    assert scene.add_geometry(second) is False
    assert scene.geometries == [first]
    assert scene.get_geometry("g1") is first


def test_add_material_keeps_first_entry():
    scene = Scene()
    first = MeshStandardMaterial(uuid="m1")
    assert scene.add_material(first) is True
    assert scene.add_material(MeshBasicMaterial(uuid="m1")) is False
    assert scene.get_material("M1") is first


@pytest.mark.parametrize("method", ["add_geometry", "add_material", "import_geometry", "import_material"])
def test_collection_mutators_reject_none(method):
    with pytest.raises(InvalidArgumentError):
        getattr(Scene(), method)(None)


def test_import_geometry_overwrites():
    scene = Scene()
    scene.add_geometry(BoxGeometry(uuid="g1", width=1))
    replacement = BoxGeometry(uuid="g1", width=2)
    scene.import_geometry(replacement)
    assert scene.geometries == [replacement]
    assert scene.get_geometry("g1").width == 2


def test_references_resolve():
    scene = Scene()
    box = BoxGeometry()
    material = MeshStandardMaterial()
    scene.add_geometry(box)
    scene.add_material(material)
    node = scene.root.add_child(
        Node(kind="Mesh", geometry_ref=box.uuid.upper(), material_ref=material.uuid)
    )
    assert scene.geometry_for(node) is box
    assert scene.material_for(node) is material
    scene.validate()


def test_validate_reports_dangling_reference():
    scene = Scene()
    scene.root.add_child(Node(kind="Mesh", geometry_ref="missing"))
    with pytest.raises(DanglingReferenceError) as excinfo:
        scene.validate()
    assert excinfo.value.uuid == "missing"


def test_prune_removes_unreferenced_entries():
    scene = Scene()
    used = BoxGeometry()
    scene.add_geometry(used)
    scene.add_geometry(SphereGeometry())
    scene.add_material(MeshStandardMaterial())
    scene.root.add_child(Node(kind="Mesh", geometry_ref=used.uuid))
    assert scene.prune() == 2
    assert scene.geometries == [used]
    assert scene.materials == []
