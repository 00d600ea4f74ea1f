"""Geometry entities.

A geometry stores its vertex data in the flat layout of the three.js JSON
format: ``vertices`` is a sequence of x, y, z triplets, ``faces`` a sequence
of vertex indices (three per triangle). Concrete variants such as
:class:`BoxGeometry` add their own dimension fields and can fill the data
payload from those dimensions with :meth:`Geometry.build`.

Face winding follows the usual convention: counter-clockwise when viewed
from outside, so the normal of triangle (A, B, C) is (B-A) x (C-A).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from ..errors import InvalidArgumentError
from .entity import Entity
from .vector import Vector3


@dataclass
class GeometryData:
    """Vertex payload of a geometry (the ``data`` object on the wire)."""

    cast_shadow: bool = True
    colors: list[int] = field(default_factory=list)
    double_sided: bool = True
    faces: list[int] = field(default_factory=list)
    normals: list[float] = field(default_factory=list)
    receive_shadow: bool = False
    scale: float = 1.0
    uvs: list[float] = field(default_factory=list)
    vertices: list[float] = field(default_factory=list)
    visible: bool = True


@dataclass(eq=False)
class Geometry(Entity):
    """Base geometry with free-form vertex data.

    Attributes:
        uuid: Identifier; generated when not given
        data: Vertex payload
    """

    TYPE: ClassVar[str] = "Geometry"

    # Variant dimension fields: attribute name -> wire key
    WIRE_FIELDS: ClassVar[dict[str, str]] = {}

    uuid: str | None = None
    data: GeometryData = field(default_factory=GeometryData)

    def __post_init__(self) -> None:
        self._init_uuid()

    @property
    def kind(self) -> str:
        """Discriminator tag of this variant."""
        return self.TYPE

    def add_vertex_triplet(self, vertex: Vector3) -> None:
        """Append one vertex position.

        Raises:
            InvalidArgumentError: If vertex is None
        """
        if vertex is None:
            raise InvalidArgumentError("vertex must not be None")
        self.data.vertices.extend((vertex.x, vertex.y, vertex.z))

    def add_face_indices(self, *indices: int) -> None:
        """Append face vertex indices.

        Raises:
            InvalidArgumentError: If any index is None
        """
        if any(index is None for index in indices):
            raise InvalidArgumentError("face indices must not be None")
        self.data.faces.extend(int(index) for index in indices)

    @property
    def vertex_count(self) -> int:
        """Number of complete vertex triplets."""
        return len(self.data.vertices) // 3

    def vertex_array(self) -> NDArray[np.float64]:
        """Vertices as an Nx3 array."""
        return np.asarray(self.data.vertices, dtype=np.float64).reshape(-1, 3)

    def face_array(self) -> NDArray[np.int64]:
        """Faces as an Mx3 array of triangle indices."""
        return np.asarray(self.data.faces, dtype=np.int64).reshape(-1, 3)

    def build(self) -> Geometry:
        """Fill ``data`` from the variant's dimensions.

        The base geometry has no dimensions, so its data is left alone.

        Returns:
            This geometry (for chaining)
        """
        return self

    def _store(
        self,
        vertices: list[list[float]],
        faces: list[list[int]],
        uvs: list[list[float]],
    ) -> None:
        self.data.vertices = np.asarray(vertices, dtype=np.float64).ravel().tolist()
        self.data.faces = np.asarray(faces, dtype=np.int64).ravel().tolist()
        self.data.uvs = np.asarray(uvs, dtype=np.float64).ravel().tolist()
        self.data.normals = []


@dataclass(eq=False)
class BoxGeometry(Geometry):
    """Axis-aligned box centered at the origin.

    Attributes:
        width: Size along X
        height: Size along Y
        depth: Size along Z
        width_segments: Subdivisions along X
        height_segments: Subdivisions along Y
        depth_segments: Subdivisions along Z
    """

    TYPE: ClassVar[str] = "BoxGeometry"
    WIRE_FIELDS: ClassVar[dict[str, str]] = {
        "width": "width",
        "height": "height",
        "depth": "depth",
        "width_segments": "widthSegments",
        "height_segments": "heightSegments",
        "depth_segments": "depthSegments",
    }

    width: float = 1.0
    height: float = 1.0
    depth: float = 1.0
    width_segments: int = 1
    height_segments: int = 1
    depth_segments: int = 1

    def build(self) -> BoxGeometry:
        """Triangulate the six faces, each as its own grid of vertices."""
        hx, hy, hz = self.width / 2, self.height / 2, self.depth / 2
        sx, sy, sz = (
            max(1, self.width_segments),
            max(1, self.height_segments),
            max(1, self.depth_segments),
        )

        # (origin corner, u edge, v edge, u segments, v segments), CCW from outside
        face_defs = [
            ([-hx, -hy, -hz], [0, 2 * hy, 0], [2 * hx, 0, 0], sy, sx),  # back (-Z)
            ([+hx, -hy, +hz], [0, 2 * hy, 0], [-2 * hx, 0, 0], sy, sx),  # front (+Z)
            ([-hx, -hy, +hz], [0, 2 * hy, 0], [0, 0, -2 * hz], sy, sz),  # left (-X)
            ([+hx, -hy, -hz], [0, 2 * hy, 0], [0, 0, 2 * hz], sy, sz),  # right (+X)
            ([-hx, -hy, +hz], [0, 0, -2 * hz], [2 * hx, 0, 0], sz, sx),  # bottom (-Y)
            ([-hx, +hy, -hz], [0, 0, 2 * hz], [2 * hx, 0, 0], sz, sx),  # top (+Y)
        ]

        vertices: list[list[float]] = []
        uvs: list[list[float]] = []
        faces: list[list[int]] = []

        for origin, u_edge, v_edge, nu, nv in face_defs:
            origin_arr = np.asarray(origin, dtype=np.float64)
            u_arr = np.asarray(u_edge, dtype=np.float64)
            v_arr = np.asarray(v_edge, dtype=np.float64)
            base_idx = len(vertices)

            for j in range(nv + 1):
                for i in range(nu + 1):
                    point = origin_arr + u_arr * (i / nu) + v_arr * (j / nv)
                    vertices.append(point.tolist())
                    uvs.append([j / nv, i / nu])

            row = nu + 1
            for j in range(nv):
                for i in range(nu):
                    a = base_idx + j * row + i
                    b = a + 1
                    c = a + row + 1
                    d = a + row
                    faces.append([a, b, c])
                    faces.append([a, c, d])

        self._store(vertices, faces, uvs)
        return self


@dataclass(eq=False)
class SphereGeometry(Geometry):
    """UV sphere centered at the origin.

    Attributes:
        radius: Sphere radius
        width_segments: Segments around the equator (longitude)
        height_segments: Rings from pole to pole (latitude)
    """

    TYPE: ClassVar[str] = "SphereGeometry"
    WIRE_FIELDS: ClassVar[dict[str, str]] = {
        "radius": "radius",
        "width_segments": "widthSegments",
        "height_segments": "heightSegments",
    }

    radius: float = 1.0
    width_segments: int = 32
    height_segments: int = 16

    def build(self) -> SphereGeometry:
        """Triangulate the sphere with separate pole vertices per segment."""
        segments = self.width_segments
        rings = self.height_segments
        if segments < 3 or rings < 2:
            raise ValueError(
                f"SphereGeometry needs at least 3 width and 2 height segments, "
                f"got {segments}x{rings}"
            )

        vertices: list[list[float]] = []
        uvs: list[list[float]] = []
        faces: list[list[int]] = []

        # Top pole, one vertex per segment so each keeps its own U
        for seg in range(segments):
            vertices.append([0.0, self.radius, 0.0])
            uvs.append([(seg + 0.5) / segments, 1.0])

        for ring in range(1, rings):
            phi = np.pi * ring / rings
            y = self.radius * np.cos(phi)
            ring_radius = self.radius * np.sin(phi)
            for seg in range(segments + 1):  # +1 for seam vertex
                theta = 2 * np.pi * seg / segments
                vertices.append([ring_radius * np.cos(theta), y, ring_radius * np.sin(theta)])
                uvs.append([seg / segments, 1.0 - ring / rings])

        for seg in range(segments):
            vertices.append([0.0, -self.radius, 0.0])
            uvs.append([(seg + 0.5) / segments, 0.0])

        first_ring_start = segments
        for seg in range(segments):
            faces.append([seg, first_ring_start + seg + 1, first_ring_start + seg])

        for ring in range(rings - 2):
            ring_start = segments + ring * (segments + 1)
            next_ring_start = ring_start + segments + 1
            for seg in range(segments):
                tl = ring_start + seg
                tr = tl + 1
                bl = next_ring_start + seg
                br = bl + 1
                faces.append([tl, br, bl])
                faces.append([tl, tr, br])

        last_ring_start = segments + (rings - 2) * (segments + 1)
        bottom_pole_start = last_ring_start + segments + 1
        for seg in range(segments):
            faces.append([last_ring_start + seg, last_ring_start + seg + 1, bottom_pole_start + seg])

        self._store(vertices, faces, uvs)
        return self


@dataclass(eq=False)
class CylinderGeometry(Geometry):
    """Cylinder (or truncated cone) along the Y axis, centered at the origin.

    Attributes:
        radius_top: Radius of the top cap
        radius_bottom: Radius of the bottom cap
        height: Size along Y
        radial_segments: Segments around the circumference
        open_ended: Skip the two caps when True
    """

    TYPE: ClassVar[str] = "CylinderGeometry"
    WIRE_FIELDS: ClassVar[dict[str, str]] = {
        "radius_top": "radiusTop",
        "radius_bottom": "radiusBottom",
        "height": "height",
        "radial_segments": "radialSegments",
        "open_ended": "openEnded",
    }

    radius_top: float = 1.0
    radius_bottom: float = 1.0
    height: float = 1.0
    radial_segments: int = 32
    open_ended: bool = False

    def build(self) -> CylinderGeometry:
        """Triangulate the side and, unless open ended, both caps."""
        segments = self.radial_segments
        if segments < 3:
            raise ValueError(f"CylinderGeometry needs at least 3 radial segments, got {segments}")

        half_height = self.height / 2
        vertices: list[list[float]] = []
        uvs: list[list[float]] = []
        faces: list[list[int]] = []

        def ring(radius: float, y: float, seam: bool) -> int:
            start = len(vertices)
            count = segments + 1 if seam else segments
            for seg in range(count):
                theta = 2 * np.pi * seg / segments
                vertices.append([radius * np.cos(theta), y, radius * np.sin(theta)])
                if seam:
                    uvs.append([seg / segments, 1.0 if y > 0 else 0.0])
                else:
                    uvs.append([0.5 + 0.5 * np.cos(theta), 0.5 + 0.5 * np.sin(theta)])
            return start

        side_top = ring(self.radius_top, half_height, seam=True)
        side_bottom = ring(self.radius_bottom, -half_height, seam=True)
        for seg in range(segments):
            tl = side_top + seg
            tr = tl + 1
            bl = side_bottom + seg
            br = bl + 1
            faces.append([tl, br, bl])
            faces.append([tl, tr, br])

        if not self.open_ended:
            top_center = len(vertices)
            vertices.append([0.0, half_height, 0.0])
            uvs.append([0.5, 0.5])
            top_ring = ring(self.radius_top, half_height, seam=False)
            for seg in range(segments):
                next_seg = (seg + 1) % segments
                faces.append([top_center, top_ring + next_seg, top_ring + seg])

            bottom_center = len(vertices)
            vertices.append([0.0, -half_height, 0.0])
            uvs.append([0.5, 0.5])
            bottom_ring = ring(self.radius_bottom, -half_height, seam=False)
            for seg in range(segments):
                next_seg = (seg + 1) % segments
                faces.append([bottom_center, bottom_ring + seg, bottom_ring + next_seg])

        self._store(vertices, faces, uvs)
        return self
