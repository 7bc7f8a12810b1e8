"""STL export functionality using numpy-stl."""

from __future__ import annotations

from collections.abc import Iterable
from io import BytesIO
from pathlib import Path

import numpy as np
from stl import Mode, mesh

from carcass.domain import PanelSegment
from carcass.domain.services import SegmentScene3DMapper
from carcass.domain.value_objects import BoundingBox3D


class StlMeshBuilder:
    """Builds STL meshes from 3D bounding boxes.

    Coordinate System Transformation:
    The mapped boxes use Z-up coordinates (X=width, Y=depth, Z=height).
    Many STL viewers use Y-up coordinates, so vertices are written as
    (x, z, y): the carcass height becomes the viewer's vertical axis.
    """

    def build_box_mesh(self, box: BoundingBox3D) -> mesh.Mesh:
        """Create a 12-triangle mesh for one box."""
        vertices = np.array([(x, z, y) for x, y, z in box.get_vertices()])
        triangles = box.get_triangles()

        box_mesh = mesh.Mesh(np.zeros(len(triangles), dtype=mesh.Mesh.dtype))
        for i, (v0, v1, v2) in enumerate(triangles):
            box_mesh.vectors[i] = [vertices[v0], vertices[v1], vertices[v2]]
        return box_mesh

    def combine_meshes(self, meshes: list[mesh.Mesh]) -> mesh.Mesh:
        """Combine multiple meshes into a single mesh."""
        if not meshes:
            return mesh.Mesh(np.zeros(0, dtype=mesh.Mesh.dtype))

        total_faces = sum(m.vectors.shape[0] for m in meshes)
        combined = mesh.Mesh(np.zeros(total_faces, dtype=mesh.Mesh.dtype))

        offset = 0
        for m in meshes:
            num_faces = m.vectors.shape[0]
            combined.vectors[offset : offset + num_faces] = m.vectors
            offset += num_faces

        return combined


class StlExporter:
    """Exports panel segments to STL.

    Segments are placed in 3D by ``SegmentScene3DMapper``; the exporter
    only turns boxes into triangles.
    """

    def __init__(
        self,
        mesh_builder: StlMeshBuilder | None = None,
        mapper: SegmentScene3DMapper | None = None,
    ) -> None:
        self.mesh_builder = mesh_builder or StlMeshBuilder()
        self.mapper = mapper or SegmentScene3DMapper()

    def export(self, segments: Iterable[PanelSegment]) -> mesh.Mesh:
        """Build one combined mesh for ``segments``."""
        meshes = [
            self.mesh_builder.build_box_mesh(panel.box)
            for panel in self.mapper.map_segments(segments)
        ]
        return self.mesh_builder.combine_meshes(meshes)

    def export_to_file(self, segments: Iterable[PanelSegment], filepath: Path) -> None:
        self.export(segments).save(str(filepath))

    def export_to_bytes(
        self, segments: Iterable[PanelSegment], name: str = "carcass.stl"
    ) -> bytes:
        """Binary STL content; ``name`` goes into the 80-byte header."""
        buffer = BytesIO()
        self.export(segments).save(name, fh=buffer, mode=Mode.BINARY)
        return buffer.getvalue()
