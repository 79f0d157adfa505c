# core/geometry.py

import logging
from typing import Sequence

import numpy as np

from .common_types import BoundingBox, Mesh, MeshProperties, StlEncoding

logger = logging.getLogger(__name__)

def calculate_bounding_box(mesh: Mesh) -> BoundingBox:
    """
    Component-wise min/max over every vertex of every facet.

    An empty mesh yields an all-zero box rather than infinities, which is how
    "no geometry" is represented downstream.
    """
    if mesh.is_empty:
        return BoundingBox()

    points = mesh.triangles.reshape(-1, 3)
    min_coords = points.min(axis=0)
    max_coords = points.max(axis=0)
    size = max_coords - min_coords

    return BoundingBox(
        min_x=float(min_coords[0]), max_x=float(max_coords[0]),
        min_y=float(min_coords[1]), max_y=float(max_coords[1]),
        min_z=float(min_coords[2]), max_z=float(max_coords[2]),
        width=float(size[0]), height=float(size[1]), depth=float(size[2]),
    )

def signed_tetrahedron_volume(v0: Sequence[float], v1: Sequence[float], v2: Sequence[float]) -> float:
    """
    Signed volume of the tetrahedron spanned by the origin and a triangle.

    v0 . (v1 x v2) / 6, positive when the triangle winds counter-clockwise
    seen from outside the origin. Scalar form of the per-facet term that
    calculate_volume sums in vectorised form; used to spot-check single facets.
    """
    return (
        v0[0] * (v1[1] * v2[2] - v1[2] * v2[1])
        - v0[1] * (v1[0] * v2[2] - v1[2] * v2[0])
        + v0[2] * (v1[0] * v2[1] - v1[1] * v2[0])
    ) / 6.0

def calculate_volume(mesh: Mesh) -> float:
    """
    Enclosed volume via the divergence theorem, in cubic model units (mm^3).

    Sums signed_tetrahedron_volume over every facet (vectorised) and returns the absolute
    value of the total. Closure is not checked: an open or inconsistently
    wound mesh gives a deterministic but meaningless number.
    """
    if mesh.is_empty:
        return 0.0
    v0 = mesh.triangles[:, 0]
    v1 = mesh.triangles[:, 1]
    v2 = mesh.triangles[:, 2]
    vol6 = np.einsum("ij,ij->i", v0, np.cross(v1, v2))
    return abs(float(vol6.sum())) / 6.0

def get_mesh_properties(mesh: Mesh, encoding: StlEncoding) -> MeshProperties:
    """
    Extracts bounding box and volume from a decoded mesh.

    Args:
        mesh: The decoded mesh.
        encoding: Which STL encoding it came from (reported as metadata).

    Returns:
        A MeshProperties object. Volume is reported in mm^3 and cm^3, assuming
        the STL is in millimetres.
    """
    bbox = calculate_bounding_box(mesh)
    volume_mm3 = calculate_volume(mesh)
    if mesh.is_empty:
        logger.warning("Mesh has no facets; geometry is reported as zero.")

    return MeshProperties(
        encoding=encoding,
        facet_count=mesh.facet_count,
        bounding_box=bbox,
        volume_mm3=volume_mm3,
        volume_cm3=volume_mm3 / 1000.0,
    )
