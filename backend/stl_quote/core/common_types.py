# core/common_types.py
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Enums ---

class StlEncoding(str, Enum):
    """The two STL encodings. Values are what the analysis metadata reports."""
    ASCII = "ASCII"
    BINARY = "Binary"

class ParseMode(str, Enum):
    """How the text decoder treats facet blocks that do not have exactly three vertices."""
    LENIENT = "lenient" # Drop the block and keep scanning
    STRICT = "strict"   # Fail the whole parse

class RequesterCategory(str, Enum):
    """Who the print is for. Drives the per-gram rate and discount."""
    STUDENT = "student"
    FACULTY = "faculty"
    GUEST = "guest"

# --- Mesh Primitives ---

@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

@dataclass(frozen=True)
class Facet:
    """One triangle: a normal plus three vertices in source winding order."""
    normal: Vector3
    vertices: Tuple[Vector3, Vector3, Vector3]

    def __post_init__(self):
        if len(self.vertices) != 3:
            raise ValueError(f"A facet needs exactly 3 vertices, got {len(self.vertices)}")
        # Freeze whatever sequence we were handed
        object.__setattr__(self, "vertices", tuple(self.vertices))

class Mesh:
    """
    Ordered facets of an STL file (a.k.a. STLData).

    Facets are stored as float64 arrays rather than objects: ``normals`` has
    shape (N, 3) and ``triangles`` has shape (N, 3, 3), so every facet has
    exactly three vertices by construction. Order is file order.
    """

    def __init__(self, normals: np.ndarray, triangles: np.ndarray):
        normals = np.asarray(normals, dtype=np.float64).reshape(-1, 3)
        triangles = np.asarray(triangles, dtype=np.float64).reshape(-1, 3, 3)
        if len(normals) != len(triangles):
            raise ValueError(f"Normal count ({len(normals)}) does not match triangle count ({len(triangles)})")
        self.normals = normals
        self.triangles = triangles

    @classmethod
    def empty(cls) -> "Mesh":
        return cls(np.zeros((0, 3)), np.zeros((0, 3, 3)))

    @classmethod
    def from_facets(cls, facets: Iterable[Facet]) -> "Mesh":
        facets = list(facets)
        if not facets:
            return cls.empty()
        normals = [f.normal.as_tuple() for f in facets]
        triangles = [[v.as_tuple() for v in f.vertices] for f in facets]
        return cls(np.array(normals), np.array(triangles))

    @property
    def facet_count(self) -> int:
        return len(self.triangles)

    @property
    def is_empty(self) -> bool:
        return self.facet_count == 0

    @property
    def facets(self) -> List[Facet]:
        return list(self)

    def __len__(self) -> int:
        return self.facet_count

    def __iter__(self) -> Iterator[Facet]:
        for normal, triangle in zip(self.normals, self.triangles):
            yield Facet(
                normal=Vector3(*map(float, normal)),
                vertices=tuple(Vector3(*map(float, v)) for v in triangle),
            )

    def __repr__(self) -> str:
        return f"Mesh(facet_count={self.facet_count})"

# --- Geometry Related Models ---

class BoundingBox(BaseModel):
    """Axis-aligned bounding box. All zeros denotes a mesh without geometry."""
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    min_z: float = 0.0
    max_z: float = 0.0
    width: float = Field(0.0, description="Extent along X (max_x - min_x).")
    height: float = Field(0.0, description="Extent along Y (max_y - min_y).")
    depth: float = Field(0.0, description="Extent along Z (max_z - min_z), the build height.")

class MeshProperties(BaseModel):
    """Geometry derived from a decoded mesh."""
    encoding: StlEncoding
    facet_count: int
    bounding_box: BoundingBox
    volume_mm3: float = Field(..., ge=0.0)
    volume_cm3: float = Field(..., ge=0.0)

# --- Estimate and Pricing Models ---

class ManufacturingEstimate(BaseModel):
    """Heuristic print estimates for a PLA part."""
    print_time_hours: float
    print_time_minutes: int
    support_waste_percentage: float
    material_weight_g: float
    support_weight_g: float
    layer_height_mm: float

class PriceBreakdown(BaseModel):
    """Itemized cost lines. Currency values are rounded to 2 decimals."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    grams: float
    user_type: RequesterCategory
    cost_per_gram: float
    material_cost: float
    support_material_cost: float
    service_charge: float
    subtotal: float
    discount_percentage: float
    discount_amount: float
    final_cost: float

class PriceQuote(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cost_rupees: int = Field(..., description="Final cost rounded to the nearest rupee.")
    breakdown: PriceBreakdown

# --- Analysis Report (external payload) ---

class _ReportSection(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ReportBoundingBox(_ReportSection):
    width_mm: float
    height_mm: float
    depth_mm: float

class ReportVolume(_ReportSection):
    mm3: float
    cm3: float

class ReportMaterial(_ReportSection):
    pla_weight_grams: float
    estimated_cost_inr: float = Field(..., alias="estimatedCostINR")

class ReportPrinting(_ReportSection):
    estimated_print_time_hours: float
    estimated_print_time_minutes: int
    estimated_support_waste_percentage: float
    support_weight_grams: float

class ReportMetadata(_ReportSection):
    file_format: StlEncoding
    facet_count: int

class AnalysisReport(_ReportSection):
    """What `analyze` hands back to its caller."""
    bounding_box: ReportBoundingBox
    volume: ReportVolume
    material: ReportMaterial
    printing: ReportPrinting
    metadata: ReportMetadata

# --- Service Results ---

class ErrorInfo(BaseModel):
    kind: str = Field(..., description="MalformedInput, UnsupportedEncoding, ValidationError or ConfigurationError.")
    message: str

class ServiceResult(_ReportSection):
    """Structured outcome of a service call. Exactly one of the payload fields or `error` is set."""
    success: bool
    analysis: Optional[AnalysisReport] = None
    quote: Optional[PriceQuote] = None
    error: Optional[ErrorInfo] = None
