# processes/print_3d/processor.py

import time
import logging
from typing import Optional

from ...core.common_types import (
    AnalysisReport, ManufacturingEstimate, MeshProperties, ParseMode, RequesterCategory,
    ReportBoundingBox, ReportMaterial, ReportMetadata, ReportPrinting, ReportVolume,
)
from ...core import geometry, stl_reader
from ...core.utils import round_half_up
from ...config import settings
from . import estimator
from .pricing import RATE_TABLE

logger = logging.getLogger(__name__)

class Print3DProcessor:
    """Turns an uploaded STL buffer into geometry and FDM print estimates."""

    def __init__(self, parse_mode: Optional[ParseMode] = None, max_upload_bytes: Optional[int] = None):
        """
        Args:
            parse_mode: ASCII STL strictness. Defaults to settings.stl_parse_mode.
            max_upload_bytes: Size bound checked before decoding. Defaults to
                              settings.max_upload_bytes.
        """
        self.parse_mode = ParseMode(parse_mode or settings.stl_parse_mode)
        self.max_upload_bytes = max_upload_bytes if max_upload_bytes is not None else settings.max_upload_bytes

    def analyze(self, buffer: bytes, parse_mode: Optional[ParseMode] = None) -> AnalysisReport:
        """
        Runs the full pipeline: size guard, sniff, decode, geometry, estimates.

        Args:
            buffer: Raw STL bytes.
            parse_mode: Per-call override of the processor's ASCII strictness.

        Returns:
            The AnalysisReport for the upload.

        Raises:
            MalformedInputError, UnsupportedEncodingError, ValidationError
        """
        start_time = time.time()
        mode = ParseMode(parse_mode or self.parse_mode)

        mesh, encoding = stl_reader.read_stl(buffer, mode=mode, max_bytes=self.max_upload_bytes)
        logger.info(f"Decoded {encoding.value} STL: {mesh.facet_count} facets from {len(buffer)} bytes")

        mesh_properties = geometry.get_mesh_properties(mesh, encoding)
        estimate = estimator.estimate_manufacturing(mesh_properties)
        report = self.build_report(mesh_properties, estimate)

        logger.info(f"STL analysis finished in {time.time() - start_time:.3f}s. Volume: {mesh_properties.volume_cm3:.2f} cm³")
        return report

    @staticmethod
    def build_report(mesh_properties: MeshProperties, estimate: ManufacturingEstimate) -> AnalysisReport:
        """Assembles the rounded, caller-facing report."""
        bbox = mesh_properties.bounding_box
        student_rate = RATE_TABLE[RequesterCategory.STUDENT].cost_per_gram

        return AnalysisReport(
            bounding_box=ReportBoundingBox(
                width_mm=round_half_up(bbox.width),
                height_mm=round_half_up(bbox.height),
                depth_mm=round_half_up(bbox.depth),
            ),
            volume=ReportVolume(
                mm3=round_half_up(mesh_properties.volume_mm3),
                cm3=round_half_up(mesh_properties.volume_cm3),
            ),
            material=ReportMaterial(
                pla_weight_grams=round_half_up(estimate.material_weight_g),
                estimated_cost_inr=round_half_up(estimate.material_weight_g * student_rate),
            ),
            printing=ReportPrinting(
                estimated_print_time_hours=round_half_up(estimate.print_time_hours),
                estimated_print_time_minutes=estimate.print_time_minutes,
                estimated_support_waste_percentage=estimate.support_waste_percentage,
                support_weight_grams=round_half_up(estimate.support_weight_g),
            ),
            metadata=ReportMetadata(
                file_format=mesh_properties.encoding,
                facet_count=mesh_properties.facet_count,
            ),
        )
