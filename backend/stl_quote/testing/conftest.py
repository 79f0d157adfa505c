# testing/conftest.py

import logging

import pytest
import trimesh

from stl_quote.core.common_types import ParseMode
from stl_quote.processes.print_3d.processor import Print3DProcessor
from stl_quote.services import QuoteService

from generate_test_models import (
    create_box, create_simple_cube, create_sphere, encode_ascii_stl, encode_binary_stl,
)

logger = logging.getLogger(__name__)

# --- Mesh Fixtures ---

@pytest.fixture(scope="session")
def pass_cube_10mm() -> trimesh.Trimesh:
    return create_simple_cube(size=10.0)

@pytest.fixture(scope="session")
def tall_box_25mm() -> trimesh.Trimesh:
    return create_box(10.0, 10.0, 25.0)

@pytest.fixture(scope="session")
def sphere_r5() -> trimesh.Trimesh:
    return create_sphere(radius=5.0, subdivisions=2)

# --- Encoded STL Fixtures ---

@pytest.fixture(scope="session")
def cube_binary_stl(pass_cube_10mm: trimesh.Trimesh) -> bytes:
    return encode_binary_stl(pass_cube_10mm.triangles, pass_cube_10mm.face_normals)

@pytest.fixture(scope="session")
def cube_ascii_stl(pass_cube_10mm: trimesh.Trimesh) -> bytes:
    return encode_ascii_stl(pass_cube_10mm.triangles, pass_cube_10mm.face_normals, name="cube")

@pytest.fixture
def cube_stl_file(tmp_path, cube_binary_stl: bytes):
    path = tmp_path / "cube_10mm.stl"
    path.write_bytes(cube_binary_stl)
    return path

# --- Processor / Service Fixtures ---

@pytest.fixture
def print3d_processor() -> Print3DProcessor:
    return Print3DProcessor(parse_mode=ParseMode.LENIENT, max_upload_bytes=10 * 1024 * 1024)

@pytest.fixture
def quote_service(print3d_processor: Print3DProcessor) -> QuoteService:
    return QuoteService(print3d_processor)
