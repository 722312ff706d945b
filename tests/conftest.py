"""Shared pytest fixtures for AI Image Generator tests."""

import os
import random
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Importing main builds the default app, which creates IMAGES_DIR; keep it out of the repo
_SESSION_IMAGES_DIR = tempfile.mkdtemp(prefix="ai-images-")
os.environ["IMAGES_DIR"] = _SESSION_IMAGES_DIR

from fastapi.testclient import TestClient

from main import create_app
from services.composer_service import ImageComposer
from services.image_service import ImageGenerationService
from services.storage_service import StorageService
from services.style_service import StyleCatalog


TEST_BASE_URL = "http://testserver"


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_SESSION_IMAGES_DIR, ignore_errors=True)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def images_dir(temp_dir: Path) -> Path:
    """Image directory that does not exist yet."""
    return temp_dir / "generated-images"


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so renders and filenames are reproducible."""
    return random.Random(1234)


@pytest.fixture
def catalog() -> StyleCatalog:
    return StyleCatalog()


@pytest.fixture
def composer(catalog: StyleCatalog) -> ImageComposer:
    return ImageComposer(catalog)


@pytest.fixture
def storage(images_dir: Path) -> StorageService:
    return StorageService(images_dir, TEST_BASE_URL)


@pytest.fixture
def generation_service(
    composer: ImageComposer, storage: StorageService, rng: random.Random
) -> ImageGenerationService:
    return ImageGenerationService(composer, storage, rng=rng)


@pytest.fixture
def test_client(images_dir: Path) -> Generator[TestClient, None, None]:
    """FastAPI TestClient over an app writing to a temporary directory."""
    app = create_app(images_dir=images_dir, base_url=TEST_BASE_URL, rng=random.Random(42))
    with TestClient(app) as client:
        yield client
