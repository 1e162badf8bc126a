import pytest
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def json_path() -> str:
    return str(FIXTURES_DIR / "kras_pathway.json")


@pytest.fixture
def ttl_path() -> str:
    return str(FIXTURES_DIR / "kras_pathway.ttl")


@pytest.fixture
def graphml_path() -> str:
    return str(FIXTURES_DIR / "kras_pathway.graphml")
