"""
Shared fixtures: packaged reference catalogs and a container on a temp dir.
"""
import pytest

from mock_data_provider.adapters import load_reference_data
from mock_data_provider.config import StoreConfig
from mock_data_provider.container import Container


@pytest.fixture(scope="session")
def reference():
    """Packaged YAML catalogs"""
    return load_reference_data()


@pytest.fixture
def config(tmp_path):
    return StoreConfig(data_dir=tmp_path / "logs")


@pytest.fixture
def container(config, reference):
    """Container wired to a fresh data dir"""
    return Container(config, reference=reference)
