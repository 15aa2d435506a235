import pytest
from fastapi.testclient import TestClient

from intake.config import Settings, StorageConfig
from intake.main import create_app


@pytest.fixture
def storage_config(tmp_path):
    return StorageConfig(data_dir=tmp_path / "data")


@pytest.fixture
def client(storage_config):
    app = create_app(Settings(data_dir=storage_config.data_dir))
    with TestClient(app) as c:
        yield c
