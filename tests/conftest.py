import pytest
from dbq.config.type_mapping import ENV_VAR, TypeMappingConfig


@pytest.fixture(autouse=True)
def reset_type_mapping(monkeypatch):
    """Reload type mapping configuration around each test to ensure test isolation."""
    monkeypatch.delenv(ENV_VAR, raising=False)
    TypeMappingConfig.reset_instance()
    yield
    TypeMappingConfig.reset_instance()


pytest_plugins = [
    'tests.fixtures.mocks',
    'tests.fixtures.sqlite',
]
