"""
Shared pytest configuration and fixtures for the configuration registry tests.
"""

import os

import pytest

from dotconfig import get_config_registry, reset_config_registry, get_path_cache


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests going through the global registry")
    config.addinivalue_line("markers", "concurrency: tests running several threads")


@pytest.fixture(autouse=True)
def clean_state():
    """
    Restore the process environment and drop the global registry around every test.
    """
    saved_env = dict(os.environ)
    reset_config_registry()
    yield
    reset_config_registry()
    get_path_cache().clear()
    os.environ.clear()
    os.environ.update(saved_env)


@pytest.fixture
def env_dir(tmp_path):
    """Directory holding the dotenv files the registry loads on construction."""
    (tmp_path / ".env.testing").write_text(
        "DOTCONFIG_LOG_LEVEL=WARNING\n"
        "TESTING_DOTENV_MARKER=loaded\n"
    )
    (tmp_path / ".env").write_text("DOTENV_MARKER=loaded\n")
    return tmp_path


@pytest.fixture
def registry(env_dir):
    """Global registry built for the testing environment."""
    return get_config_registry("testing", base_dir=env_dir)


@pytest.fixture
def test_section():
    """Tree with every value type and a deeply nested branch."""
    return {
        "string_value": "test",
        "int_value": 42,
        "bool_value": True,
        "float_value": 3.14,
        "array_value": ["one", "two", "three"],
        "string_for_array": "one,two,three",
        "nested": {
            "key": "value",
            "deep": {
                "deeper": {
                    "deepest": "found",
                    "numbers": [1, 2, 3],
                    "config": {
                        "enabled": True,
                        "rate": 0.75,
                        "tags": ["test", "deep", "nesting"],
                    },
                },
            },
        },
    }


@pytest.fixture
def loaded_registry(registry, test_section):
    """Registry with the ``test`` and ``testget`` sections registered."""
    registry.register("testget", lambda r: {"value": "testget"})
    registry.register("test", lambda r: test_section)
    return registry
