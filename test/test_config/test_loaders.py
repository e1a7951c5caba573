"""
Tests for the ready-made loader callbacks.
"""

import pytest

from dotconfig import static_loader, env_loader, yaml_loader, ConfigSchema, SchemaField, Kind, ValidationError

pytestmark = pytest.mark.unit


class TestStaticLoader:

    def test_returns_fresh_copies(self, registry):
        tree = {"a": {"b": 1}}
        loader = static_loader(tree)

        first = loader(registry)
        first["a"]["b"] = 2

        assert loader(registry) == {"a": {"b": 1}}
        assert tree == {"a": {"b": 1}}


class TestEnvLoader:

    def test_builds_tree_from_environment(self, registry, monkeypatch):
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_PORT", "6543")
        monkeypatch.setenv("DB_DEBUG", "TRUE")
        monkeypatch.delenv("DB_REPLICAS", raising=False)

        registry.register("database", env_loader({
            "host": ("DB_HOST", "localhost"),
            "port": ("DB_PORT", 5432),
            "options.debug": ("DB_DEBUG", False),
            "replicas": ("DB_REPLICAS", ["primary"]),
        }))

        assert registry.get("database") == {
            "host": "db.internal",
            "port": 6543,
            "options": {"debug": True},
            "replicas": ["primary"],
        }


class TestYamlLoader:

    def test_loads_and_reloads_on_refresh(self, registry, tmp_path):
        config_file = tmp_path / "app.yaml"
        config_file.write_text("database:\n  host: localhost\n  port: 5432\n")

        registry.register("app", yaml_loader(config_file))
        assert registry.get_int("app.database.port") == 5432

        config_file.write_text("database:\n  host: localhost\n  port: 6000\n")
        assert registry.get_int("app.database.port") == 5432

        registry.refresh()
        assert registry.get_int("app.database.port") == 6000

    def test_empty_file(self, registry, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        registry.register("empty", yaml_loader(config_file))

        assert registry.get("empty") == {}

    def test_missing_file_is_isolated(self, registry, tmp_path):
        registry.register("missing", yaml_loader(tmp_path / "missing.yaml"))
        assert registry.get("missing") == {}

    def test_non_mapping_document(self, registry, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")

        loader = yaml_loader(config_file)
        with pytest.raises(ValueError, match="is not a mapping"):
            loader(registry)

    def test_schema_over_registry_section(self, registry, tmp_path):
        config_file = tmp_path / "app.yaml"
        config_file.write_text("name: api\nworkers: many\n")
        registry.register("app", yaml_loader(config_file))

        schema = ConfigSchema()
        schema.add_field("app.name", SchemaField(type=Kind.STRING, required=True))
        schema.add_field("app.workers", SchemaField(type=Kind.INT, required=True))

        with pytest.raises(ValidationError, match="validation failed for app.workers: expected type int, got string"):
            schema.validate_section(registry, "app")
