"""Tests for schema loading and descriptor extraction."""

from unittest.mock import patch

import pytest

from graphql_maple import schema_loader
from graphql_maple.config import Config
from graphql_maple.models import ArgumentKind, OperationKind


class TestExtractDescriptors:
    def test_queries_then_mutations(self, introspection):
        descriptors = schema_loader.extract_descriptors(introspection)
        names = [(d.operation, d.name) for d in descriptors]
        assert names == [
            (OperationKind.QUERY, "users"),
            (OperationKind.QUERY, "user"),
            (OperationKind.QUERY, "viewer"),
            (OperationKind.QUERY, "oldUsers"),
            (OperationKind.MUTATION, "createUser"),
            (OperationKind.MUTATION, "deleteUser"),
            (OperationKind.MUTATION, "reset"),
        ]

    def test_arguments_keep_kind_and_type(self, introspection):
        create_user = next(d for d in schema_loader.extract_descriptors(introspection) if d.name == "createUser")
        assert [(a.name, a.kind, a.scalar_type_name) for a in create_user.arguments] == [
            ("email", ArgumentKind.NON_NULL, "String"),
            ("name", ArgumentKind.NULLABLE, "String"),
            ("age", ArgumentKind.NULLABLE, "Int"),
        ]
        assert create_user.arguments[0].description == "Email address"

    def test_deprecation_is_read(self, introspection):
        old = next(d for d in schema_loader.extract_descriptors(introspection) if d.name == "oldUsers")
        assert old.is_deprecated
        assert old.deprecation_reason == "Use users"

    def test_accepts_data_envelope(self, introspection):
        wrapped = {"data": introspection}
        assert len(schema_loader.extract_descriptors(wrapped)) == 7

    def test_schema_without_mutations(self, introspection):
        introspection["__schema"]["mutationType"] = None
        descriptors = schema_loader.extract_descriptors(introspection)
        assert {d.operation for d in descriptors} == {OperationKind.QUERY}


class TestLoadSchema:
    def given_config(self, tmp_path):
        self.cfg = Config(schema_cache_dir=str(tmp_path / "cache"))

    def test_loads_from_file(self, schema_file, introspection):
        profile = schema_loader.load_schema(schema_file=str(schema_file))
        assert profile.url == f"file://{schema_file}"
        assert profile.schema_json == introspection
        assert len(profile.hash) == 16

    def test_requires_url_or_file(self):
        with pytest.raises(AssertionError):
            schema_loader.load_schema()

    def test_fetches_then_uses_cache(self, tmp_path, introspection):
        self.given_config(tmp_path)
        url = "https://api.example.com/graphql"
        with patch.object(schema_loader, "introspect", return_value=introspection) as introspect:
            first = schema_loader.load_schema(url=url, cfg=self.cfg)
            second = schema_loader.load_schema(url=url, cfg=self.cfg)
        introspect.assert_called_once_with(url, None, self.cfg)
        assert second == first
        assert (tmp_path / "cache" / "api.example.com.json").exists()

    def test_refresh_bypasses_cache(self, tmp_path, introspection):
        self.given_config(tmp_path)
        url = "https://api.example.com/graphql"
        with patch.object(schema_loader, "introspect", return_value=introspection) as introspect:
            schema_loader.load_schema(url=url, cfg=self.cfg)
            schema_loader.load_schema(url=url, cfg=self.cfg, refresh=True, token="t0k")
        assert introspect.call_count == 2
        assert introspect.call_args.args[1] == "t0k"

    def test_falls_back_to_configured_token(self, tmp_path, introspection):
        self.cfg = Config(schema_cache_dir=str(tmp_path), token="from-config")
        with patch.object(schema_loader, "introspect", return_value=introspection) as introspect:
            schema_loader.load_schema(url="https://x.test/graphql", cfg=self.cfg)
        assert introspect.call_args.args[1] == "from-config"

    def test_cache_path_per_host(self, tmp_path):
        self.given_config(tmp_path)
        path = schema_loader.cache_path_for("https://api.example.com:8443/graphql", self.cfg)
        assert path.endswith("api.example.com.json")
