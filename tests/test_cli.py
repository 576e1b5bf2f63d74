"""Tests for CLI interface."""

import json
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from graphql_maple.cli import app

runner = CliRunner()


class TestCLI:
    @pytest.fixture(autouse=True)
    def isolated_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"schema_cache_dir": str(tmp_path / "cache")}))
        self.config_path = str(path)

    def when_run(self, *args):
        self.result = runner.invoke(app, ["--config", self.config_path, *args])

    def then_exit_code_is(self, code):
        assert self.result.exit_code == code, self.result.output

    def test_lists_functions(self, schema_file):
        self.when_run("functions", "--schema", str(schema_file))
        self.then_exit_code_is(0)
        assert "create_user" in self.result.output
        assert "old_users" in self.result.output

    def test_describes_function(self, schema_file):
        self.when_run("describe", "createUser", "--schema", str(schema_file))
        self.then_exit_code_is(0)
        assert "Param name: email" in self.result.output
        assert "Create a user" in self.result.output

    def test_renders_mutation(self, schema_file):
        self.when_run("render", "create_user", "--schema", str(schema_file), "-p", "email=a@b.com", "-f", "id name")
        self.then_exit_code_is(0)
        assert '{ createUser(email: "a@b.com") { id name } }' in self.result.output

    def test_renders_typed_json_params(self, schema_file):
        self.when_run("render", "users", "--schema", str(schema_file), "-j", '{"limit": 3}', "-f", "id")
        self.then_exit_code_is(0)
        assert "{ users(limit: 3) { id } }" in self.result.output

    def test_render_reports_missing_params(self, schema_file):
        self.when_run("render", "create_user", "--schema", str(schema_file), "-f", "id")
        self.then_exit_code_is(2)
        assert "missing the following required params: email" in self.result.output

    def test_unknown_function_fails(self, schema_file):
        self.when_run("describe", "noSuchThing", "--schema", str(schema_file))
        self.then_exit_code_is(1)
        assert "noSuchThing" in self.result.output

    def test_call_emits_json(self, schema_file):
        payload = {"data": {"viewer": {"id": "1"}}}
        with patch("graphql_maple.adapter.HttpAdapter.query", return_value=payload) as query:
            self.when_run(
                "call", "viewer", "--schema", str(schema_file), "--url", "https://x.test/graphql",
                "-f", "id", "--output", "json",
            )
        self.then_exit_code_is(0)
        query.assert_called_once_with("{ viewer { id } }")
        assert json.loads(self.result.output) == payload

    def test_call_with_graphql_errors_exits_nonzero(self, schema_file):
        with patch("graphql_maple.adapter.HttpAdapter.query", return_value={"errors": [{"message": "no"}]}):
            self.when_run(
                "call", "viewer", "--schema", str(schema_file), "--url", "https://x.test/graphql",
                "-f", "id", "--output", "json",
            )
        self.then_exit_code_is(2)

    def test_schema_pull_writes_output(self, tmp_path, introspection):
        out = tmp_path / "pulled.json"
        with patch("graphql_maple.schema_loader.introspect", return_value=introspection):
            self.when_run("schema", "pull", "--url", "https://x.test/graphql", "--out", str(out))
        self.then_exit_code_is(0)
        assert json.loads(out.read_text()) == introspection

    def test_schema_pull_requires_url(self):
        self.when_run("schema", "pull")
        self.then_exit_code_is(1)
        assert "No URL provided" in self.result.output

    def test_init_config(self, tmp_path):
        path = tmp_path / "new" / "config.yaml"
        self.when_run("init-config", "--path", str(path))
        self.then_exit_code_is(0)
        assert path.exists()
