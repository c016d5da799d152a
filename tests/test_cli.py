"""
Tests for the normgraph command line.
"""

import json

import pytest

from normgraph.cli.main import EXIT_INCOMPLETE, app


@pytest.fixture
def workspace(tmp_path):
    """Query, data and file locations for one CLI session."""
    query = tmp_path / "query.graphql"
    query.write_text("query MyQuery { nodes { id name } }")
    data = tmp_path / "data.json"
    data.write_text(json.dumps({
        "data": {
            "__typename": "Query",
            "nodes": [{"__typename": "Node", "id": "1", "name": "hoge"}],
        },
    }))
    return {
        "query": str(query),
        "data": str(data),
        "snapshot": str(tmp_path / "snapshot.json"),
        "config": str(tmp_path / "normgraph.yaml"),
        "dir": tmp_path,
    }


def _run(workspace, *args):
    return app(["--config", workspace["config"], *args])


class TestCliCommands:
    """Subcommands against a temporary snapshot."""

    def test_write_then_read(self, workspace, capsys):
        """Written results can be read back."""
        assert _run(workspace, "write", workspace["query"], workspace["data"],
                    "--snapshot", workspace["snapshot"]) == 0
        capsys.readouterr()

        assert _run(workspace, "read", workspace["query"], "--snapshot", workspace["snapshot"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {
            "data": {"nodes": [{"id": "1", "name": "hoge"}]},
            "missingDataLocations": [],
        }

    def test_read_uncached_operation(self, workspace, capsys):
        """Unanswerable reads exit with EXIT_INCOMPLETE."""
        code = _run(workspace, "read", workspace["query"], "--snapshot", workspace["snapshot"])
        assert code == EXIT_INCOMPLETE
        assert json.loads(capsys.readouterr().out)["data"] is None

    def test_read_with_other_variables(self, workspace, capsys):
        """Variables are part of the operation key."""
        _run(workspace, "write", workspace["query"], workspace["data"], "--snapshot", workspace["snapshot"])
        code = _run(workspace, "read", workspace["query"], "--variables", '{"x": 1}',
                    "--snapshot", workspace["snapshot"])
        assert code == EXIT_INCOMPLETE

    def test_inspect_record(self, workspace, capsys):
        """Single records are printed in JSON form."""
        _run(workspace, "write", workspace["query"], workspace["data"], "--snapshot", workspace["snapshot"])
        capsys.readouterr()

        assert _run(workspace, "inspect", "--key", "Node:1", "--snapshot", workspace["snapshot"]) == 0
        assert json.loads(capsys.readouterr().out) == {"__typename": "Node", "id": "1", "name": "hoge"}

        assert _run(workspace, "inspect", "--key", "Node:9", "--snapshot", workspace["snapshot"]) == 1

    def test_inspect_all(self, workspace, capsys):
        """Without a key the whole snapshot is printed."""
        _run(workspace, "write", workspace["query"], workspace["data"], "--snapshot", workspace["snapshot"])
        capsys.readouterr()

        assert _run(workspace, "inspect", "--snapshot", workspace["snapshot"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["operationResults"] == {"MyQuery/{}": "Query:MyQuery/{}"}
        assert output["normalizedData"]["Query:MyQuery/{}"]["nodes"] == [
            {"__ref": True, "type": "Node", "id": "1"},
        ]

    def test_init_writes_config_once(self, workspace):
        """init refuses to overwrite without --force."""
        assert _run(workspace, "init") == 0
        assert "missing_location_style" in (workspace["dir"] / "normgraph.yaml").read_text()
        assert _run(workspace, "init") == 1
        assert _run(workspace, "init", "--force") == 0


class TestCliErrors:
    """Failures are reported with exit code 1."""

    def test_syntax_error(self, workspace, capsys):
        """Unparseable queries are reported."""
        bad = workspace["dir"] / "bad.graphql"
        bad.write_text("query MyQuery {")
        assert _run(workspace, "read", str(bad), "--snapshot", workspace["snapshot"]) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_anonymous_query(self, workspace, capsys):
        """Cache errors are reported."""
        anonymous = workspace["dir"] / "anonymous.graphql"
        anonymous.write_text("{ nodes { id } }")
        assert _run(workspace, "read", str(anonymous), "--snapshot", workspace["snapshot"]) == 1
        assert "name" in capsys.readouterr().out

    def test_variables_must_be_object(self, workspace):
        """--variables takes a JSON object."""
        code = _run(workspace, "read", workspace["query"], "--variables", "[1]",
                    "--snapshot", workspace["snapshot"])
        assert code == 1

    def test_no_command_prints_help(self, capsys):
        """Bare invocation shows usage."""
        assert app([]) == 0
        assert "normgraph" in capsys.readouterr().out
