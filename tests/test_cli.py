"""Tests for the sdl command-line tool."""

import json

import pytest

from conftest import EX
from sdl.cli import build_parser, main

ENV_VARS = ("SDL_STRICT", "SDL_CHECK_ARGS", "SDL_STATIC_ONTOLOGY", "SDL_TIMEOUT")


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """No SDL_* variables and no stray .env file."""
    for name in ENV_VARS:
        # setenv records the original state, so values loaded from .env are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def ontology(family_json_path):
    return str(family_json_path)


def run_json(capsys, *argv: str) -> dict:
    main(list(argv))
    return json.loads(capsys.readouterr().out)


# ============================================================================
# query
# ============================================================================

class TestQueryCommand:
    """Test sdl query."""

    def test_atoms_json_output(self, capsys, ontology):
        """Atoms from the command line with a prefix and a select list."""
        data = run_json(
            capsys, "query", "-o", ontology,
            "-p", f"ex={EX}", "-a", "Type(?x, ex:Mother)", "-s", "x", "--json-output",
        )
        assert data == {"ask": True, "bindings": [{"x": f"<{EX}anna>"}]}

    def test_query_file(self, capsys, ontology, query_json_path):
        data = run_json(capsys, "query", "-o", ontology, "-q", str(query_json_path), "--json-output")
        assert len(data["bindings"]) == 2

    def test_query_file_mode_override(self, capsys, ontology, query_json_path):
        """--mode and --select override the document."""
        data = run_json(
            capsys, "query", "-o", ontology, "-q", str(query_json_path),
            "-m", "distinct", "-s", "x", "--json-output",
        )
        assert data["bindings"] == [{"x": f"<{EX}anna>"}]

    def test_ask_plain_output(self, capsys, ontology):
        """ASK result is printed as a verdict."""
        main(["query", "-o", ontology, "-a", f"SubClassOf(<{EX}Mother>, <{EX}Person>)"])
        assert "PRAWDA" in capsys.readouterr().out

    def test_false_plain_output(self, capsys, ontology):
        main(["query", "-o", ontology, "-a", f"SubClassOf(<{EX}Person>, <{EX}Mother>)"])
        assert "FAŁSZ" in capsys.readouterr().out

    def test_select_table(self, capsys, ontology):
        """SELECT result lists the bindings."""
        main(["query", "-o", ontology, "-p", f"ex={EX}", "-a", "Type(?x, ex:Father)", "-s", "x"])
        out = capsys.readouterr().out
        assert "2 podstawień" in out
        assert "robert" in out

    def test_turtle_ontology(self, capsys, family_ttl_path):
        data = run_json(
            capsys, "query", "-o", str(family_ttl_path),
            "-p", f"ex={EX}", "-a", "PropertyValue(ex:anna, ex:hasParent, ?p)", "-s", "p", "--json-output",
        )
        assert data["bindings"] == [{"p": f"<{EX}eve>"}]

    def test_missing_ontology(self, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["query", "-o", str(tmp_path / "none.ttl"), "-a", "Class(?c)"])
        assert exc.value.code == 1

    def test_bad_atom(self, capsys, ontology):
        with pytest.raises(SystemExit) as exc:
            main(["query", "-o", ontology, "-a", "Type(?x)"])
        assert exc.value.code == 1
        assert "Błąd parsowania zapytania" in capsys.readouterr().out

    def test_bad_prefix(self, ontology):
        with pytest.raises(SystemExit):
            main(["query", "-o", ontology, "-p", "ex", "-a", "Class(?c)"])

    def test_strict_undeclared_entity(self, capsys, ontology):
        """--strict turns an undeclared entity into an error exit."""
        with pytest.raises(SystemExit) as exc:
            main(["query", "-o", ontology, "--strict", "-a", "Class(<urn:undeclared>)"])
        assert exc.value.code == 1
        assert "E_UNDECLARED_ENTITY" in capsys.readouterr().out

    def test_no_check_overrides_env(self, capsys, monkeypatch, ontology):
        """Flags take precedence over the environment."""
        monkeypatch.setenv("SDL_STRICT", "1")
        data = run_json(
            capsys, "query", "-o", ontology, "--no-check", "-a", "Class(<urn:undeclared>)", "--json-output",
        )
        assert data["ask"] is False

    def test_invalid_env(self, capsys, monkeypatch, ontology):
        monkeypatch.setenv("SDL_TIMEOUT", "-5")
        with pytest.raises(SystemExit):
            main(["query", "-o", ontology, "-a", "Class(?c)"])
        assert "SDL_TIMEOUT" in capsys.readouterr().out

    def test_dotenv_file(self, capsys, tmp_path, ontology):
        """Settings are read from a .env file in the working directory."""
        (tmp_path / ".env").write_text("SDL_STRICT=1\n", encoding="utf-8")
        with pytest.raises(SystemExit):
            main(["query", "-o", ontology, "-a", "Class(<urn:undeclared>)"])


# ============================================================================
# check
# ============================================================================

class TestCheckCommand:
    """Test sdl check."""

    def test_valid_query(self, capsys, ontology, query_json_path):
        main(["check", "-o", ontology, "-q", str(query_json_path)])
        assert "OK" in capsys.readouterr().out

    def test_json_report(self, capsys, ontology, query_json_path):
        data = run_json(capsys, "check", "-o", ontology, "-q", str(query_json_path), "--json-output")
        assert data["is_valid"] is True
        assert data["errors"] == []

    def test_invalid_query(self, capsys, ontology, tmp_path):
        """Errors are reported in a table and the exit code is 1."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"groups": [{"atoms": ["Class(<urn:undeclared>)"]}]}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["check", "-o", ontology, "-q", str(path)])
        assert exc.value.code == 1
        assert "BŁĄD" in capsys.readouterr().out

    def test_invalid_query_json_report(self, capsys, ontology, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"groups": [{"atoms": ["Class(<urn:undeclared>)"]}]}), encoding="utf-8")
        with pytest.raises(SystemExit):
            main(["check", "-o", ontology, "-q", str(path), "--json-output"])
        data = json.loads(capsys.readouterr().out)
        assert data["errors"][0]["code"] == "E_UNDECLARED_ENTITY"

    def test_malformed_json(self, ontology, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(SystemExit):
            main(["check", "-o", ontology, "-q", str(path)])


# ============================================================================
# entities / parser
# ============================================================================

class TestEntitiesCommand:
    """Test sdl entities."""

    def test_classes(self, capsys, ontology):
        main(["entities", "-o", ontology, "--kind", "class"])
        out = capsys.readouterr().out
        assert "owl#Thing" in out
        assert f"{EX}Mother" in out
        assert "12 encji" in out

    def test_empty_kind(self, capsys, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"classes": ["urn:A"]}), encoding="utf-8")
        main(["entities", "-o", str(path), "--kind", "individual"])
        assert "Brak encji" in capsys.readouterr().out


class TestParser:
    """Test argument parsing."""

    def test_version(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--version"])
        assert exc.value.code == 0

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    @pytest.mark.parametrize("value", ["0", "-1", "soon"])
    def test_timeout_must_be_positive(self, capsys, value):
        """--timeout accepts the same values as SDL_TIMEOUT."""
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["query", "-o", "x.ttl", "-a", "Class(?c)", "--timeout", value])
        assert exc.value.code == 2
        assert "--timeout" in capsys.readouterr().err

    def test_timeout_value(self):
        args = build_parser().parse_args(["query", "-o", "x.ttl", "-a", "Class(?c)", "--timeout", "2.5"])
        assert args.timeout == 2.5

    def test_query_source_required(self):
        """--query and --atom are mutually exclusive and one is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["query", "-o", "x.ttl"])
        with pytest.raises(SystemExit):
            build_parser().parse_args(["query", "-o", "x.ttl", "-q", "q.json", "-a", "Class(?c)"])
