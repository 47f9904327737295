"""Tests for the histree CLI."""

import os
import subprocess
import sys
from pathlib import Path

import pytest
import tomlkit

from histree.cli import main

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def _run_histree(*args: str, cwd: Path) -> subprocess.CompletedProcess:
    """Run histree as a subprocess."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "histree", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        env=env,
        timeout=60,
    )


class TestHelp:
    """--help, --version and the bare command."""

    def test_no_command_prints_help(self, isolated_cwd, capsys):
        assert main([]) == 0
        assert "histree" in capsys.readouterr().out

    def test_version_command(self, isolated_cwd, capsys):
        assert main(["version"]) == 0
        assert capsys.readouterr().out.startswith("histree ")

    def test_version_flag(self, isolated_cwd, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])

        assert excinfo.value.code == 0
        assert "histree" in capsys.readouterr().out


class TestCounterCommand:
    """Tests for `histree counter`."""

    def test_branching_session(self, isolated_cwd, capsys):
        assert main(["counter", "--start", "1", "inc", "undo", "dec"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "start      model=1 cursor=#0 undo=- redo=-"
        assert lines[1] == "inc        model=2 cursor=#1 undo=INC redo=-"
        assert lines[2] == "undo       model=1 cursor=#0 undo=- redo=INC"
        assert lines[3] == "dec        model=0 cursor=#2 undo=DEC redo=-"

    def test_redo_lists_both_branches(self, isolated_cwd, capsys):
        main(["counter", "inc", "undo", "dec", "undo"])

        last = capsys.readouterr().out.splitlines()[-1]
        assert last.endswith("redo=INC,DEC")

    def test_quiet_prints_final_model(self, isolated_cwd, capsys):
        assert main(["counter", "-q", "inc", "inc", "jump:10", "undo"]) == 0

        assert capsys.readouterr().out == "2\n"

    def test_reset(self, isolated_cwd, capsys):
        main(["counter", "inc:5", "reset"])

        last = capsys.readouterr().out.splitlines()[-1]
        assert last.startswith("reset      model=5 cursor=#0 undo=-")

    def test_markdown_dump(self, isolated_cwd, capsys):
        main(["counter", "-q", "jump:3", "undo", "inc", "--format", "markdown"])

        out = capsys.readouterr().out
        assert "# History (3 nodes, cursor #2)" in out
        assert "  - #1 JUMP(3)" in out
        assert "  - #2 INC <- cursor" in out

    def test_json_dump(self, isolated_cwd, capsys):
        import json

        main(["counter", "-q", "inc", "--format", "json"])

        data = json.loads(capsys.readouterr().out)
        assert data["cursor"] == 1
        assert data["model"] == 1

    def test_dedup_policy_flag(self, isolated_cwd, capsys):
        code = main(["counter", "jump:5", "undo", "jump:7", "--dedup", "strict"])

        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_step(self, isolated_cwd, capsys):
        assert main(["counter", "bogus"]) == 1
        assert "Unknown step 'bogus'" in capsys.readouterr().err

    def test_verbose_reraises(self, isolated_cwd):
        with pytest.raises(ValueError):
            main(["-v", "counter", "bogus"])

    def test_uses_config(self, isolated_cwd, capsys):
        (isolated_cwd / ".histree.toml").write_text(
            '[counter]\nstart = 40\n\n[output]\nformat = "csv"\n', encoding="utf-8"
        )

        main(["counter", "-q", "inc"])

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "id,parent,kind,depth,data,cursor"
        assert out[-1] == "1,0,INC,1,,yes"

    def test_env_override(self, isolated_cwd, capsys, monkeypatch):
        monkeypatch.setenv("HISTREE_COUNTER_START", "100")

        main(["counter", "-q", "dec"])

        assert capsys.readouterr().out == "99\n"


class TestConfigCommand:
    """Tests for `histree config`."""

    def test_path_without_file(self, isolated_cwd, capsys):
        assert main(["config", "path"]) == 1
        assert "No .histree.toml found" in capsys.readouterr().out

    def test_set_creates_file(self, isolated_cwd, capsys):
        assert main(["config", "set", "counter.start", "5"]) == 0

        doc = tomlkit.parse((isolated_cwd / ".histree.toml").read_text(encoding="utf-8"))
        assert doc["counter"]["start"] == 5

        capsys.readouterr()
        main(["counter", "-q"])
        assert capsys.readouterr().out == "5\n"

    def test_set_preserves_comments(self, isolated_cwd):
        config_file = isolated_cwd / ".histree.toml"
        config_file.write_text('# keep me\n[history]\ndedup = "replace"\n', encoding="utf-8")

        main(["config", "set", "history.dedup", "STRICT"])

        text = config_file.read_text(encoding="utf-8")
        assert "# keep me" in text
        assert 'dedup = "strict"' in text

    def test_set_rejects_bad_policy(self, isolated_cwd, capsys):
        assert main(["config", "set", "history.dedup", "sometimes"]) == 1
        assert "Unknown dedup policy" in capsys.readouterr().err

    def test_set_rejects_bad_key(self, isolated_cwd, capsys):
        assert main(["config", "set", "dedup", "strict"]) == 1

    def test_get(self, isolated_cwd, capsys):
        assert main(["config", "get", "history.dedup"]) == 0
        assert capsys.readouterr().out == "keep-stored\n"

    def test_get_unknown(self, isolated_cwd, capsys):
        assert main(["config", "get", "history.nope"]) == 1

    def test_get_with_explicit_config(self, tmp_path, isolated_cwd, capsys):
        config_file = tmp_path / "other.toml"
        config_file.write_text("[counter]\nstart = 3\n", encoding="utf-8")

        assert main(["--config", str(config_file), "config", "get", "counter.start"]) == 0
        assert capsys.readouterr().out == "3\n"

    def test_missing_explicit_config(self, isolated_cwd, capsys):
        assert main(["--config", "nope.toml", "config", "show"]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_show_json(self, isolated_cwd, capsys):
        import json

        assert main(["config", "show", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["output"]["format"] == "text"

    def test_show_toml(self, isolated_cwd, capsys):
        assert main(["config", "show"]) == 0

        doc = tomlkit.parse(capsys.readouterr().out)
        assert doc["history"]["dedup"] == "keep-stored"


class TestModuleEntryPoint:
    """Invokes histree as a subprocess."""

    def test_python_m(self, tmp_path):
        result = _run_histree("counter", "-q", "inc", "inc", cwd=tmp_path)

        assert result.returncode == 0, result.stderr
        assert result.stdout == "2\n"
