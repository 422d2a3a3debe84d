"""Shared pytest fixtures."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest

posix_only = pytest.mark.skipif(os.name == "nt", reason="stub executables need a POSIX shebang")


def write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\n{body}", encoding="utf-8")
    path.chmod(0o755)
    return path


def artifact_message(
    name: str,
    executable: str | None,
    *,
    kind: Sequence[str] = ("bin",),
    package_id: str = "demo 0.1.0 (path+file:///work/demo)",
) -> str:
    return json.dumps(
        {
            "reason": "compiler-artifact",
            "package_id": package_id,
            "manifest_path": "/work/demo/Cargo.toml",
            "target": {
                "kind": list(kind),
                "crate_types": list(kind),
                "name": name,
                "src_path": f"/work/demo/src/{name}.rs",
                "edition": "2021",
            },
            "profile": {"opt_level": "0", "debuginfo": 2, "test": False},
            "features": [],
            "filenames": [executable] if executable else [],
            "executable": executable,
            "fresh": False,
        }
    )


def finished_message(success: bool = True) -> str:
    return json.dumps({"reason": "build-finished", "success": success})


_FAKE_CARGO = """
import json, os, sys
root = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(root, "cargo-argv.json"), "w") as fh:
    json.dump(sys.argv[1:], fh)
with open(os.path.join(root, "cargo-stdout.txt")) as fh:
    sys.stdout.write(fh.read())
sys.stderr.write(open(os.path.join(root, "cargo-stderr.txt")).read())
sys.exit(int(open(os.path.join(root, "cargo-exit.txt")).read()))
"""

_STUB_DEBUGGER = """
import json, os, sys
root = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(root, os.path.basename(sys.argv[0]) + "-argv.json"), "w") as fh:
    json.dump(sys.argv[1:], fh)
sys.exit(int(os.environ.get("STUB_DEBUGGER_EXIT", "0")))
"""


@dataclass
class FakeCargo:
    """A scripted stand-in for cargo that replays canned JSON messages."""

    path: Path

    @property
    def root(self) -> Path:
        return self.path.parent

    def program(self, lines: Sequence[str], *, exit_code: int = 0, stderr: str = "") -> None:
        (self.root / "cargo-stdout.txt").write_text(
            "".join(line + "\n" for line in lines), encoding="utf-8"
        )
        (self.root / "cargo-stderr.txt").write_text(stderr, encoding="utf-8")
        (self.root / "cargo-exit.txt").write_text(str(exit_code), encoding="utf-8")

    def argv(self) -> list[str]:
        return json.loads((self.root / "cargo-argv.json").read_text(encoding="utf-8"))


@dataclass
class StubDebuggers:
    """Directory of debugger stand-ins that record their argv."""

    bin_dir: Path

    def add(self, name: str) -> Path:
        return write_script(self.bin_dir / name, _STUB_DEBUGGER)

    def argv(self, name: str) -> list[str] | None:
        record = self.bin_dir / f"{name}-argv.json"
        if not record.exists():
            return None
        return json.loads(record.read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "cargo-debug-home"
    monkeypatch.setenv("CARGO_DEBUG_HOME", str(home))
    for name in ("CARGO_DEBUGGER", "CARGO", "CARGO_DEBUG_LOG", "STUB_DEBUGGER_EXIT"):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture()
def fake_cargo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeCargo:
    cargo = FakeCargo(write_script(tmp_path / "cargo-bin" / "cargo", _FAKE_CARGO))
    cargo.program([finished_message()])
    monkeypatch.setenv("CARGO", str(cargo.path))
    return cargo


@pytest.fixture()
def stub_debuggers(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> StubDebuggers:
    bin_dir = tmp_path / "debuggers"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return StubDebuggers(bin_dir)
