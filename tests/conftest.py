"""Shared test fixtures for Rustitect."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from rustitect.config.models import RustitectConfig

RESOURCES = Path(__file__).parent / "resources"


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path, monkeypatch):
    """Keep the user's ~/.rustitect and PANDOC_PATH out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("PANDOC_PATH", raising=False)


@pytest.fixture
def sample_config():
    return RustitectConfig()


@pytest.fixture
def simple_struct_path():
    return RESOURCES / "simple_struct.rs"


@pytest.fixture
def simple_struct_source(simple_struct_path):
    return simple_struct_path.read_text(encoding="utf-8")


@pytest.fixture
def documented_source():
    """Struct with multi-line docs, documented fields and two methods."""
    return """
            /// This is a doc comment
            /// over multiple lines
            struct TestStruct {
                /// This is a doc comment of field1
                field1: String,
                /// This is a doc comment of field2
                field2: String,
            }

            impl TestStruct {
                /// Create a new TestStruct
                pub fn new(field1: String, field2: String,) -> Self {
                    TestStruct {
                        field1,
                        field2,
                    }
                }
                /// Another method
                pub fn another_method() -> Self {
                    do_something()
                }
            }
            """


def fake_pandoc_asciidoc(markdown: str) -> str:
    """Minimal stand-in for `pandoc -f markdown -t asciidoc`.

    Handles the subset the assembler emits: ATX headings and fenced code
    blocks, which pandoc renders as `[source,lang]` listings.
    """
    out: list[str] = []
    in_fence = False
    for line in markdown.splitlines():
        if not in_fence and line.startswith("```"):
            lang = line[3:].strip()
            if lang:
                out.append(f"[source,{lang}]")
            out.append("----")
            in_fence = True
            continue
        if in_fence and line.strip() == "```":
            out.append("----")
            in_fence = False
            continue
        if not in_fence and line.startswith("#"):
            level = len(line) - len(line.lstrip("#"))
            out.append("=" * level + line[level:])
            continue
        out.append(line)
    return "\n".join(out) + "\n"


@pytest.fixture
def fake_pandoc():
    """Patch subprocess.run in the converter with an in-process pandoc stand-in."""

    def _run(cmd, input="", **kwargs):
        return subprocess.CompletedProcess(
            args=cmd, returncode=0, stdout=fake_pandoc_asciidoc(input), stderr=""
        )

    with patch("rustitect.converter.converter.subprocess.run", side_effect=_run) as mock_run:
        yield mock_run
