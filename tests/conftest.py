"""Shared test fixtures for Orbyt tests."""

import subprocess
from pathlib import Path

import pytest

from orbyt.config import AnalysisConfig


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def write_tree(root: Path, files: dict) -> Path:
    """Create files (relative POSIX path -> text content) under root."""
    for rel, content in files.items():
        path = root.joinpath(*rel.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def git(repo: Path, *args: str) -> str:
    """Run a git command in repo with a fixed identity."""
    result = subprocess.run(
        [
            "git",
            "-C",
            str(repo),
            "-c",
            "user.name=Test",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def make_repo(tmp_path):
    """Factory writing a source tree under a fresh directory."""

    def _make(files: dict, name: str = "repo") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files).resolve()

    return _make


@pytest.fixture
def run_git():
    """The git helper, for tests that build history."""
    return git


@pytest.fixture
def git_repo(tmp_path):
    """Empty initialized git repository."""
    repo = tmp_path / "gitrepo"
    repo.mkdir()
    git(repo, "init", "-q")
    return repo.resolve()


@pytest.fixture
def no_churn():
    """Config with git churn disabled, for deterministic offline builds."""
    return AnalysisConfig(churn_mode="off")


@pytest.fixture
def sample_files():
    """Small mixed tree: cross-folder imports, an external package, a config file."""
    return {
        "index.ts": 'import { app } from "./src/app";\n',
        "src/app.ts": (
            'import { util } from "../lib/util";\n'
            'import React from "react";\n'
            "export const app = () => {\n"
            "  if (util() && true) { return 1; }\n"
            "  return 0;\n"
            "};\n"
        ),
        "src/view.tsx": 'import { app } from "./app";\nexport const View = () => <div />;\n',
        "lib/util.ts": "export function util() {\n  return true;\n}\n",
        "lib/legacy.js": 'const util = require("./util");\nmodule.exports = util;\n',
        "config/settings.json": '{"debug": true}\n',
    }
