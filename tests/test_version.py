"""
Tests for version discovery and the --version flag.
"""
import importlib.metadata
import re

import pytest

from wasm_deployer import __version__
from wasm_deployer import version as vmod
from wasm_deployer.deploy import main


def _not_installed(name):
    raise importlib.metadata.PackageNotFoundError(name)


def test_version_format():
    assert re.match(r"^\d+\.\d+\.\d+", __version__)


def test_installed_metadata_wins(monkeypatch, tmp_path):
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nversion = "9.9.9"\n')
    monkeypatch.setattr(importlib.metadata, "version", lambda name: "2.3.4")

    assert vmod.read_version(pyproject) == "2.3.4"


def test_source_checkout_reads_pyproject(monkeypatch, tmp_path):
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "wasm-deployer"\nversion = "1.2.3"\n')
    monkeypatch.setattr(importlib.metadata, "version", _not_installed)

    assert vmod.read_version(pyproject) == "1.2.3"


@pytest.mark.parametrize("content", [
    None,
    '[project]\nname = "wasm-deployer"\n',
    "[project\nversion = ",
])
def test_unreadable_pyproject_falls_back(monkeypatch, tmp_path, content):
    """Missing file, missing key and broken TOML all give the placeholder"""
    pyproject = tmp_path / "pyproject.toml"
    if content is not None:
        pyproject.write_text(content)
    monkeypatch.setattr(importlib.metadata, "version", _not_installed)

    assert vmod.read_version(pyproject) == vmod.UNKNOWN_VERSION


def test_cli_version_flag(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == f"wasm-deploy {__version__}"
