"""
Version information for the wasm deployer.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION = "wasm-deployer"
PYPROJECT = pathlib.Path(__file__).parent.parent / "pyproject.toml"
UNKNOWN_VERSION = "0.0.0"


def read_version(pyproject: pathlib.Path = PYPROJECT) -> str:
    """
    Installed metadata wins; a source checkout reads its pyproject.toml.

    Returns ``0.0.0`` when neither is available.
    """
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        pass
    try:
        with pyproject.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (OSError, KeyError, tomli.TOMLDecodeError):
        return UNKNOWN_VERSION


__version__ = read_version()
