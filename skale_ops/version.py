"""
Version of skale-ops: installed distribution metadata, or pyproject.toml in a checkout.
"""
import importlib.metadata
import pathlib
import tomli

PYPROJECT = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _read_version() -> str:
    try:
        return importlib.metadata.version("skale-ops")
    except importlib.metadata.PackageNotFoundError:
        with open(PYPROJECT, "rb") as f:
            return tomli.load(f)["project"]["version"]


__version__ = _read_version()
