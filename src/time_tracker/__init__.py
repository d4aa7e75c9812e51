"""time-tracker: offline activity logger with export-and-clear."""

import tomllib
from pathlib import Path

try:
    # Prefer pyproject.toml so editable installs report the working version
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    __version__ = data["project"]["version"]
except Exception:
    try:
        from importlib.metadata import version

        __version__ = version("time-tracker")
    except Exception:
        __version__ = "0.0.0-dev"
