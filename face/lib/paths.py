import os
from pathlib import Path


def data_dir() -> Path:
    override = os.environ.get("FACE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".face"


def package_root() -> Path:
    return Path(__file__).resolve().parent.parent


def config_file() -> Path:
    return data_dir() / "config.yaml"
