from __future__ import annotations

import os
from pathlib import Path

APP_ENV_CONFIG = "WORKLOAD_CONFIG"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains workload/, config/, tests/.
    """
    return Path(__file__).parent.parent.resolve()


def config_dir() -> Path:
    return project_root() / "config"


def config_file() -> Path:
    """
    Workload YAML config path.

    Resolution order:
    1. WORKLOAD_CONFIG env var (explicit override)
    2. <project>/config/workload.yaml (default)
    """
    if os.environ.get(APP_ENV_CONFIG):
        return Path(os.environ[APP_ENV_CONFIG]).expanduser().resolve()
    return config_dir() / "workload.yaml"
