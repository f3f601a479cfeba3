from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

ENV_VAR = "AOCKIT_DIR"


def get_config_dir(base_dir: Optional[Path] = None) -> Path:
    """Return the aoc-kit data directory Path, creating it if needed.

    Strategy:
    - An explicit ``base_dir`` wins (tests point this at a tmp dir)
    - Else, use $AOCKIT_DIR when set
    - Else, use ~/.aockit
    """
    if base_dir is not None:
        conf_dir = Path(base_dir)
    elif os.getenv(ENV_VAR):
        conf_dir = Path(os.environ[ENV_VAR]).expanduser()
    else:
        conf_dir = Path.home() / ".aockit"
    conf_dir.mkdir(parents=True, exist_ok=True)
    return conf_dir
