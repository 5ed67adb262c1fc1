from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional


logger = logging.getLogger("chat-relay.env")


def parse_env_line(raw_line: str) -> Optional[tuple[str, str]]:
    """Split one ``.env`` line into ``(key, value)``; ``None`` for blanks and comments."""
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if "=" not in line:
        logger.warning("Skipping malformed .env line: %s", raw_line)
        return None

    key, value = line.split("=", 1)
    clean_key = key.strip()
    if not clean_key:
        logger.warning("Skipping .env line without a key: %s", raw_line)
        return None
    return clean_key, value.strip().strip('"').strip("'")


def load_local_env(env_path: Path | str = Path(".env"), *, override: bool = False) -> Dict[str, str]:
    """Load key=value pairs from a local .env file into ``os.environ``.

    Variables already exported by the process take precedence unless
    ``override`` is set. Returns the pairs that were applied.
    """
    path = Path(env_path)
    if not path.exists():
        return {}

    applied: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        parsed = parse_env_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if not override and key in os.environ:
            continue
        os.environ[key] = value
        applied[key] = value

    if applied:
        logger.info("Loaded %d variable(s) from %s", len(applied), path)
    return applied
