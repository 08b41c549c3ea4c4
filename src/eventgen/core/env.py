"""
`.env` handling.

The OpenAI key usually lives in a repo-local `.env` file. `EVENTGEN_ENV_FILE` points at
an explicit file; otherwise python-dotenv searches upwards from the working directory.
Variables already set in the process environment always win.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def find_env_file() -> Path | None:
    """Locate the `.env` file to load (cached); None if there is none."""
    explicit = os.getenv("EVENTGEN_ENV_FILE")
    if explicit:
        path = Path(explicit).expanduser().resolve()
        return path if path.is_file() else None

    found = find_dotenv(usecwd=True)
    return Path(found) if found else None


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the `.env` file once; returns its path, or None when nothing was loaded."""
    env_path = find_env_file()
    if env_path is not None:
        load_dotenv(dotenv_path=env_path, override=False)
    return env_path
