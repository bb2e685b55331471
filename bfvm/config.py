from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from bfvm.tape import DEFAULT_TAPE_SIZE


class EOFPolicy(str, Enum):
    UNCHANGED = "unchanged"
    ZERO = "zero"
    MAX = "max"
    ERROR = "error"


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    tape_size: int = Field(default=DEFAULT_TAPE_SIZE, gt=0)
    # What a read does once input is exhausted. UNCHANGED leaves the cell as is.
    eof: EOFPolicy = EOFPolicy.UNCHANGED


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`, fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


def load_settings() -> EngineSettings:
    load_env()
    raw: dict[str, str] = {}
    tape_size = (os.getenv("BFVM_TAPE_SIZE") or "").strip()
    if tape_size:
        raw["tape_size"] = tape_size
    eof = (os.getenv("BFVM_EOF") or "").strip().lower()
    if eof:
        raw["eof"] = eof
    return EngineSettings.model_validate(raw)
