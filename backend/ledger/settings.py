from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    storage_path: Path
    log_level: str


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("LEDGER_DATA_DIR")
    if env and env.strip():
        data_dir = Path(env).expanduser()
    else:
        # 2) default: backend/data
        # ledger/settings.py -> ledger/ -> backend/
        data_dir = Path(__file__).resolve().parents[1] / "data"

    data_dir.mkdir(parents=True, exist_ok=True)

    file_name = (os.getenv("LEDGER_STORAGE_FILE") or "").strip() or "db.json"
    storage_path = Path(file_name).expanduser()
    if not storage_path.is_absolute():
        storage_path = data_dir / storage_path

    log_level = (os.getenv("LEDGER_LOG_LEVEL") or "").strip().upper() or "WARNING"

    return Settings(data_dir=data_dir, storage_path=storage_path, log_level=log_level)
