import json
import shutil
from pathlib import Path
from typing import Any


def read_json(file_path: Path) -> Any:
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(file_path: Path, data: dict) -> None:
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def write_json_atomic(file_path: Path, data: dict) -> None:
    """Write JSON data atomically by writing to a temp file then renaming it."""
    final_path = Path(file_path)
    final_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = final_path.with_suffix(".tmp")

    write_json(temp_path, data)

    shutil.move(str(temp_path), str(final_path))
