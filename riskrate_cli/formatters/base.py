from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any


class BaseFormatter(ABC):
    @abstractmethod
    def write(self, data: Any, output_path: Path) -> None:
        ...

    @abstractmethod
    def file_extension(self) -> str:
        ...


def to_plain(data: Any) -> Any:
    """Convert report objects into JSON/YAML-safe builtins."""
    if is_dataclass(data) and not isinstance(data, type):
        return to_plain(asdict(data))
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, date):
        return data.isoformat()
    if isinstance(data, dict):
        return {str(key): to_plain(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data
