# === FILE: robots_protocol/config.py ===
"""
Модуль для загрузки и валидации настроек парсеров robots.txt и X-Robots-Tag.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Set, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from robots_protocol.txt.rule_group import DEFAULT_MATCH_TIMEOUT


class ParserConfig(BaseModel):
    """Настройки разбора robots.txt и X-Robots-Tag."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    ignore_allow_directive: bool = Field(
        False, description="Игнорировать нестандартную директиву Allow."
    )
    custom_fields: Set[str] = Field(
        default_factory=set, description="Нестандартные поля, значения которых нужно сохранить."
    )
    misspelled_fields: Dict[str, str] = Field(
        default_factory=dict, description="Опечатки в названиях полей -> правильное название."
    )
    special_words: Set[str] = Field(
        default_factory=set, description="Директивы X-Robots-Tag со значением (не user-agent)."
    )
    match_timeout: float = Field(
        DEFAULT_MATCH_TIMEOUT, gt=0, description="Таймаут проверки одного шаблона (секунд)."
    )
    user_agents: List[str] = Field(
        default_factory=lambda: ["*"], min_length=1, description="User-agent'ы для проверки в CLI."
    )

    @field_validator("custom_fields", "special_words", mode="after")
    def _lower_names(cls, v: Set[str]) -> Set[str]:
        return {name.strip().lower() for name in v}

    @field_validator("misspelled_fields", mode="after")
    def _lower_misspellings(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {key.strip().lower(): value.strip() for key, value in v.items()}

    def txt_options(self) -> Dict[str, Any]:
        """Аргументы для RobotsTxt.load."""
        return {
            "ignore_allow_directive": self.ignore_allow_directive,
            "custom_fields": self.custom_fields,
            "misspelled_fields": self.misspelled_fields,
        }


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ParserConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ParserConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return ParserConfig(**data)


__all__ = ["ParserConfig", "load_config"]
