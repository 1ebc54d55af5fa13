"""运行配置 - Runtime settings

从环境变量（以及项目根目录的 .env）读取配置。
Settings are read from environment variables, with .env support via python-dotenv.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from .schemas import DialogOptions

ROOT = Path(__file__).resolve().parents[2]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


class Settings(BaseModel):
    key_prefix: str = "parts"
    dialog_min_width: str = "400px"
    dialog_panel_class: str = "edit-dialog"
    dialog_disable_close: bool = True
    log_level: str = "WARNING"

    def dialog_options(self) -> DialogOptions:
        return DialogOptions(
            disable_close=self.dialog_disable_close,
            min_width=self.dialog_min_width,
            panel_class=self.dialog_panel_class,
        )


def load_settings(env_file: Path | None = None, **overrides) -> Settings:
    """
    加载配置 - Load settings

    显式传入的参数优先于环境变量。
    Explicit keyword overrides win over environment values.
    """
    load_dotenv(env_file or ROOT / ".env")

    values = {
        "key_prefix": _env_str("PARTSGRID_KEY_PREFIX", "parts"),
        "dialog_min_width": _env_str("PARTSGRID_DIALOG_MIN_WIDTH", "400px"),
        "dialog_panel_class": _env_str("PARTSGRID_DIALOG_PANEL_CLASS", "edit-dialog"),
        "dialog_disable_close": _env_bool("PARTSGRID_DIALOG_DISABLE_CLOSE", True),
        "log_level": _env_str("PARTSGRID_LOG_LEVEL", "WARNING").upper(),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)


def configure_logging(level: str | int = "WARNING") -> None:
    """只设置包级 logger 的级别，不调用 basicConfig"""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.getLogger("partsgrid").setLevel(level)
