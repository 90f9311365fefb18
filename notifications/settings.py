"""Toast scheduler settings.

Values come from three layers, later ones winning:

1. built-in defaults,
2. the ``[notifications]`` section of ``data/app.ini`` (the data directory can
   be moved with ``CHECKIN_DATA_DIR``),
3. ``TOAST_DEFAULT_CATEGORY`` / ``TOAST_DEFAULT_LIFETIME_MS`` environment
   variables.

Bad values never raise; they are logged and the previous layer is kept.
"""

from __future__ import annotations

import configparser
import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

INI_SECTION = "notifications"
_INT_FIELDS = ("default_lifetime_ms", "margin_px", "spacing_px", "max_width_px")
_ENV_KEYS = {
    "TOAST_DEFAULT_CATEGORY": "default_category",
    "TOAST_DEFAULT_LIFETIME_MS": "default_lifetime_ms",
}


@dataclass(frozen=True)
class ToastSettings:
    default_category: str = "info"
    default_lifetime_ms: int = 3000
    margin_px: int = 16
    spacing_px: int = 12
    max_width_px: int = 384


def default_ini_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    return Path(env.get("CHECKIN_DATA_DIR", "data")) / "app.ini"


def _coerce(field: str, value: Any, fallback: Any, origin: str) -> Any:
    if field in _INT_FIELDS:
        try:
            num = int(str(value).strip())
        except (TypeError, ValueError):
            logger.warning("[toast-settings] %s=%r from %s is not an integer; keeping %s", field, value, origin, fallback)
            return fallback
        if num < 0:
            logger.warning("[toast-settings] %s=%r from %s is negative; keeping %s", field, value, origin, fallback)
            return fallback
        return num
    text = str(value).strip()
    if not text:
        logger.warning("[toast-settings] %s from %s is blank; keeping %r", field, origin, fallback)
        return fallback
    return text


def _read_ini(ini_path: Path) -> Dict[str, str]:
    if not ini_path.exists():
        return {}
    cp = configparser.ConfigParser()
    try:
        cp.read(ini_path, encoding="utf-8")
    except configparser.Error as exc:
        logger.warning("[toast-settings] unable to parse %s: %s", ini_path, exc)
        return {}
    if not cp.has_section(INI_SECTION):
        return {}
    return dict(cp.items(INI_SECTION))


def load_toast_settings(
    ini_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ToastSettings:
    env = os.environ if environ is None else environ
    path = ini_path or default_ini_path(env)
    values = dataclasses.asdict(ToastSettings())

    for key, raw in _read_ini(path).items():
        if key not in values:
            logger.debug("[toast-settings] ignoring unknown key %s in %s", key, path)
            continue
        values[key] = _coerce(key, raw, values[key], str(path))

    for env_key, field in _ENV_KEYS.items():
        if env_key in env:
            values[field] = _coerce(field, env[env_key], values[field], env_key)

    return ToastSettings(**values)


__all__ = ["ToastSettings", "load_toast_settings", "default_ini_path", "INI_SECTION"]
