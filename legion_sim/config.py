from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
import os

import yaml

from .errors import InvalidConfigError
from .models import AttackContext

DEFAULT_ENV_PREFIX = "LEGION_SIM__"

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _load_one(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    # JSON presets parse as YAML too
    try:
        d = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfigError(f"{path}: not valid YAML/JSON ({exc})") from exc
    if d is None:
        return {}
    if not isinstance(d, dict):
        raise InvalidConfigError(f"{path}: top level must be a mapping")
    return d

def load_configs(paths: Iterable[str] | None) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    for p in (paths or []):
        cfg = _deep_merge(cfg, _load_one(p))
    return cfg

def env_overrides(prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, Any]:
    # Nested via double underscores: LEGION_SIM__ATTACKER__RED_DICE=3
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(prefix):
            continue
        parts = k[len(prefix):].split("__")
        cur = out
        for i, part in enumerate(parts):
            key = part.lower()
            if i == len(parts) - 1:
                cur[key] = _coerce(v)
            else:
                cur = cur.setdefault(key, {})
    return out

def _coerce(s: str) -> Any:
    t = s.strip().lower()
    if t in ("true", "false"):
        return t == "true"
    try:
        if "." in t:
            return float(t)
        return int(t)
    except ValueError:
        return s

def apply_cli_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    return _deep_merge(base, overrides or {})

def load_context(
    paths: Iterable[str] | None = None,
    env_prefix: Optional[str] = DEFAULT_ENV_PREFIX,
    overrides: Optional[Dict[str, Any]] = None,
) -> AttackContext:
    """Merge preset files, then environment, then explicit overrides."""
    cfg = load_configs(paths)
    if env_prefix:
        cfg = apply_cli_overrides(cfg, env_overrides(env_prefix))
    cfg = apply_cli_overrides(cfg, overrides or {})
    return AttackContext.from_dict(cfg)

__all__ = [
    "load_configs",
    "env_overrides",
    "apply_cli_overrides",
    "load_context",
    "_deep_merge",
    "DEFAULT_ENV_PREFIX",
]
