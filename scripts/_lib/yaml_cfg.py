from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class ProfileError(ValueError):
    pass


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k, v in (update or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProfileError(f"cannot read profile {path}: {e}") from e
    try:
        obj = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ProfileError(f"invalid YAML in {path}: {e}") from e
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ProfileError(f"profile must be a YAML mapping, got {type(obj).__name__}: {path}")
    return obj


def load_with_defaults(path: Path, *, _stack: tuple[Path, ...] = ()) -> dict[str, Any]:
    """Load a YAML mapping, merging the files listed under ``defaults:`` first.

    Relative ``defaults`` entries resolve against the including file. Later
    entries and the including file itself win on conflicting keys.
    """
    path = path.expanduser().resolve()
    if path in _stack:
        chain = " -> ".join(str(p) for p in _stack + (path,))
        raise ProfileError(f"cycle detected in defaults chain: {chain}")

    cfg = read_yaml(path)
    defaults = cfg.pop("defaults", None) or []
    if isinstance(defaults, str):
        defaults = [defaults]
    if not isinstance(defaults, list):
        raise ProfileError(f"`defaults` must be a list: {path}")

    merged: dict[str, Any] = {}
    for item in defaults:
        if not isinstance(item, str) or not item.strip():
            raise ProfileError(f"invalid defaults item {item!r} in {path}")
        inc = Path(item).expanduser()
        if not inc.is_absolute():
            inc = path.parent / inc
        merged = deep_merge(merged, load_with_defaults(inc, _stack=_stack + (path,)))
    return deep_merge(merged, cfg)
