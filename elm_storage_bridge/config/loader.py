"""Load the bridge config: one YAML file, an optional overlay, strict ${ENV_VAR}."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from elm_storage_bridge.config.model import AppConfig
from elm_storage_bridge.errors import ConfigError


_ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError("Config file not found", path=str(path))
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}", path=str(path)) from e
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError("Top-level YAML must be a mapping/dict", path=str(path))
    return dict(data)


def _overlay_sections(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    # Sections (cache/storage/logging) merge key by key; anything else is replaced.
    merged = dict(base)
    for section, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(merged.get(section), Mapping):
            merged[section] = {**merged[section], **value}
        else:
            merged[section] = value
    return merged


def _expand_env(obj: Any, *, key_path: str) -> Any:
    if isinstance(obj, str):
        def repl(match: re.Match[str]) -> str:
            name = match.group(1)
            value = os.getenv(name)
            if value is None or value == "":
                reason = "missing" if value is None else "empty"
                raise ConfigError(f"Environment variable {name} is {reason}", path=key_path or "<root>")
            return value

        return _ENV_PLACEHOLDER_RE.sub(repl, obj)
    if isinstance(obj, Mapping):
        return {str(k): _expand_env(v, key_path=f"{key_path}.{k}" if key_path else str(k)) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env(v, key_path=f"{key_path}[{i}]") for i, v in enumerate(obj)]
    return obj


def load_config(
    path: str | Path,
    *,
    overlay: str | Path | None = None,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> dict[str, Any]:
    """Read ``path`` (plus ``overlay``, if any) and expand ``${ENV_VAR}`` placeholders.

    Raises:
        ConfigError: If a file is missing or invalid, or a referenced env var is
            missing or empty.
    """

    if load_dotenv_file:
        # Already-set variables win over .env entries.
        load_dotenv(dotenv_path or Path.cwd() / ".env", override=False)

    raw = _read_yaml(Path(path))
    if overlay is not None:
        raw = _overlay_sections(raw, _read_yaml(Path(overlay)))

    return _expand_env(raw, key_path="")


def load_app_config(
    path: str | Path,
    *,
    overlay: str | Path | None = None,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> AppConfig:
    """Load and validate into :class:`AppConfig`.

    A relative ``storage.path`` is resolved against the directory of ``path``,
    so the store does not move with the working directory.
    """

    raw = load_config(path, overlay=overlay, load_dotenv_file=load_dotenv_file, dotenv_path=dotenv_path)
    return AppConfig.from_raw(raw, base_dir=Path(path).expanduser().resolve().parent)
