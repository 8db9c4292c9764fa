"""Helpers for loading runtime configuration profiles."""
from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ErrorCode, WordCountError
from .models import GlobalSettings, ProfileSettings, RuntimeConfig

DEFAULT_CONFIG_PATH = Path("config/defaults.json")
DEFAULT_PROFILE = "default"
ALLOWED_ERROR_POLICIES = {"fail-fast", "strict", "replace"}


@dataclass(slots=True)
class ConfigDocument:
    source: Optional[Path]
    version: int
    global_settings: GlobalSettings
    profiles: Dict[str, ProfileSettings]


def load_runtime_config(
    profile: str = DEFAULT_PROFILE,
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> RuntimeConfig:
    """Load configuration JSON, validate it, and resolve a specific profile.

    When no explicit ``config_path`` is given and the default file does not
    exist, the built-in defaults are used as the ``default`` profile.
    """

    document = load_config_document(
        profile_name=profile,
        config_path=config_path,
        overrides=overrides,
    )
    return RuntimeConfig(global_settings=document.global_settings, profile=document.profiles[profile])


def load_config_document(
    *,
    profile_name: Optional[str] = None,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> ConfigDocument:
    if config_path is None and not DEFAULT_CONFIG_PATH.is_file():
        raw = _builtin_config()
        cfg_path: Optional[Path] = None
    else:
        cfg_path = config_path or DEFAULT_CONFIG_PATH
        raw = _read_config_json(cfg_path)
    source = cfg_path or "<built-in defaults>"

    version = _require_positive_int(raw.get("version"), "version", source)
    global_section = raw.get("global")
    if not isinstance(global_section, Mapping):
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"'global' section missing in {source}")

    overrides = overrides or {}
    global_data = {**global_section, **(overrides.get("global") or {})}
    global_settings = _build_global_settings(global_data, source)

    profiles_section = raw.get("profiles")
    if not isinstance(profiles_section, Mapping) or not profiles_section:
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"'profiles' section missing in {source}")

    profile_overrides = overrides.get("profile") or {}
    profiles: Dict[str, ProfileSettings] = {}
    for name, profile_data in profiles_section.items():
        if not isinstance(profile_data, Mapping):
            raise WordCountError(
                ErrorCode.CONFIG_ERROR,
                f"Profile '{name}' must be an object in {source}",
            )
        merged = dict(profile_data)
        if profile_name and name == profile_name and profile_overrides:
            merged = {**merged, **profile_overrides}
        profiles[name] = _build_profile_settings(name, merged, source)

    if profile_name and profile_name not in profiles:
        raise WordCountError(
            ErrorCode.CONFIG_ERROR,
            f"Profile '{profile_name}' not found in {source}",
        )

    return ConfigDocument(
        source=cfg_path,
        version=version,
        global_settings=global_settings,
        profiles=profiles,
    )


def error_mode_from_policy(policy: str) -> str:
    """Translate human-friendly error policy into Python's encoding error handler."""

    return "strict" if policy.lower() in {"fail-fast", "strict"} else "replace"


# ---------------------------------------------------------------------------
# Internal helpers


def _builtin_config() -> Dict[str, Any]:
    defaults = ProfileSettings()
    settings = GlobalSettings()
    return {
        "version": 1,
        "global": {"encoding": settings.encoding, "error_policy": settings.error_policy},
        "profiles": {
            DEFAULT_PROFILE: {
                "description": defaults.description,
                "batch_size": defaults.batch_size,
                "pause_ms": defaults.pause_ms,
                "buffer_size": defaults.buffer_size,
                "streaming": defaults.streaming,
            }
        },
    }


def _read_config_json(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' not found") from exc
    except json.JSONDecodeError as exc:
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' is not valid JSON: {exc}") from exc


def _build_global_settings(data: Mapping[str, Any], source: Any) -> GlobalSettings:
    encoding = _require_string(data.get("encoding", GlobalSettings().encoding), "global.encoding", source)
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise WordCountError(
            ErrorCode.CONFIG_ERROR,
            f"Unknown global.encoding '{encoding}' in {source}",
        ) from exc
    error_policy = _normalize_error_policy(
        data.get("error_policy", GlobalSettings().error_policy),
        source,
    )
    return GlobalSettings(encoding=encoding, error_policy=error_policy)


def _build_profile_settings(name: str, data: Mapping[str, Any], source: Any) -> ProfileSettings:
    prefix = f"profiles.{name}"
    required_fields = ("description", "batch_size", "pause_ms")
    missing = [field for field in required_fields if field not in data]
    if missing:
        raise WordCountError(
            ErrorCode.CONFIG_ERROR,
            f"Profile '{name}' missing fields {missing} in {source}",
        )

    description = _require_string(data.get("description"), f"{prefix}.description", source)
    batch_size = _require_positive_int(data.get("batch_size"), f"{prefix}.batch_size", source)
    pause_ms = _require_non_negative_int(data.get("pause_ms"), f"{prefix}.pause_ms", source)
    buffer_size = _require_positive_int(
        data.get("buffer_size", ProfileSettings().buffer_size), f"{prefix}.buffer_size", source
    )
    streaming = data.get("streaming", False)
    if not isinstance(streaming, bool):
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"{prefix}.streaming must be a boolean in {source}")

    return ProfileSettings(
        description=description,
        batch_size=batch_size,
        pause_ms=pause_ms,
        buffer_size=buffer_size,
        streaming=streaming,
    )


def _normalize_error_policy(value: Any, source: Any) -> str:
    policy = _require_string(value, "global.error_policy", source).lower()
    if policy not in ALLOWED_ERROR_POLICIES:
        allowed = ", ".join(sorted(ALLOWED_ERROR_POLICIES))
        raise WordCountError(
            ErrorCode.CONFIG_ERROR,
            f"Unsupported error_policy '{value}' in {source}. Allowed: {allowed}",
        )
    return "fail-fast" if policy in {"fail-fast", "strict"} else "replace"


def _require_string(value: Any, field: str, source: Any) -> str:
    if not isinstance(value, str):
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"{field} must be a string in {source}")
    text = value.strip()
    if not text:
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"{field} must be non-empty in {source}")
    return text


def _coerce_int(value: Any, field: str, source: Any) -> int:
    if isinstance(value, bool):
        raise WordCountError(ErrorCode.CONFIG_ERROR, f"{field} must be an integer in {source}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise WordCountError(
            ErrorCode.CONFIG_ERROR,
            f"{field} must be an integer in {source}",
        ) from exc


def _require_positive_int(value: Any, field: str, source: Any) -> int:
    num = _coerce_int(value, field, source)
    if num <= 0:
        raise WordCountError(
            ErrorCode.CONFIG_ERROR,
            f"{field} must be greater than zero in {source}",
        )
    return num


def _require_non_negative_int(value: Any, field: str, source: Any) -> int:
    num = _coerce_int(value, field, source)
    if num < 0:
        raise WordCountError(
            ErrorCode.CONFIG_ERROR,
            f"{field} must not be negative in {source}",
        )
    return num
