"""Configuration layer for the client.

Goals
-----
* Centralize defaults (host, timeout, transport security).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by XAI_CONFIG_FILE
    3. Environment variables (XAI_API_HOST, XAI_TIMEOUT, XAI_INSECURE, XAI_API_KEY)
    4. In-code overrides passed to the loader
* Produce a single immutable :class:`ClientConfig`; the connection builder
  only ever accepts that object.

External Config File (Optional)
-------------------------------
If XAI_CONFIG_FILE is set to a path, we attempt to load JSON first and YAML
second. Recognized keys mirror ``ClientConfig`` fields:

```
api_host: localhost:50051
timeout: 30s
use_insecure: true
metadata:
  x-team: research
```

Public API
----------
* load_client_config(api_key=None, overrides=None, environ=None) -> ClientConfig
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import get_logger, log_event
from ..base.timeouts import parse_duration
from .client_config import ClientConfig
from .defaults import (
    XAI_DEFAULT_API_HOST,
    XAI_DEFAULT_TIMEOUT_SECONDS,
    XAI_DEFAULT_USE_INSECURE,
)
from .env import (
    XAI_API_HOST_ENV,
    XAI_CONFIG_FILE_ENV,
    XAI_INSECURE_ENV,
    XAI_TIMEOUT_ENV,
    get_env,
    is_placeholder,
    is_truthy,
    resolve_api_key,
)

_logger = get_logger("xai_chat.config")

DEFAULTS: Dict[str, Any] = {
    "api_host": XAI_DEFAULT_API_HOST,
    "timeout": XAI_DEFAULT_TIMEOUT_SECONDS,
    "use_insecure": XAI_DEFAULT_USE_INSECURE,
    "metadata": {},
}

_FILE_KEYS = frozenset(
    {"api_key", "api_host", "timeout", "use_insecure", "metadata", "connect_timeout"}
)


def _load_config_file(path: str) -> Dict[str, Any]:
    """Read a JSON or YAML mapping from ``path``.

    A missing file yields ``{}``. A file that parses to something other than
    a mapping is a configuration error.
    """
    p = Path(path).expanduser()
    if not p.is_file():
        log_event(_logger, "config.file_missing", path=str(p))
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"config file {p} is neither valid JSON nor YAML",
                raw=exc,
            ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProviderError(code=ErrorCode.VALIDATION, message=f"config file {p} must contain a mapping")
    return {k: v for k, v in data.items() if k in _FILE_KEYS}


def _coerce_timeout(value: Any, source: str) -> Optional[float]:
    """Turn a file/env timeout value into seconds.

    Strings go through :func:`parse_duration`. Invalid or negative values fall
    back to the default with a warning; ``0`` and ``None`` disable the deadline.
    """
    if value is None:
        return None
    try:
        seconds = float(value) if isinstance(value, (int, float)) else parse_duration(str(value))
    except ValueError:
        log_event(
            _logger,
            "config.timeout_invalid",
            level=logging.WARNING,
            source=source,
            value=str(value),
            fallback=XAI_DEFAULT_TIMEOUT_SECONDS,
        )
        return XAI_DEFAULT_TIMEOUT_SECONDS
    if seconds < 0:
        log_event(
            _logger,
            "config.timeout_invalid",
            level=logging.WARNING,
            source=source,
            value=str(value),
            reason="negative",
            fallback=XAI_DEFAULT_TIMEOUT_SECONDS,
        )
        return XAI_DEFAULT_TIMEOUT_SECONDS
    return seconds


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return is_truthy(str(value))


def _env_overrides(environ: Optional[Mapping[str, str]]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if host := get_env(XAI_API_HOST_ENV, environ):
        out["api_host"] = host
    if (raw_timeout := get_env(XAI_TIMEOUT_ENV, environ)) is not None:
        out["timeout"] = _coerce_timeout(raw_timeout, XAI_TIMEOUT_ENV)
    if (raw_insecure := get_env(XAI_INSECURE_ENV, environ)) is not None:
        out["use_insecure"] = is_truthy(raw_insecure)
    if key := resolve_api_key(environ):
        out["api_key"] = key
    return out


def load_client_config(
    api_key: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ClientConfig:
    """Return a :class:`ClientConfig` built from every configuration source.

    Merge order (later wins): defaults -> config file -> env vars -> ``api_key``
    argument -> ``overrides``. ``environ`` defaults to ``os.environ``.

    Raises:
        ProviderError: ``AUTH`` when no API key is available from any source,
            ``VALIDATION`` for an unreadable config file.
        ValueError: when the merged values are rejected by ``ClientConfig``.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)

    if config_path := get_env(XAI_CONFIG_FILE_ENV, environ):
        file_cfg = _load_config_file(config_path)
        if "timeout" in file_cfg:
            file_cfg["timeout"] = _coerce_timeout(file_cfg["timeout"], config_path)
        if "use_insecure" in file_cfg:
            file_cfg["use_insecure"] = _coerce_bool(file_cfg["use_insecure"])
        cfg |= file_cfg

    cfg |= _env_overrides(environ)

    if api_key:
        cfg["api_key"] = api_key
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    key = cfg.get("api_key")
    if not key:
        raise ProviderError(
            code=ErrorCode.AUTH,
            message="no API key supplied; pass api_key or set XAI_API_KEY",
        )
    if is_placeholder(key):
        log_event(_logger, "config.api_key_placeholder", level=logging.WARNING)
    return ClientConfig(**cfg)


__all__ = [
    "ClientConfig",
    "DEFAULTS",
    "load_client_config",
]
