"""Tests for ``load_client_config`` and ``ClientConfig`` validation.

Every test passes an explicit ``environ`` mapping so the process
environment is never consulted or mutated.
"""

from __future__ import annotations

import json

import pytest

from xai_chat.base.errors import ErrorCode, ProviderError
from xai_chat.config import ClientConfig, load_client_config
from xai_chat.config.defaults import XAI_DEFAULT_API_HOST, XAI_DEFAULT_TIMEOUT_SECONDS
from xai_chat.config.env import is_placeholder, is_truthy


def test_defaults_without_overrides():
    cfg = load_client_config(api_key="k", environ={})
    assert cfg.api_host == XAI_DEFAULT_API_HOST == "api.x.ai:443"
    assert cfg.timeout == XAI_DEFAULT_TIMEOUT_SECONDS == 60.0
    assert cfg.use_insecure is False
    assert cfg.require_transport_security is True
    assert cfg.metadata == {}


def test_environment_overrides():
    cfg = load_client_config(
        api_key="k",
        environ={"XAI_API_HOST": "localhost:50051", "XAI_TIMEOUT": "1m30s", "XAI_INSECURE": "true"},
    )
    assert cfg.api_host == "localhost:50051"
    assert cfg.timeout == 90.0
    assert cfg.use_insecure is True
    assert cfg.require_transport_security is False


@pytest.mark.parametrize("raw", ["soon", "10 parsecs", "1h-"])
def test_invalid_timeout_falls_back_to_default(raw, log_stream):
    cfg = load_client_config(api_key="k", environ={"XAI_TIMEOUT": raw})
    assert cfg.timeout == 60.0
    assert "config.timeout_invalid" in log_stream.getvalue()


def test_unitless_timeout_falls_back_to_default(log_stream):
    cfg = load_client_config(api_key="k", environ={"XAI_TIMEOUT": "45"})
    assert cfg.timeout == 60.0
    assert "config.timeout_invalid" in log_stream.getvalue()


def test_negative_timeout_falls_back_to_default():
    cfg = load_client_config(api_key="k", environ={"XAI_TIMEOUT": "-5s"})
    assert cfg.timeout == 60.0


def test_zero_timeout_disables_deadline():
    cfg = load_client_config(api_key="k", environ={"XAI_TIMEOUT": "0"})
    assert cfg.timeout == 0.0
    assert cfg.deadline_enabled is False


@pytest.mark.parametrize(
    "raw,expected",
    [("1", True), ("TRUE", True), ("Yes", True), ("0", False), ("false", False), ("on", False)],
)
def test_insecure_truthy_values(raw, expected):
    assert is_truthy(raw) is expected
    cfg = load_client_config(api_key="k", environ={"XAI_INSECURE": raw})
    assert cfg.use_insecure is expected


def test_api_key_from_environment():
    cfg = load_client_config(environ={"XAI_API_KEY": "from-env"})
    assert cfg.api_key == "from-env"


def test_explicit_api_key_beats_environment():
    cfg = load_client_config(api_key="explicit", environ={"XAI_API_KEY": "from-env"})
    assert cfg.api_key == "explicit"


def test_missing_api_key_raises_auth_error():
    with pytest.raises(ProviderError) as info:
        load_client_config(environ={})
    assert info.value.code is ErrorCode.AUTH


def test_overrides_win_over_environment():
    cfg = load_client_config(
        api_key="k",
        overrides={"api_host": "override:1", "timeout": None},
        environ={"XAI_API_HOST": "env:2"},
    )
    assert cfg.api_host == "override:1"
    # None overrides are ignored
    assert cfg.timeout == 60.0


def test_json_config_file(tmp_path):
    path = tmp_path / "xai.json"
    path.write_text(
        json.dumps({"api_host": "file:443", "timeout": "15s", "metadata": {"X-Team": "r"}, "ignored": 1}),
        encoding="utf-8",
    )
    cfg = load_client_config(api_key="k", environ={"XAI_CONFIG_FILE": str(path)})
    assert cfg.api_host == "file:443"
    assert cfg.timeout == 15.0
    assert cfg.metadata == {"x-team": "r"}


def test_yaml_config_file_is_below_environment(tmp_path):
    path = tmp_path / "xai.yaml"
    path.write_text("api_host: file:443\nuse_insecure: yes\ntimeout: 20\n", encoding="utf-8")
    cfg = load_client_config(
        api_key="k",
        environ={"XAI_CONFIG_FILE": str(path), "XAI_API_HOST": "env:443"},
    )
    assert cfg.api_host == "env:443"
    assert cfg.use_insecure is True
    assert cfg.timeout == 20.0


def test_missing_config_file_is_ignored(tmp_path):
    cfg = load_client_config(api_key="k", environ={"XAI_CONFIG_FILE": str(tmp_path / "nope.yaml")})
    assert cfg.api_host == XAI_DEFAULT_API_HOST


def test_config_file_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ProviderError) as info:
        load_client_config(api_key="k", environ={"XAI_CONFIG_FILE": str(path)})
    assert info.value.code is ErrorCode.VALIDATION


class TestClientConfigValidation:
    def test_empty_key_rejected(self):
        with pytest.raises(ValueError):
            ClientConfig(api_key="  ")

    def test_insecure_with_root_certificates_rejected(self):
        with pytest.raises(ValueError):
            ClientConfig(api_key="k", use_insecure=True, root_certificates=b"pem")

    def test_metadata_cannot_shadow_api_key_header(self):
        with pytest.raises(ValueError):
            ClientConfig(api_key="k", metadata={"X-API-KEY": "other"})

    def test_metadata_keys_lowercased(self):
        cfg = ClientConfig(api_key="k", metadata={"X-Client": "tests"})
        assert cfg.metadata == {"x-client": "tests"}

    def test_repr_hides_api_key(self):
        assert "secret-value" not in repr(ClientConfig(api_key="secret-value"))

    def test_frozen(self):
        cfg = ClientConfig(api_key="k")
        with pytest.raises(AttributeError):
            cfg.api_host = "other:1"  # type: ignore[misc]


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")
    assert is_placeholder("ChangeMe123")
    assert is_placeholder("test_token")
    assert not is_placeholder("xai-real-value")
    assert not is_placeholder(None)
