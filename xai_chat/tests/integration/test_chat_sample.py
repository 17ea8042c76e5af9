"""End-to-end sampling against the in-process gRPC server.

These tests run the real grpcio runtime over a localhost plaintext channel,
so header injection, deadlines, cancellation and status mapping are
exercised exactly as a caller would see them.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import grpc
import pytest

from xai_chat import (
    CancellationToken,
    CancelledError,
    Client,
    ErrorCode,
    ProviderError,
    search_parameters_x_on,
    system,
    user,
)
from xai_chat.proto import chat_pb2


def test_sample_sends_request_and_headers(local_client, chat_server, api_key):
    chat = local_client.chat_create_with_prompt("grok-3", "hello", search_parameters_x_on(True, 4))
    response = chat.sample()

    assert response.id == "resp-1"  # nosec B101
    sent = chat_server.chat.requests[0]
    assert sent.model == "grok-3"  # nosec B101
    assert sent.messages[0].role == chat_pb2.MessageRole.ROLE_USER  # nosec B101
    assert sent.messages[0].content[0].text == "hello"  # nosec B101
    assert sent.search_parameters.max_search_results == 4  # nosec B101
    assert sent.search_parameters.sources[0].WhichOneof("source") == "x"  # nosec B101
    headers = chat_server.chat.metadata[0]
    assert headers["x-api-key"] == api_key  # nosec B101
    assert headers["x-team"] == "qa"  # nosec B101


def test_sample_without_search_parameters(local_client, chat_server):
    local_client.chat_create("grok-3", [system("be brief"), user("hi")]).sample()
    sent = chat_server.chat.requests[0]
    assert not sent.HasField("search_parameters")  # nosec B101
    assert [m.role for m in sent.messages] == [  # nosec B101
        chat_pb2.MessageRole.ROLE_SYSTEM,
        chat_pb2.MessageRole.ROLE_USER,
    ]


def test_sample_resends_identical_request(local_client, chat_server):
    chat = local_client.chat_create_with_prompt("grok-3", "again")
    chat.sample()
    chat.sample()
    first, second = chat_server.chat.requests
    assert first == second  # nosec B101


def test_request_copy_does_not_leak_mutations(local_client, chat_server):
    chat = local_client.chat_create_with_prompt("grok-3", "original")
    copy = chat.request
    copy.model = "other"
    copy.messages[0].content[0].text = "tampered"
    chat.sample()
    sent = chat_server.chat.requests[0]
    assert sent.model == "grok-3"  # nosec B101
    assert sent.messages[0].content[0].text == "original"  # nosec B101


def test_connection_deadline_maps_to_timeout(chat_server, api_key):
    chat_server.chat.delay = 5.0
    client = Client.with_options(api_key, chat_server.address, timeout=0.3, use_insecure=True)
    try:
        started = time.monotonic()
        with pytest.raises(ProviderError) as info:
            client.chat_create_with_prompt("grok-3", "slow").sample()
        elapsed = time.monotonic() - started
    finally:
        client.close()
    assert info.value.code is ErrorCode.TIMEOUT  # nosec B101
    assert info.value.retryable is True  # nosec B101
    assert info.value.model == "grok-3"  # nosec B101
    assert elapsed < 3.0  # nosec B101


def test_per_call_timeout_tightens_deadline(local_client, chat_server):
    chat_server.chat.delay = 5.0
    with pytest.raises(ProviderError) as info:
        local_client.chat_create_with_prompt("grok-3", "slow").sample(timeout=0.2)
    assert info.value.code is ErrorCode.TIMEOUT  # nosec B101


def test_disabled_deadline_waits_for_slow_server(chat_server, api_key):
    chat_server.chat.delay = 0.5
    client = Client.with_options(api_key, chat_server.address, timeout=0, use_insecure=True)
    try:
        response = client.chat_create_with_prompt("grok-3", "patient").sample()
    finally:
        client.close()
    assert response.id == "resp-1"  # nosec B101


def test_cancel_in_flight_sample(local_client, chat_server):
    chat_server.chat.delay = 5.0
    token = CancellationToken()
    chat = local_client.chat_create_with_prompt("grok-3", "long")

    def _cancel_when_entered():
        chat_server.chat.entered.wait(timeout=5.0)
        token.cancel("user abort")

    canceller = threading.Thread(target=_cancel_when_entered)
    canceller.start()
    started = time.monotonic()
    with pytest.raises(CancelledError, match="user abort"):
        chat.sample(cancellation_token=token)
    canceller.join()
    assert time.monotonic() - started < 3.0  # nosec B101


def test_cancelled_token_skips_rpc(local_client, chat_server):
    token = CancellationToken()
    token.cancel("never mind")
    with pytest.raises(CancelledError):
        local_client.chat_create_with_prompt("grok-3", "x").sample(cancellation_token=token)
    assert chat_server.chat.requests == []  # nosec B101


def test_server_status_is_mapped(local_client, chat_server):
    chat_server.chat.abort_with = (grpc.StatusCode.UNAUTHENTICATED, "bad key")
    with pytest.raises(ProviderError) as info:
        local_client.chat_create_with_prompt("grok-3", "x").sample()
    assert info.value.code is ErrorCode.AUTH  # nosec B101
    assert info.value.message == "bad key"  # nosec B101
    assert isinstance(info.value.raw, grpc.RpcError)  # nosec B101


def test_concurrent_samples_share_one_chat(local_client, chat_server):
    chat = local_client.chat_create_with_prompt("grok-3", "parallel")
    with ThreadPoolExecutor(max_workers=4) as pool:
        responses = list(pool.map(lambda _: chat.sample(), range(8)))
    assert len({r.id for r in responses}) == 8  # nosec B101
    assert len(chat_server.chat.requests) == 8  # nosec B101


def test_api_key_info_sends_header(local_client, chat_server, api_key):
    local_client.api_key_info()
    assert chat_server.auth.metadata[0]["x-api-key"] == api_key  # nosec B101


def test_from_env_mapping_reaches_local_server(chat_server, api_key):
    client = Client.from_env(
        environ={
            "XAI_API_KEY": api_key,
            "XAI_API_HOST": chat_server.address,
            "XAI_INSECURE": "1",
            "XAI_TIMEOUT": "5s",
        }
    )
    with client:
        assert client.chat_create_with_prompt("grok-3", "env").sample().id == "resp-1"  # nosec B101
    assert chat_server.chat.metadata[0]["x-api-key"] == api_key  # nosec B101


def test_api_key_never_logged(local_client, chat_server, api_key, log_stream):
    local_client.chat_create_with_prompt("grok-3", "quiet").sample()
    local_client.close()
    output = log_stream.getvalue()
    assert "chat.sample" in output  # nosec B101
    assert api_key not in output  # nosec B101
