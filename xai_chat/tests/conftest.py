"""Pytest configuration for the xai_chat test suite.

Provides an in-process gRPC server implementing the generated Chat and Auth
servicers so transport behaviour (headers, deadlines, cancellation, status
mapping) is exercised against the real grpcio runtime without network access.
"""

from __future__ import annotations

import io
import logging
import threading
import time
from concurrent import futures
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

import grpc
import pytest

from xai_chat.base.log_support import JsonFormatter
from xai_chat.base.logging import get_logger
from xai_chat.client import Client
from xai_chat.config.env import (
    XAI_API_HOST_ENV,
    XAI_API_KEY_ENV,
    XAI_CONFIG_FILE_ENV,
    XAI_INSECURE_ENV,
    XAI_TIMEOUT_ENV,
)
from xai_chat.proto import auth_pb2, auth_pb2_grpc, chat_pb2, chat_pb2_grpc

TEST_API_KEY = "xai-unit-key-123"


class RecordingChatServicer(chat_pb2_grpc.ChatServicer):
    """Chat servicer that records calls and can be told to stall or fail."""

    def __init__(self) -> None:
        self.requests: List[chat_pb2.GetCompletionsRequest] = []
        self.metadata: List[Dict[str, str]] = []
        self.delay: float = 0.0
        self.abort_with: Optional[Tuple[grpc.StatusCode, str]] = None
        self.entered = threading.Event()
        self._lock = threading.Lock()

    def GetCompletion(self, request, context):  # noqa: N802 - generated name
        with self._lock:
            self.requests.append(request)
            self.metadata.append({k: v for k, v in context.invocation_metadata()})
        self.entered.set()
        end = time.monotonic() + self.delay
        while time.monotonic() < end and context.is_active():
            time.sleep(0.01)
        if self.abort_with is not None:
            context.abort(*self.abort_with)
        return chat_pb2.GetChatCompletionResponse(id=f"resp-{len(self.requests)}")


class RecordingAuthServicer(auth_pb2_grpc.AuthServicer):
    def __init__(self) -> None:
        self.metadata: List[Dict[str, str]] = []

    def get_api_key_info(self, request, context):
        self.metadata.append({k: v for k, v in context.invocation_metadata()})
        return auth_pb2.ApiKey()


@dataclass
class LocalServer:
    address: str
    chat: RecordingChatServicer
    auth: RecordingAuthServicer


@pytest.fixture()
def chat_server() -> Iterator[LocalServer]:
    """Start a plaintext gRPC server on an ephemeral localhost port."""
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=8))
    chat = RecordingChatServicer()
    auth = RecordingAuthServicer()
    chat_pb2_grpc.add_ChatServicer_to_server(chat, server)
    auth_pb2_grpc.add_AuthServicer_to_server(auth, server)
    port = server.add_insecure_port("127.0.0.1:0")
    server.start()
    yield LocalServer(address=f"127.0.0.1:{port}", chat=chat, auth=auth)
    server.stop(grace=None)


@pytest.fixture()
def api_key() -> str:
    return TEST_API_KEY


@pytest.fixture()
def local_client(chat_server: LocalServer) -> Iterator[Client]:
    """A plaintext client pointed at ``chat_server`` with a 5s deadline."""
    client = Client.with_options(
        TEST_API_KEY,
        chat_server.address,
        metadata={"X-Team": "qa"},
        timeout=5.0,
        use_insecure=True,
    )
    yield client
    client.close()


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every XAI_* variable the config adapter reads."""
    for name in (
        XAI_API_KEY_ENV,
        XAI_API_HOST_ENV,
        XAI_TIMEOUT_ENV,
        XAI_INSECURE_ENV,
        XAI_CONFIG_FILE_ENV,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def log_stream() -> Iterator[io.StringIO]:
    """Capture JSON log lines emitted through the shared ``xai_chat`` logger."""
    logger = get_logger()
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    yield stream
    logger.removeHandler(handler)
