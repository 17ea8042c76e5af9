"""Chat handle: a built completion request bound to a stub.

``Chat`` stores a ``GetCompletionsRequest`` that is never mutated after
construction; :attr:`Chat.request` hands out copies. Every :meth:`Chat.sample`
call resends the same request, so one ``Chat`` may be sampled concurrently
from several threads.
"""
from __future__ import annotations

import time
from typing import Callable, Optional, Sequence

import grpc

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import ProviderError, rpc_error_to_provider_error
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..proto import chat_pb2, chat_pb2_grpc

_logger = get_logger("xai_chat.chat")

GET_COMPLETION_METHOD = "/xai_api.Chat/GetCompletion"


class Chat:
    """A ready-to-send chat completion request.

    Build instances through ``Client.chat_create`` or
    ``Client.chat_create_with_prompt``.
    """

    def __init__(
        self,
        stub: chat_pb2_grpc.ChatStub,
        model: str,
        messages: Sequence[chat_pb2.Message],
        search_parameters: Optional[chat_pb2.SearchParameters] = None,
    ) -> None:
        if not model or not model.strip():
            raise ValueError("model must be a non-empty string")
        self._stub = stub
        request = chat_pb2.GetCompletionsRequest(model=model, messages=list(messages))
        if search_parameters is not None:
            request.search_parameters.CopyFrom(search_parameters)
        self._request = request

    @property
    def model(self) -> str:
        return self._request.model

    @property
    def request(self) -> chat_pb2.GetCompletionsRequest:
        """A copy of the request this handle sends."""
        copy = chat_pb2.GetCompletionsRequest()
        copy.CopyFrom(self._request)
        return copy

    def sample(
        self,
        *,
        cancellation_token: Optional[CancellationToken] = None,
        timeout: Optional[float] = None,
    ) -> chat_pb2.GetChatCompletionResponse:
        """Send the request once and block until the response arrives.

        The connection's deadline bounds the call; ``timeout`` may tighten it
        for this call only. Cancelling ``cancellation_token`` aborts the
        in-flight RPC.

        Raises:
            CancelledError: the token was cancelled before or during the call.
            ProviderError: any gRPC failure, including deadline expiry
                (``ErrorCode.TIMEOUT``) and server-side cancellation
                (``ErrorCode.CANCELLED``). Never retried.
        """
        ctx = LogContext(model=self.model, method=GET_COMPLETION_METHOD)
        if cancellation_token is not None:
            cancellation_token.raise_if_cancelled()
        normalized_log_event(_logger, "chat.sample", ctx, phase="start", attempt=1)
        started = time.monotonic()
        unregister: Optional[Callable[[], None]] = None
        try:
            call = self._stub.GetCompletion.future(self._request, timeout=timeout)
            if cancellation_token is not None:
                unregister = cancellation_token.on_cancel(call.cancel)
            response = call.result()
        except grpc.FutureCancelledError as exc:
            reason = cancellation_token.reason if cancellation_token is not None else None
            self._log_finalize(ctx, started, error_code="cancelled")
            raise CancelledError(reason or "sample cancelled") from exc
        except ProviderError as exc:
            self._log_finalize(ctx, started, error_code=exc.code.value)
            raise
        except grpc.RpcError as exc:
            err = rpc_error_to_provider_error(exc, model=self.model)
            self._log_finalize(ctx, started, error_code=err.code.value)
            raise err from exc
        finally:
            if unregister is not None:
                unregister()
        self._log_finalize(ctx, started, response_id=response.id or None)
        return response

    def _log_finalize(
        self,
        ctx: LogContext,
        started: float,
        *,
        error_code: Optional[str] = None,
        response_id: Optional[str] = None,
    ) -> None:
        normalized_log_event(
            _logger,
            "chat.sample",
            ctx,
            phase="finalize",
            attempt=1,
            error_code=error_code,
            emitted=error_code is None,
            duration_ms=round((time.monotonic() - started) * 1000, 1),
            response_id=response_id,
        )

    def __repr__(self) -> str:
        return f"Chat(model={self.model!r}, messages={len(self._request.messages)})"


__all__ = ["Chat", "GET_COMPLETION_METHOD"]
