"""
Base package

Cross-cutting building blocks shared by the transport and chat layers:
- Errors: normalized error taxonomy and gRPC status classification
- Cancellation: caller-side cancellation tokens
- Logging: structured JSON logging helpers
- Timeouts: default deadline and duration parsing
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ErrorCode, ProviderError, classify_exception, rpc_error_to_provider_error
from .logging import LogContext, configure_logger, get_logger, log_event, normalized_log_event
from .timeouts import DEFAULT_TIMEOUT_SECONDS, effective_timeout, parse_duration

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "rpc_error_to_provider_error",
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
    "normalized_log_event",
    "DEFAULT_TIMEOUT_SECONDS",
    "effective_timeout",
    "parse_duration",
]
