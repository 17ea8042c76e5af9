"""Generated xAI API protocol modules.

The wire schema (messages, enums and service stubs) is owned by the
``xai-sdk`` distribution. Every other module imports the generated code from
here so the versioned contract is pinned in one place.
"""

from xai_sdk.proto import auth_pb2, auth_pb2_grpc, chat_pb2, chat_pb2_grpc

__all__ = ["auth_pb2", "auth_pb2_grpc", "chat_pb2", "chat_pb2_grpc"]
