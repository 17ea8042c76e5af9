"""Transport layer: channel construction, credentials and interceptors."""

from .connection import Connection
from .credentials import ApiKeyAuthPlugin
from .interceptors import MetadataInterceptor, TimeoutInterceptor

__all__ = ["Connection", "ApiKeyAuthPlugin", "MetadataInterceptor", "TimeoutInterceptor"]
