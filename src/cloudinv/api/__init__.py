"""API clients and authentication."""

from .auth import AzureAuthHandler, VSphereAuthHandler
from .azure import AzureClient
from .exceptions import (
    APIError,
    AuthenticationError,
    CloudInvError,
    ConfigError,
    DecodeError,
    NetworkError,
    RequestError,
    TimeoutError,
)
from .query import build_query_string, parse_query_string
from .vsphere import VSphereClient

__all__ = [
    "APIError",
    "AuthenticationError",
    "AzureAuthHandler",
    "AzureClient",
    "CloudInvError",
    "ConfigError",
    "DecodeError",
    "NetworkError",
    "RequestError",
    "TimeoutError",
    "VSphereAuthHandler",
    "VSphereClient",
    "build_query_string",
    "parse_query_string",
]
