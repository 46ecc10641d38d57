"""Async client for the Globus transfer and identity REST APIs."""

__version__ = "0.1.0"

from .builders import BUILDERS, build_request, encode_username
from .client import DELETE_ACCEPTED_CODES, TransferClient
from .config import Config
from .errors import (
    ConfigError,
    GlobusClientError,
    InvalidOptionsError,
    OperationNotImplementedError,
    TransportError,
    UnknownOperationError,
)
from .invoker import HTTPInvoker
from .log import configure_logging
from .models import Outcome, RequestDescriptor
from .options import (
    AccessRuleCreate,
    AccessRuleRef,
    AccessRuleUpdate,
    ActivationSubmit,
    DeleteTask,
    DirectoryListing,
    EndpointCreate,
    EndpointRef,
    EndpointUpdate,
    MakeDirectory,
    Rename,
    ServerCreate,
    ServerRef,
    ServerUpdate,
    SharedEndpointCreate,
    TransferItem,
    TransferTask,
    UserLookup,
)

__all__ = [
    "TransferClient",
    "HTTPInvoker",
    "Config",
    "configure_logging",
    "build_request",
    "encode_username",
    "BUILDERS",
    "DELETE_ACCEPTED_CODES",
    "Outcome",
    "RequestDescriptor",
    "GlobusClientError",
    "ConfigError",
    "TransportError",
    "InvalidOptionsError",
    "OperationNotImplementedError",
    "UnknownOperationError",
    "AccessRuleCreate",
    "AccessRuleRef",
    "AccessRuleUpdate",
    "ActivationSubmit",
    "DeleteTask",
    "DirectoryListing",
    "EndpointCreate",
    "EndpointRef",
    "EndpointUpdate",
    "MakeDirectory",
    "Rename",
    "ServerCreate",
    "ServerRef",
    "ServerUpdate",
    "SharedEndpointCreate",
    "TransferItem",
    "TransferTask",
    "UserLookup",
]
