"""
Async client exposing one coroutine per transfer service operation.

Every coroutine takes the caller's bearer token and an options structure
(or an equivalent mapping), makes exactly one request and returns an
``Outcome``. Domain failures such as ``NotActivated`` come back as
outcomes carrying that ``code``; only transport failures raise.
"""

from typing import Any, Optional
from urllib.parse import urlparse

import httpx
import structlog

from . import options as opts
from .builders import build_request
from .config import Config
from .errors import ConfigError, OperationNotImplementedError
from .invoker import HTTPInvoker
from .models import Outcome, RequestDescriptor

logger = structlog.get_logger(__name__)

# Both codes mean the rule is gone; a repeated delete answers with the second.
DELETE_ACCEPTED_CODES = ('Deleted', 'AccessRuleNotFound')


def _base_url(name: str, url: str) -> str:
    url = url.rstrip('/')
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ConfigError(f"{name} must be an absolute http(s) URL, got {url!r}")
    return url


class TransferClient:
    def __init__(
        self,
        config: Config = None,
        *,
        transfer_base_url: str = None,
        auth_base_url: str = None,
        invoker: HTTPInvoker = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Create a client.

        Args:
            config: Loaded configuration; the packaged defaults are used
                    when omitted.
            transfer_base_url: Overrides the transfer API base URL.
            auth_base_url: Overrides the identity API base URL.
            invoker: Pre-built invoker to send requests through.
            transport: httpx transport for a newly created invoker.
        """
        self.config = config or Config()
        self.transfer_base_url = _base_url('transfer base URL', transfer_base_url or self.config.transfer_base_url)
        self.auth_base_url = _base_url('auth base URL', auth_base_url or self.config.auth_base_url)
        self.invoker = invoker or HTTPInvoker(
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self.invoker.aclose()

    def prepare(self, operation: str, bearer_token: str, options: Any = None) -> RequestDescriptor:
        """Build the request for ``operation`` without sending it."""
        return build_request(
            operation,
            bearer_token,
            options,
            transfer_base_url=self.transfer_base_url,
            auth_base_url=self.auth_base_url,
        )

    async def _call(self, operation: str, bearer_token: str, options: Any = None) -> Outcome:
        request = self.prepare(operation, bearer_token, options)
        return await self.invoker.send(request)

    # Access control

    async def get_access_rules_list(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        """List the access rules of an endpoint."""
        return await self._call('get_access_rules_list', bearer_token, options)

    async def get_access_rule_by_id(self, bearer_token: str, options: opts.AccessRuleRef) -> Outcome:
        return await self._call('get_access_rule_by_id', bearer_token, options)

    async def create_access_rule(self, bearer_token: str, options: opts.AccessRuleCreate) -> Outcome:
        """Share ``path`` with a principal, read-only unless told otherwise."""
        return await self._call('create_access_rule', bearer_token, options)

    async def update_access_rule(self, bearer_token: str, options: opts.AccessRuleUpdate) -> Outcome:
        return await self._call('update_access_rule', bearer_token, options)

    async def delete_access_rule(self, bearer_token: str, options: opts.AccessRuleRef) -> Outcome:
        """Delete an access rule.

        Safe to repeat: the outcome code is one of ``DELETE_ACCEPTED_CODES``
        whether or not the rule still existed.
        """
        return await self._call('delete_access_rule', bearer_token, options)

    # Activation

    async def get_activation_requirements(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        return await self._call('get_activation_requirements', bearer_token, options)

    async def activate_endpoint(self, bearer_token: str, options: opts.ActivationSubmit) -> Outcome:
        """Submit a filled activation requirements document."""
        return await self._call('activate_endpoint', bearer_token, options)

    async def auto_activate_endpoint(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        return await self._call('auto_activate_endpoint', bearer_token, options)

    async def deactivate_endpoint(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        return await self._call('deactivate_endpoint', bearer_token, options)

    # Identity

    async def get_user_id(self, bearer_token: str, options: opts.UserLookup) -> Outcome:
        """Look up the identity registered for an email address."""
        return await self._call('get_user_id', bearer_token, options)

    # Endpoints

    async def get_endpoint_by_id(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        return await self._call('get_endpoint_by_id', bearer_token, options)

    async def create_endpoint(self, bearer_token: str, options: opts.EndpointCreate) -> Outcome:
        return await self._call('create_endpoint', bearer_token, options)

    async def create_shared_endpoint(self, bearer_token: str, options: opts.SharedEndpointCreate) -> Outcome:
        return await self._call('create_shared_endpoint', bearer_token, options)

    async def update_endpoint_by_id(self, bearer_token: str, options: opts.EndpointUpdate) -> Outcome:
        return await self._call('update_endpoint_by_id', bearer_token, options)

    async def delete_endpoint_by_id(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        return await self._call('delete_endpoint_by_id', bearer_token, options)

    async def get_effective_pause_rule_list(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        """Pause rules on the endpoint that apply to the calling identity."""
        return await self._call('get_effective_pause_rule_list', bearer_token, options)

    async def get_shared_endpoint_list(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        """Shared endpoints hosted on the given endpoint."""
        return await self._call('get_shared_endpoint_list', bearer_token, options)

    # Servers

    async def get_endpoint_server_list(self, bearer_token: str, options: opts.EndpointRef) -> Outcome:
        return await self._call('get_endpoint_server_list', bearer_token, options)

    async def get_endpoint_server_by_id(self, bearer_token: str, options: opts.ServerRef) -> Outcome:
        """Fetch a single server document by ``server_id``."""
        return await self._call('get_endpoint_server_by_id', bearer_token, options)

    async def add_endpoint_server(self, bearer_token: str, options: opts.ServerCreate) -> Outcome:
        return await self._call('add_endpoint_server', bearer_token, options)

    async def update_endpoint_server_by_id(self, bearer_token: str, options: opts.ServerUpdate) -> Outcome:
        return await self._call('update_endpoint_server_by_id', bearer_token, options)

    async def delete_endpoint_server_by_id(self, bearer_token: str, options: opts.ServerRef) -> Outcome:
        return await self._call('delete_endpoint_server_by_id', bearer_token, options)

    # File operations

    async def list_directory_contents(self, bearer_token: str, options: opts.DirectoryListing) -> Outcome:
        return await self._call('list_directory_contents', bearer_token, options)

    async def make_directory(self, bearer_token: str, options: opts.MakeDirectory) -> Outcome:
        return await self._call('make_directory', bearer_token, options)

    async def rename(self, bearer_token: str, options: opts.Rename) -> Outcome:
        return await self._call('rename', bearer_token, options)

    # Tasks

    async def get_submission_id(self, bearer_token: str) -> Outcome:
        """Reserve a submission id; it is not the id of the resulting task."""
        return await self._call('get_submission_id', bearer_token)

    async def submit_transfer_task(self, bearer_token: str, options: opts.TransferTask) -> Outcome:
        return await self._call('submit_transfer_task', bearer_token, options)

    async def submit_deletion_task(self, bearer_token: str, options: opts.DeleteTask) -> Outcome:
        """Not supported yet; raises before any request is built."""
        logger.warning("operation_not_implemented", operation='submit_deletion_task')
        raise OperationNotImplementedError('submit_deletion_task')
