"""
Turn an operation name, a bearer token and its options into a request.

Each builder returns ``(method, url, body)``; ``build_request`` validates
the options first and attaches the headers every call carries.
Identifiers are interpolated into paths as given.
"""

from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple
from urllib.parse import urlencode

from . import options as opts
from .errors import OperationNotImplementedError, UnknownOperationError
from .models import RequestDescriptor


class Route(NamedTuple):
    options_cls: Optional[type]
    build: Callable[..., Tuple[str, str, Optional[Dict[str, Any]]]]


def _endpoint(base: str, o) -> str:
    return f"{base}/endpoint/{o.endpoint_xid}"


def _operation(base: str, o) -> str:
    return f"{base}/operation/endpoint/{o.endpoint_xid}"


def encode_username(user_email: str) -> str:
    """Percent-encode the ``@`` of a username for the identities query."""
    return user_email.replace('@', '%40')


def _extra_query(query_parameters) -> str:
    if not query_parameters:
        return ''
    if isinstance(query_parameters, str):
        return query_parameters
    return '&' + urlencode(query_parameters, doseq=True)


# Access control (https://docs.globus.org/api/transfer/acl)

def _get_access_rules_list(t, a, o):
    return 'GET', f"{_endpoint(t, o)}/access_list", None


def _get_access_rule_by_id(t, a, o):
    return 'GET', f"{_endpoint(t, o)}/access/{o.id}", None


def _create_access_rule(t, a, o):
    return 'POST', f"{_endpoint(t, o)}/access", o.to_body()


def _update_access_rule(t, a, o):
    return 'PUT', f"{_endpoint(t, o)}/access/{o.id}", o.to_body()


def _delete_access_rule(t, a, o):
    return 'DELETE', f"{_endpoint(t, o)}/access/{o.id}", None


# Activation

def _get_activation_requirements(t, a, o):
    return 'GET', f"{_endpoint(t, o)}/activation_requirements", None


def _activate_endpoint(t, a, o):
    return 'POST', f"{_endpoint(t, o)}/activate", o.to_body()


def _auto_activate_endpoint(t, a, o):
    return 'POST', f"{_endpoint(t, o)}/autoactivate", None


def _deactivate_endpoint(t, a, o):
    return 'POST', f"{_endpoint(t, o)}/deactivate", None


# Identity

def _get_user_id(t, a, o):
    return 'GET', f"{a}/identities?usernames={encode_username(o.user_email)}", None


# Endpoints and servers

def _get_endpoint_by_id(t, a, o):
    return 'GET', _endpoint(t, o), None


def _create_endpoint(t, a, o):
    return 'POST', f"{t}/endpoint", o.to_body()


def _create_shared_endpoint(t, a, o):
    return 'POST', f"{t}/shared_endpoint", o.to_body()


def _update_endpoint_by_id(t, a, o):
    return 'PUT', _endpoint(t, o), o.to_body()


def _delete_endpoint_by_id(t, a, o):
    return 'DELETE', _endpoint(t, o), None


def _get_effective_pause_rule_list(t, a, o):
    return 'GET', f"{_endpoint(t, o)}/my_effective_pause_rule_list", None


def _get_endpoint_server_list(t, a, o):
    return 'GET', f"{_endpoint(t, o)}/server_list", None


def _get_endpoint_server_by_id(t, a, o):
    return 'GET', f"{_endpoint(t, o)}/server/{o.server_id}", None


def _add_endpoint_server(t, a, o):
    return 'POST', f"{_endpoint(t, o)}/server", o.to_body()


def _update_endpoint_server_by_id(t, a, o):
    return 'PUT', f"{_endpoint(t, o)}/server/{o.server_id}", o.to_body()


def _delete_endpoint_server_by_id(t, a, o):
    return 'DELETE', f"{_endpoint(t, o)}/server/{o.server_id}", None


def _get_shared_endpoint_list(t, a, o):
    return 'GET', f"{_endpoint(t, o)}/my_shared_endpoint_list", None


# File operations

def _list_directory_contents(t, a, o):
    path = o.path or opts.DEFAULT_LIST_PATH
    url = f"{_operation(t, o)}/ls?path={path}{_extra_query(o.query_parameters)}"
    return 'GET', url, None


def _make_directory(t, a, o):
    return 'POST', f"{_operation(t, o)}/mkdir", o.to_body()


def _rename(t, a, o):
    return 'POST', f"{_operation(t, o)}/rename", o.to_body()


# Task submission

def _get_submission_id(t, a, o):
    return 'GET', f"{t}/submission_id", None


def _submit_transfer_task(t, a, o):
    return 'POST', f"{t}/transfer", o.to_body()


def _submit_deletion_task(t, a, o):
    raise OperationNotImplementedError('submit_deletion_task')


BUILDERS: Dict[str, Route] = {
    'get_access_rules_list': Route(opts.EndpointRef, _get_access_rules_list),
    'get_access_rule_by_id': Route(opts.AccessRuleRef, _get_access_rule_by_id),
    'create_access_rule': Route(opts.AccessRuleCreate, _create_access_rule),
    'update_access_rule': Route(opts.AccessRuleUpdate, _update_access_rule),
    'delete_access_rule': Route(opts.AccessRuleRef, _delete_access_rule),
    'get_activation_requirements': Route(opts.EndpointRef, _get_activation_requirements),
    'activate_endpoint': Route(opts.ActivationSubmit, _activate_endpoint),
    'auto_activate_endpoint': Route(opts.EndpointRef, _auto_activate_endpoint),
    'deactivate_endpoint': Route(opts.EndpointRef, _deactivate_endpoint),
    'get_user_id': Route(opts.UserLookup, _get_user_id),
    'get_endpoint_by_id': Route(opts.EndpointRef, _get_endpoint_by_id),
    'create_endpoint': Route(opts.EndpointCreate, _create_endpoint),
    'create_shared_endpoint': Route(opts.SharedEndpointCreate, _create_shared_endpoint),
    'update_endpoint_by_id': Route(opts.EndpointUpdate, _update_endpoint_by_id),
    'delete_endpoint_by_id': Route(opts.EndpointRef, _delete_endpoint_by_id),
    'get_effective_pause_rule_list': Route(opts.EndpointRef, _get_effective_pause_rule_list),
    'get_endpoint_server_list': Route(opts.EndpointRef, _get_endpoint_server_list),
    'get_endpoint_server_by_id': Route(opts.ServerRef, _get_endpoint_server_by_id),
    'add_endpoint_server': Route(opts.ServerCreate, _add_endpoint_server),
    'update_endpoint_server_by_id': Route(opts.ServerUpdate, _update_endpoint_server_by_id),
    'delete_endpoint_server_by_id': Route(opts.ServerRef, _delete_endpoint_server_by_id),
    'get_shared_endpoint_list': Route(opts.EndpointRef, _get_shared_endpoint_list),
    'list_directory_contents': Route(opts.DirectoryListing, _list_directory_contents),
    'make_directory': Route(opts.MakeDirectory, _make_directory),
    'rename': Route(opts.Rename, _rename),
    'get_submission_id': Route(None, _get_submission_id),
    'submit_transfer_task': Route(opts.TransferTask, _submit_transfer_task),
    'submit_deletion_task': Route(None, _submit_deletion_task),
}


def build_headers(bearer_token: str, with_body: bool) -> Dict[str, str]:
    headers = {
        'Authorization': f'Bearer {bearer_token}',
        'Accept': 'application/json',
    }
    if with_body:
        headers['Content-Type'] = 'application/json'
    return headers


def build_request(
    operation: str,
    bearer_token: str,
    options: Any,
    transfer_base_url: str,
    auth_base_url: str,
) -> RequestDescriptor:
    """Build the request for ``operation``.

    Args:
        operation: Key of ``BUILDERS``.
        bearer_token: Passed through as the bearer credential, unchecked.
        options: Options structure or mapping for the operation.
        transfer_base_url: Base URL of the transfer API.
        auth_base_url: Base URL of the identity API.

    Returns:
        The request descriptor.

    Raises:
        UnknownOperationError: No such operation.
        InvalidOptionsError: The options do not fit the operation.
        OperationNotImplementedError: The operation is not supported yet.
    """
    route = BUILDERS.get(operation)
    if route is None:
        raise UnknownOperationError(operation)

    validated = opts.coerce(route.options_cls, options, operation) if route.options_cls else None
    method, url, body = route.build(transfer_base_url, auth_base_url, validated)

    return RequestDescriptor(
        operation=operation,
        method=method,
        url=url,
        headers=build_headers(bearer_token, body is not None),
        body=body,
    )
