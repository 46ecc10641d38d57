"""
Typed option models, one per operation family.

Required fields have no default and may not be empty; unknown fields are
rejected. ``coerce`` validates a plain mapping against the model an
operation expects and reports every problem at once as an
``InvalidOptionsError``, so a malformed request is never sent.
"""

from typing import Annotated, Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError

from .errors import InvalidOptionsError

DEFAULT_PERMISSIONS = 'r'
DEFAULT_PRINCIPAL_TYPE = 'identity'
DEFAULT_SERVER_PORT = '2811'
DEFAULT_SERVER_SCHEME = 'gsiftp'
DEFAULT_LIST_PATH = '/'

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
Identifier = Union[int, NonEmptyStr]
Document = Annotated[Dict[str, Any], Field(min_length=1)]

# pydantic error types that mean "not given"
_MISSING_ERRORS = {'missing', 'string_too_short', 'too_short'}


def _compact(body: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None so the service applies its own defaults."""
    return {key: value for key, value in body.items() if value is not None}


class Options(BaseModel):
    model_config = ConfigDict(extra='forbid')


class EndpointRef(Options):
    endpoint_xid: NonEmptyStr


class AccessRuleRef(Options):
    endpoint_xid: NonEmptyStr
    id: Identifier


class AccessRuleCreate(Options):
    """Grant ``principal`` access to ``path`` on a shared endpoint.

    ``principal`` is normally the identity id returned by the user lookup.
    Permissions default to read-only.
    """

    endpoint_xid: NonEmptyStr
    principal: NonEmptyStr
    path: NonEmptyStr
    permissions: Optional[str] = DEFAULT_PERMISSIONS
    principal_type: Optional[str] = DEFAULT_PRINCIPAL_TYPE
    notify_email: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return _compact({
            'DATA_TYPE': 'access',
            'principal_type': self.principal_type or DEFAULT_PRINCIPAL_TYPE,
            'principal': self.principal,
            'path': self.path,
            'permissions': self.permissions or DEFAULT_PERMISSIONS,
            'notify_email': self.notify_email,
        })


class AccessRuleUpdate(Options):
    """Partial access rule document; only the fields that are set are sent."""

    endpoint_xid: NonEmptyStr
    id: Identifier
    role_id: Optional[str] = None
    principal_type: Optional[str] = None
    principal: Optional[str] = None
    path: Optional[str] = None
    permissions: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return _compact({
            'DATA_TYPE': 'access',
            'id': self.id,
            'role_id': self.role_id,
            'principal_type': self.principal_type,
            'principal': self.principal,
            'path': self.path,
            'permissions': self.permissions,
        })


class ActivationSubmit(Options):
    """An activation requirements document with its values filled in."""

    endpoint_xid: NonEmptyStr
    document: Document

    def to_body(self) -> Dict[str, Any]:
        return self.document


class EndpointCreate(Options):
    display_name: NonEmptyStr
    servers: Optional[List[Dict[str, Any]]] = None
    document: Optional[Dict[str, Any]] = None

    def to_body(self) -> Dict[str, Any]:
        body = {'DATA_TYPE': 'endpoint'}
        body.update(self.document or {})
        body['display_name'] = self.display_name
        if self.servers is not None:
            body['DATA'] = list(self.servers)
        return body


class EndpointUpdate(Options):
    endpoint_xid: NonEmptyStr
    document: Document

    def to_body(self) -> Dict[str, Any]:
        body = {'DATA_TYPE': 'endpoint'}
        body.update(self.document)
        return body


class SharedEndpointCreate(Options):
    display_name: NonEmptyStr
    host_endpoint: NonEmptyStr
    host_path: NonEmptyStr
    description: Optional[str] = None
    organization: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return _compact({
            'DATA_TYPE': 'shared_endpoint',
            'display_name': self.display_name,
            'host_endpoint': self.host_endpoint,
            'host_path': self.host_path,
            'description': self.description,
            'organization': self.organization,
        })


class ServerRef(Options):
    endpoint_xid: NonEmptyStr
    server_id: Identifier


class ServerCreate(Options):
    """A GridFTP server entry. Port and scheme fall back to 2811/gsiftp."""

    endpoint_xid: NonEmptyStr
    hostname: NonEmptyStr
    uri: Optional[str] = None
    port: Optional[Union[int, str]] = DEFAULT_SERVER_PORT
    scheme: Optional[str] = DEFAULT_SERVER_SCHEME

    def to_body(self) -> Dict[str, Any]:
        return _compact({
            'DATA_TYPE': 'server',
            'hostname': self.hostname,
            'uri': self.uri,
            'port': str(self.port or DEFAULT_SERVER_PORT),
            'scheme': self.scheme or DEFAULT_SERVER_SCHEME,
        })


class ServerUpdate(ServerCreate):
    server_id: Identifier
    hostname: Optional[str] = None
    subject: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        if self.subject is not None:
            body['subject'] = self.subject
        return body


class DirectoryListing(Options):
    """List a directory.

    ``query_parameters`` is either a pre-encoded string such as
    ``"&show_hidden=0"``, appended verbatim, or a mapping that gets
    url-encoded.
    """

    endpoint_xid: NonEmptyStr
    path: Optional[str] = None
    query_parameters: Optional[Union[str, Dict[str, Any]]] = None


class MakeDirectory(Options):
    endpoint_xid: NonEmptyStr
    path: NonEmptyStr

    def to_body(self) -> Dict[str, Any]:
        return {'DATA_TYPE': 'mkdir', 'path': self.path}


class Rename(Options):
    endpoint_xid: NonEmptyStr
    old_path: NonEmptyStr
    new_path: NonEmptyStr

    def to_body(self) -> Dict[str, Any]:
        return {'DATA_TYPE': 'rename', 'old_path': self.old_path, 'new_path': self.new_path}


class TransferItem(Options):
    source_path: NonEmptyStr
    destination_path: NonEmptyStr
    recursive: bool = False

    def to_doc(self) -> Dict[str, Any]:
        return {
            'DATA_TYPE': 'transfer_item',
            'source_path': self.source_path,
            'destination_path': self.destination_path,
            'recursive': self.recursive,
        }


def _item_doc(item: Union[TransferItem, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(item, TransferItem):
        return item.to_doc()
    return dict(item)


class TransferTask(Options):
    """A transfer task; ``submission_id`` comes from ``get_submission_id``.

    Items are ``TransferItem`` models or transfer item documents, which
    are sent verbatim.
    """

    submission_id: NonEmptyStr
    source_endpoint: NonEmptyStr
    destination_endpoint: NonEmptyStr
    items: Annotated[List[Union[TransferItem, Dict[str, Any]]], Field(min_length=1)]
    label: Optional[str] = None
    notify_on_succeeded: bool = True
    notify_on_failed: bool = True
    notify_on_inactive: bool = True
    encrypt_data: bool = False
    sync_level: Optional[int] = None
    verify_checksum: bool = False
    preserve_timestamp: bool = False
    delete_destination_extra: bool = False

    def to_body(self) -> Dict[str, Any]:
        return _compact({
            'DATA_TYPE': 'transfer',
            'submission_id': self.submission_id,
            'label': self.label,
            'notify_on_succeeded': self.notify_on_succeeded,
            'notify_on_failed': self.notify_on_failed,
            'notify_on_inactive': self.notify_on_inactive,
            'source_endpoint': self.source_endpoint,
            'destination_endpoint': self.destination_endpoint,
            'DATA': [_item_doc(item) for item in self.items],
            'encrypt_data': self.encrypt_data,
            'sync_level': self.sync_level,
            'verify_checksum': self.verify_checksum,
            'preserve_timestamp': self.preserve_timestamp,
            'delete_destination_extra': self.delete_destination_extra,
        })


class DeleteTask(Options):
    """Describes the shape of a deletion task only.

    Submitting one is not supported, so nothing here is required and
    nothing is ever built from it.
    """

    submission_id: Optional[str] = None
    endpoint: Optional[str] = None
    items: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    recursive: bool = False
    ignore_missing: bool = False
    interpret_globs: bool = False


class UserLookup(Options):
    user_email: NonEmptyStr


def _to_options_error(operation: str, error: ValidationError) -> InvalidOptionsError:
    missing, unknown, invalid = [], [], []
    for detail in error.errors():
        loc = detail.get('loc') or ()
        name = str(loc[0]) if loc else '<options>'
        if detail['type'] == 'extra_forbidden':
            bucket, entry = unknown, name
        elif detail['type'] in _MISSING_ERRORS:
            bucket, entry = missing, name
        else:
            bucket, entry = invalid, f"{name} ({detail['msg']})"
        if entry not in bucket:
            bucket.append(entry)
    # a field reported missing by one union member is not also "invalid"
    invalid = [entry for entry in invalid if entry.split(' ', 1)[0] not in missing]
    return InvalidOptionsError(operation, missing=missing, unknown=unknown, invalid=invalid)


def coerce(options_cls, options: Any, operation: str):
    """Validate ``options`` against ``options_cls``.

    Args:
        options_cls: The model the operation expects.
        options: An instance of it, a mapping with the same keys, or None.
        operation: Operation name used in error messages.

    Returns:
        An ``options_cls`` instance.

    Raises:
        InvalidOptionsError: On unknown keys, missing required fields or
            values of the wrong type.
    """
    if isinstance(options, options_cls):
        return options

    if options is None:
        options = {}
    if not isinstance(options, Mapping):
        raise InvalidOptionsError(
            operation,
            invalid=[f"expected {options_cls.__name__} or mapping, got {type(options).__name__}"],
        )

    try:
        return options_cls.model_validate(dict(options))
    except ValidationError as e:
        raise _to_options_error(operation, e) from e
