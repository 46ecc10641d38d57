"""
Request descriptors and the outcome of sending one.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully built request, ready to hand to the invoker."""

    operation: str
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def redacted_headers(self) -> Dict[str, str]:
        """Headers with the bearer credential masked, safe for logs."""
        headers = dict(self.headers)
        if 'Authorization' in headers:
            headers['Authorization'] = 'Bearer ***'
        return headers


class Outcome:
    def __init__(
        self,
        operation: str,
        status_code: int,
        body: Any = None,
        text: str = '',
        url: str = None,
        elapsed: float = 0.0,
    ):
        """Wrap a response the service answered with, successful or not."""
        self.operation = operation
        self.status_code = status_code
        self.body = body
        self.text = text
        self.url = url
        self.elapsed = elapsed
        self.timestamp = datetime.now(timezone.utc)

    @property
    def ok(self) -> bool:
        """True for a 2xx status code."""
        return 200 <= self.status_code < 300

    @property
    def code(self) -> Optional[str]:
        """The service's ``code`` field, e.g. ``Deleted`` or ``ClientError.NotFound``."""
        if isinstance(self.body, dict):
            return self.body.get('code')
        return None

    @property
    def json(self) -> Any:
        return self.body

    @property
    def data(self) -> List[Any]:
        """Entries of a list document (``DATA``), empty when there are none."""
        if isinstance(self.body, dict) and isinstance(self.body.get('DATA'), list):
            return self.body['DATA']
        return []

    def accepted(self, *codes: str) -> bool:
        """Check whether the response code is one of ``codes``."""
        return self.code in codes

    def __repr__(self) -> str:
        return (
            f"Outcome(operation={self.operation!r}, status_code={self.status_code}, "
            f"code={self.code!r})"
        )
