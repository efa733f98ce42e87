"""
Object resolution for the publish result

Finds the published package id and the ids of the objects the package's
init functions create, each of which must appear exactly once.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

from .errors import ResolutionError, SubmissionFailure

logger = logging.getLogger(__name__)


def _field(item: Any, *names: str) -> Any:
    """Read the first present field from a JSON dict or an SDK result object"""
    for name in names:
        if isinstance(item, dict):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    return None


@dataclass(frozen=True)
class ObjectChange:
    """One entry of a transaction's objectChanges"""
    kind: str
    object_id: Optional[str] = None
    object_type: Optional[str] = None
    package_id: Optional[str] = None

    @classmethod
    def from_response(cls, data: Any) -> "ObjectChange":
        return cls(
            kind=_field(data, "type", "change_type") or "",
            object_id=_field(data, "objectId", "object_id"),
            object_type=_field(data, "objectType", "object_type"),
            package_id=_field(data, "packageId", "package_id"),
        )


@dataclass(frozen=True)
class ExecutionResult:
    """Finalized transaction response"""
    digest: str
    object_changes: Tuple[ObjectChange, ...] = ()
    status: Optional[str] = "success"
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    @classmethod
    def from_response(cls, data: Any) -> "ExecutionResult":
        """
        Build a result from a transaction response

        Args:
            data: JSON dict or pysui TxResponse

        Returns:
            ExecutionResult; status is None when the response carries no effects status

        Raises:
            SubmissionFailure: if the response is not a transaction response
        """
        if data is None or isinstance(data, (list, tuple, str, bytes)):
            raise SubmissionFailure(f"Unexpected transaction response: {data!r}")
        digest = _field(data, "digest")
        if not digest:
            raise SubmissionFailure("Transaction response has no digest")

        status_info = _field(_field(data, "effects") or {}, "status") or {}
        status = _field(status_info, "status")
        error = _field(status_info, "error")
        errors = _field(data, "errors")
        if errors:
            status = "failure"
            error = "; ".join(str(e) for e in errors)
        changes = _field(data, "objectChanges", "object_changes") or []
        return cls(
            digest=digest,
            object_changes=tuple(ObjectChange.from_response(c) for c in changes),
            status=status,
            error=error,
        )


@dataclass(frozen=True)
class ResolvedDeploymentHandles:
    """Object ids produced by publishing the Ticketland package"""
    package_id: str
    admin_cap_id: str
    attendance_config_id: str
    nft_repository_id: str
    config_id: str
    exchange_rate_id: str
    operator_cap_id: str

    def __post_init__(self):
        for f in fields(self):
            if not getattr(self, f.name):
                raise ResolutionError(f.name, "non-empty object id", 0)


# (handle field, module, type name) created by the package's init functions
TARGET_OBJECTS: List[Tuple[str, str, str]] = [
    ("admin_cap_id", "event_registry", "AdminCap"),
    ("attendance_config_id", "attendance", "Config"),
    ("nft_repository_id", "ticket", "NftRepository"),
    ("config_id", "event_registry", "Config"),
    ("exchange_rate_id", "price_oracle", "ExchangeRate"),
    ("operator_cap_id", "primary_market", "OperatorCap"),
]


def expected_type(package_id: str, module: str, type_name: str) -> str:
    return f"{package_id}::{module}::{type_name}"


def _find_unique(changes: Tuple[ObjectChange, ...], handle: str, expected: str, predicate) -> ObjectChange:
    matches = [c for c in changes if predicate(c)]
    if len(matches) != 1:
        raise ResolutionError(handle, expected, len(matches))
    return matches[0]


def resolve(result: ExecutionResult) -> ResolvedDeploymentHandles:
    """
    Extract deployment handles from a publish result

    Args:
        result: Execution result of the publish transaction

    Returns:
        ResolvedDeploymentHandles with every id populated

    Raises:
        ResolutionError: if the published record or any target object is
            missing or present more than once
    """
    published = _find_unique(
        result.object_changes, "package_id", "published",
        lambda c: c.kind == "published",
    )
    package_id = published.package_id
    if not package_id:
        raise ResolutionError("package_id", "published", 0)

    ids: Dict[str, str] = {"package_id": package_id}
    for handle, module, type_name in TARGET_OBJECTS:
        type_string = expected_type(package_id, module, type_name)
        change = _find_unique(
            result.object_changes, handle, type_string,
            lambda c, t=type_string: c.object_type == t,
        )
        if not change.object_id:
            raise ResolutionError(handle, type_string, 0)
        ids[handle] = change.object_id
        logger.debug(f"Resolved {handle} = {change.object_id}")

    return ResolvedDeploymentHandles(**ids)
