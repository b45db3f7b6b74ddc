"""
Remote operation gateway.

The gateway is the only component that talks to the platform API. Every
call returns a tri-state outcome together with the warnings the API sent,
so callers never have to inspect SDK exceptions themselves.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from platform_manager_sdk import PlatformClient, PlatformError, ResourceNotFoundError

logger = logging.getLogger(__name__)

Warnings = List[str]


class OutcomeKind(Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class RemoteOutcome:
    """Result of one remote operation."""

    kind: OutcomeKind
    payload: Any = None
    message: Optional[str] = None

    @classmethod
    def success(cls, payload: Any = None) -> "RemoteOutcome":
        return cls(OutcomeKind.SUCCESS, payload=payload)

    @classmethod
    def not_found(cls, message: str) -> "RemoteOutcome":
        return cls(OutcomeKind.NOT_FOUND, message=message)

    @classmethod
    def error(cls, message: str) -> "RemoteOutcome":
        return cls(OutcomeKind.ERROR, message=message)


@dataclass(frozen=True)
class Operation:
    """A named remote operation mapped onto a client method."""

    name: str
    lookup: bool = False


OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Operation("find_user_by_name", lookup=True),
        Operation("delete_user"),
        Operation("find_service_broker_by_name", lookup=True),
        Operation("create_service_broker"),
        Operation("update_service_broker"),
        Operation("delete_service_broker"),
    )
}


class Gateway:
    """Invokes named operations on a PlatformClient and classifies the result."""

    def __init__(self, client: PlatformClient) -> None:
        self.client = client

    def invoke(self, operation: str, **params: Any) -> Tuple[RemoteOutcome, Warnings]:
        """
        Perform a remote operation.

        Lookups return their payload on success. A missing resource is
        NOT_FOUND for lookups and ERROR for every other operation.

        Raises:
            ValueError: If the operation name is unknown
        """
        op = OPERATIONS.get(operation)
        if op is None:
            raise ValueError(f"Unknown remote operation: {operation}")

        logger.debug("Invoking %s", operation)
        method = getattr(self.client, op.name)

        try:
            result = method(**params)
        except ResourceNotFoundError as e:
            logger.debug("%s: resource not found", operation)
            if op.lookup:
                return RemoteOutcome.not_found(str(e)), list(e.warnings)
            return RemoteOutcome.error(str(e)), list(e.warnings)
        except PlatformError as e:
            logger.info("%s failed: %s", operation, e)
            return RemoteOutcome.error(str(e)), list(e.warnings)

        if op.lookup:
            payload, warnings = result
            return RemoteOutcome.success(payload), list(warnings)
        return RemoteOutcome.success(), list(result or [])
