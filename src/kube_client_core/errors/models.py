"""Kubernetes meta/v1 Status model."""

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class Status:
    """Status object returned by the API server for failures and some deletes.

    See: https://kubernetes.io/docs/reference/kubernetes-api/common-definitions/status/
    """

    status: str | None = None  # "Success" or "Failure"
    message: str | None = None  # Human-readable description
    reason: str | None = None  # Machine-readable reason, e.g. "NotFound"
    code: int | None = None  # HTTP status code
    details: dict[str, Any] | None = None  # Extended data about the reason
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Status":
        return cls(
            status=data.get("status"),
            message=data.get("message"),
            reason=data.get("reason"),
            code=data.get("code"),
            details=data.get("details"),
            metadata=data.get("metadata"),
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "Status | None":
        """Parse a Status from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            Status object or None if the body is not a Status
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            return None

        if not isinstance(data, dict) or data.get("kind") != "Status":
            return None

        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": "Status", "apiVersion": "v1"}
        for key in ("status", "message", "reason", "code", "details", "metadata"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    def to_exception_message(self) -> str:
        """Convert the status to an exception message."""
        parts = []
        if self.code is not None:
            parts.append(f"HTTP {self.code}")
        if self.reason:
            parts.append(self.reason)
        head = " ".join(parts)

        if self.message:
            return f"{head}: {self.message}" if head else self.message
        return head or "Unknown API error"
