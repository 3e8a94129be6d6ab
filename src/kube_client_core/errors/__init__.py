"""Request error taxonomy and Kubernetes Status support."""

from kube_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientClosedError,
    DecodingError,
    EmptyResponseError,
    InvalidURLError,
    RequestError,
)
from kube_client_core.errors.handler import raise_for_status
from kube_client_core.errors.models import Status

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientClosedError",
    "DecodingError",
    "EmptyResponseError",
    "InvalidURLError",
    "RequestError",
    "Status",
    "raise_for_status",
]
