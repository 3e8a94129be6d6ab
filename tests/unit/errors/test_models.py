"""Tests for the Status model."""

import pytest
from httpx import Response

from kube_client_core.errors.models import Status
from kube_client_core.testing import status_payload


@pytest.mark.unit
def test_status_from_response():
    response = Response(404, json=status_payload(404, "NotFound", 'pods "web" not found', details={"name": "web"}))

    status = Status.from_response(response)

    assert status is not None
    assert status.status == "Failure"
    assert status.reason == "NotFound"
    assert status.code == 404
    assert status.message == 'pods "web" not found'
    assert status.details == {"name": "web"}


@pytest.mark.unit
def test_status_from_response_ignores_other_kinds():
    response = Response(200, json={"kind": "Pod", "metadata": {"name": "web"}})

    assert Status.from_response(response) is None


@pytest.mark.unit
def test_status_from_response_ignores_non_json():
    response = Response(502, text="<html>Bad Gateway</html>")

    assert Status.from_response(response) is None


@pytest.mark.unit
def test_status_from_response_ignores_json_arrays():
    response = Response(500, json=["Status"])

    assert Status.from_response(response) is None


@pytest.mark.unit
def test_status_to_dict_round_trips_fields():
    status = Status(status="Failure", reason="Conflict", code=409)

    data = status.to_dict()

    assert data == {"kind": "Status", "apiVersion": "v1", "status": "Failure", "reason": "Conflict", "code": 409}
    assert Status.from_dict(data) == status


@pytest.mark.unit
def test_to_exception_message_full():
    status = Status(code=403, reason="Forbidden", message="pods is forbidden")

    assert status.to_exception_message() == "HTTP 403 Forbidden: pods is forbidden"


@pytest.mark.unit
def test_to_exception_message_message_only():
    assert Status(message="boom").to_exception_message() == "boom"


@pytest.mark.unit
def test_to_exception_message_empty():
    assert Status().to_exception_message() == "Unknown API error"
