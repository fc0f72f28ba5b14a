import json
from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException, Request

from nutrition_admin.backend.main import global_exception_handler, http_exception_handler


@pytest.fixture
def mock_request():
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/users"
    return request


@pytest.mark.asyncio
async def test_unhandled_exception_is_logged_and_hidden(mock_request):
    with patch("nutrition_admin.backend.main.logger") as mock_logger:
        response = await global_exception_handler(mock_request, RuntimeError("secret details"))

    mock_logger.error.assert_called_once()
    assert response.status_code == 500
    assert json.loads(response.body) == {"error": "Internal server error"}


@pytest.mark.asyncio
async def test_http_exception_uses_error_envelope(mock_request):
    response = await http_exception_handler(mock_request, HTTPException(status_code=404, detail="User not found"))

    assert response.status_code == 404
    assert json.loads(response.body) == {"error": "User not found"}
