"""Tests for standardized error handling."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel


class TestAPIErrors:
    """Test custom API error classes."""

    def test_not_found_error_defaults(self):
        from rsvp_api.errors import NotFoundError

        error = NotFoundError()
        assert error.status_code == 404
        assert error.error == "not_found"
        assert error.detail == "Resource not found"

    def test_not_found_error_with_context(self):
        from rsvp_api.errors import NotFoundError

        error = NotFoundError(detail="Event not found", event_id="E1")
        assert error.detail == "Event not found"
        assert error.context == {"event_id": "E1"}

    def test_duplicate_rsvp_error(self):
        from rsvp_api.errors import DuplicateRsvpError

        error = DuplicateRsvpError()
        assert error.status_code == 409
        assert error.error == "conflict"
        assert error.error_code == "DUPLICATE_RSVP"

    def test_store_error_hides_cause(self):
        from rsvp_api.errors import StoreError

        try:
            try:
                raise TimeoutError("redis:6379 timed out")
            except TimeoutError as e:
                raise StoreError() from e
        except StoreError as err:
            body = err.to_response().model_dump(exclude_none=True)
            assert body == {"error": "store_error", "message": "RSVP store operation failed"}
            assert isinstance(err.__cause__, TimeoutError)

    def test_validation_error_is_bad_request(self):
        from rsvp_api.errors import BadRequestError, RsvpValidationError

        error = RsvpValidationError(fields=["email"])
        assert isinstance(error, BadRequestError)
        assert error.status_code == 400
        assert error.context == {"fields": ["email"]}


class TestErrorResponse:

    def test_error_response_model(self):
        from rsvp_api.errors import ErrorResponse

        response = ErrorResponse(
            error="conflict",
            message="Already there",
            code="DUPLICATE_RSVP",
            context={"event_id": "E1"},
        )

        data = response.model_dump()
        assert data["error"] == "conflict"
        assert data["message"] == "Already there"
        assert data["code"] == "DUPLICATE_RSVP"
        assert data["context"] == {"event_id": "E1"}

    def test_error_response_minimal(self):
        from rsvp_api.errors import ErrorResponse

        data = ErrorResponse(error="internal_error").model_dump(exclude_none=True)
        assert data == {"error": "internal_error"}


class TestExceptionHandlers:

    @pytest.fixture
    def app(self):
        from rsvp_api.errors import register_exception_handlers

        app = FastAPI()
        register_exception_handlers(app)
        return app

    def test_api_error_handler_integration(self, app):
        from rsvp_api.errors import DuplicateRsvpError

        @app.get("/dup")
        async def dup():
            raise DuplicateRsvpError()

        response = TestClient(app, raise_server_exceptions=False).get("/dup")

        assert response.status_code == 409
        assert response.json() == {
            "error": "conflict",
            "message": "You have already RSVP'd for this event with this email!",
            "code": "DUPLICATE_RSVP",
        }

    def test_request_validation_is_400(self, app):
        class Body(BaseModel):
            name: str

        @app.post("/body")
        async def body(b: Body):
            return {}

        response = TestClient(app).post("/body", json={})

        assert response.status_code == 400
        assert response.json()["context"] == {"fields": ["name"]}

    def test_store_error_logged_with_cause(self, app, caplog):
        from rsvp_api.errors import StoreError

        @app.get("/store")
        async def store():
            raise StoreError() from ConnectionError("redis unreachable")

        with caplog.at_level("ERROR", logger="rsvp_api.errors"):
            response = TestClient(app, raise_server_exceptions=False).get("/store")

        assert response.status_code == 500
        assert "unreachable" not in response.text
        assert "redis unreachable" in caplog.text


class TestStatusToErrorType:

    def test_common_status_codes(self):
        from rsvp_api.errors import _status_to_error_type

        assert _status_to_error_type(400) == "bad_request"
        assert _status_to_error_type(404) == "not_found"
        assert _status_to_error_type(409) == "conflict"
        assert _status_to_error_type(500) == "internal_error"

    def test_unknown_status_code(self):
        from rsvp_api.errors import _status_to_error_type

        assert _status_to_error_type(418) == "error"  # I'm a teapot
