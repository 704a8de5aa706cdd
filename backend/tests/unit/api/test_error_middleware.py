from fastapi import FastAPI
from fastapi.testclient import TestClient

from carecoord.core.exceptions import AppException, UpstreamServiceError
from carecoord.core.handlers import app_exception_handler
from carecoord.core.middleware.error_handler import (
    GlobalExceptionHandlerMiddleware,
    RequestLogMiddleware,
    INTERNAL_ERROR_MESSAGE,
)


def _build_app():
    app = FastAPI()
    app.add_middleware(GlobalExceptionHandlerMiddleware)
    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(AppException, app_exception_handler)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("interaction table corrupted")

    @app.get("/upstream")
    async def upstream():
        raise UpstreamServiceError("RxNav request failed")

    return app


def test_unhandled_error_is_500_in_error_envelope_with_request_id():
    client = TestClient(_build_app(), raise_server_exceptions=False)

    resp = client.get("/boom", headers={"X-Request-ID": "req-500"})

    assert resp.status_code == 500
    assert resp.headers["X-Request-ID"] == "req-500"
    assert resp.json() == {
        "error": {
            "code": 500,
            "slug": "internal_error",
            "message": INTERNAL_ERROR_MESSAGE,
            "details": {"request_id": "req-500"},
        }
    }


def test_unhandled_error_without_header_reports_generated_request_id():
    client = TestClient(_build_app(), raise_server_exceptions=False)

    resp = client.get("/boom")

    generated = resp.headers["X-Request-ID"]
    assert generated
    assert resp.json()["error"]["details"]["request_id"] == generated


def test_app_exceptions_still_go_through_their_handler():
    client = TestClient(_build_app(), raise_server_exceptions=False)

    resp = client.get("/upstream")

    assert resp.status_code == 502
    assert resp.json()["error"]["slug"] == "upstream_service_error"
