import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from rsvp_api.middleware import CORSHeadersMiddleware, HTTPLogMiddleware, cors_headers


def _app():
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"pong": True}

    app.add_middleware(HTTPLogMiddleware)
    app.add_middleware(CORSHeadersMiddleware)
    return app


def test_cors_header_set():
    headers = cors_headers()
    assert headers["Access-Control-Allow-Origin"] == "*"
    assert "X-Api-Key" in headers["Access-Control-Allow-Headers"]


def test_preflight_short_circuits():
    res = TestClient(_app()).options("/anything")
    assert res.status_code == 200
    assert res.headers["Access-Control-Allow-Methods"] == "GET,POST,PUT,DELETE,OPTIONS"


def test_http_log_middleware_logs_requests(caplog):
    with caplog.at_level(logging.DEBUG, logger="rsvp_api.http"):
        res = TestClient(_app()).get("/ping")

    assert res.status_code == 200
    assert res.headers["Access-Control-Allow-Origin"] == "*"
    assert "http.request end method=GET path=/ping status=200" in caplog.text
