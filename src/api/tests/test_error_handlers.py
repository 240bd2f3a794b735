"""Tests for the global error handlers: response shape and information hiding."""

import unittest
from unittest.mock import patch

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from api.error_handlers import GENERIC_ERROR_MESSAGE, build_error_body, register_error_handlers
from domain.model.errors import NotFoundError, ServerError, UnauthorizedError
from utils.settings import get_settings


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise NotFoundError("User not found.")

    @app.get("/unauthorized")
    async def unauthorized():
        raise UnauthorizedError()

    @app.get("/server-error")
    async def server_error():
        try:
            raise RuntimeError("db password is hunter2")
        except RuntimeError as e:
            raise ServerError("Server error.") from e

    @app.get("/crash")
    async def crash():
        raise KeyError("internal_field")

    @app.get("/http")
    async def http():
        raise HTTPException(status_code=503, detail="Service unavailable")

    return app


class TestErrorHandlers(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(_build_app(), raise_server_exceptions=False)

    def test_operational_error_shape(self):
        response = self.client.get("/not-found")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"status": "fail", "message": "User not found."})

    def test_unauthorized_sets_bearer_challenge(self):
        response = self.client.get("/unauthorized")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers["www-authenticate"], "Bearer")

    def test_server_error_hides_cause(self):
        response = self.client.get("/server-error")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"status": "error", "message": "Server error."})
        self.assertNotIn("hunter2", response.text)

    def test_unhandled_exception_is_generic_500(self):
        response = self.client.get("/crash")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"status": "error", "message": GENERIC_ERROR_MESSAGE})
        self.assertNotIn("internal_field", response.text)

    def test_http_exception_uses_same_shape(self):
        response = self.client.get("/http")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {"status": "error", "message": "Service unavailable"})

    def test_unknown_route_uses_same_shape(self):
        response = self.client.get("/nope")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["status"], "fail")


class TestBuildErrorBody(unittest.TestCase):

    def tearDown(self):
        get_settings.cache_clear()

    def test_no_stack_outside_development(self):
        with patch.dict("os.environ", {"APP_ENV": "production"}):
            get_settings.cache_clear()
            body = build_error_body(500, "Server error.", RuntimeError("x"))
        self.assertNotIn("stack", body)

    def test_stack_in_development(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            exc = e

        with patch.dict("os.environ", {"APP_ENV": "development"}):
            get_settings.cache_clear()
            body = build_error_body(500, "Server error.", exc)

        self.assertEqual(body["status"], "error")
        self.assertIn("RuntimeError: boom", body["stack"])

    def test_status_word(self):
        self.assertEqual(build_error_body(400, "m")["status"], "fail")
        self.assertEqual(build_error_body(404, "m")["status"], "fail")
        self.assertEqual(build_error_body(500, "m")["status"], "error")


if __name__ == "__main__":
    unittest.main()
