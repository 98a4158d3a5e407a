"""
Name: Crosscutting Tests (config, logging, RFC7807)

Responsibilities:
  - Settings validation and production guard
  - JSON log formatting with redaction and request context
  - RFC7807 payload shape for AppHTTPException
"""

import json
import logging

import pytest
from employee_directory.api.exception_handlers import register_exception_handlers
from employee_directory.context import clear_context, set_request_context
from employee_directory.crosscutting.config import Settings
from employee_directory.crosscutting.error_responses import (
    PROBLEM_JSON_MEDIA_TYPE,
    conflict,
)
from employee_directory.crosscutting.exceptions import (
    DatabaseError,
    DuplicateRecordError,
    StaleRecordError,
)
from employee_directory.crosscutting.logger import JSONFormatter
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError

pytestmark = pytest.mark.unit


# =============================================================================
# Settings
# =============================================================================


def test_allowed_origins_are_split_and_trimmed():
    settings = Settings(allowed_origins=" http://a.test , ,http://b.test")

    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"db_pool_min_size": 0},
        {"db_pool_min_size": 5, "db_pool_max_size": 2},
        {"log_level": "LOUD"},
        {"jwt_access_ttl_minutes": 0},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_production_requires_strong_secret_and_secure_cookie():
    with pytest.raises(ValidationError):
        Settings(app_env="production", jwt_secret="dev-secret")
    with pytest.raises(ValidationError):
        Settings(app_env="production", jwt_secret="x" * 40, jwt_cookie_secure=False)

    ok = Settings(app_env="production", jwt_secret="x" * 40, jwt_cookie_secure=True)
    assert ok.is_production() is True


@pytest.mark.parametrize("env", ["test", "TESTING", "ci"])
def test_is_test_environments(env):
    assert Settings(app_env=env).is_test() is True


# =============================================================================
# Logging
# =============================================================================


def _format(**extra) -> dict:
    record = logging.LogRecord(
        name="employee-directory",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hola",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(JSONFormatter().format(record))


def test_json_formatter_redacts_secrets():
    payload = _format(
        password="hunter2",
        username="Ada_Lovelace",
        changes={"salary": "90000", "department": "Sales"},
    )

    assert payload["message"] == "hola"
    assert payload["password"] == "***REDACTADO***"
    assert payload["username"] == "Ada_Lovelace"
    assert payload["changes"] == {"salary": "***REDACTADO***", "department": "Sales"}


def test_json_formatter_includes_request_context():
    set_request_context(request_id="rid-1", method="GET", path="/v1/employees")
    try:
        payload = _format()
    finally:
        clear_context()

    assert payload["request_id"] == "rid-1"


# =============================================================================
# Errors
# =============================================================================


def test_store_errors_carry_code_and_error_id():
    duplicate = DuplicateRecordError("dup", field="email")
    stale = StaleRecordError("stale")

    assert duplicate.field == "email"
    assert duplicate.to_response().error_code == "DUPLICATE_RECORD"
    assert stale.error_id != DatabaseError("x").error_id


def test_app_exception_is_rendered_as_problem_json():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise conflict("Employee was modified concurrently; reload and retry.")

    response = TestClient(app).get("/boom")

    assert response.status_code == 409
    assert response.headers["content-type"].startswith(PROBLEM_JSON_MEDIA_TYPE)
    body = response.json()
    assert body["title"] == "Conflict"
    assert body["status"] == 409
    assert body["instance"].endswith("/boom")
