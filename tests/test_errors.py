"""Tests for the error taxonomy and the central mapper."""

import logging

from fastapi.testclient import TestClient

from product_catalog_api.app.core.errors import (
    INVALID_PAYLOAD_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    AppError,
    ErrorKind,
    validation_message,
)


class TestAppError:

    def test_status_codes(self):
        assert AppError.bad_request("x").status_code == 400
        assert AppError.not_found().status_code == 404
        assert AppError(ErrorKind.SERVER_ERROR, "boom").status_code == 500

    def test_kind_and_message(self):
        err = AppError.not_found("Product not found")
        assert err.kind is ErrorKind.NOT_FOUND
        assert err.message == "Product not found"
        assert str(err) == "Product not found"


class TestValidationMessage:

    def test_missing_body_field(self):
        errors = [{"type": "missing", "loc": ("body", "name"), "msg": "Field required"}]
        assert validation_message(errors) == MISSING_FIELDS_MESSAGE

    def test_null_body_field(self):
        errors = [{"type": "string_type", "loc": ("body", "name"), "msg": "", "input": None}]
        assert validation_message(errors) == MISSING_FIELDS_MESSAGE

    def test_query_parameter(self):
        errors = [{"type": "float_parsing", "loc": ("query", "cost"), "msg": "", "input": "abc"}]
        assert validation_message(errors) == "Invalid value for query parameter 'cost'"

    def test_bad_body_value(self):
        errors = [{"type": "float_parsing", "loc": ("body", "unitCost"), "msg": "", "input": "abc"}]
        assert validation_message(errors) == INVALID_PAYLOAD_MESSAGE


class TestMapper:

    def test_unmatched_route(self, client):
        res = client.get("/api/nothing-here")
        assert res.status_code == 404
        assert res.json() == {"message": "Not Found"}

    def test_unsupported_method_is_not_found(self, client):
        res = client.patch("/api/products")
        assert res.status_code == 404
        assert res.json() == {"message": "Not Found"}

    def test_unexpected_error_is_hidden(self, app, monkeypatch):
        def explode():
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(app.state.product_service, "get_all", explode)
        with TestClient(app, raise_server_exceptions=False) as client:
            res = client.get("/api/products")
        assert res.status_code == 500
        assert res.json() == {"message": "Server Error"}

    def test_server_error_kind_hides_message(self, app, monkeypatch):
        def fail():
            raise AppError(ErrorKind.SERVER_ERROR, "internal detail")

        monkeypatch.setattr(app.state.product_service, "get_all", fail)
        with TestClient(app) as client:
            res = client.get("/api/products")
        assert res.status_code == 500
        assert res.json() == {"message": "Server Error"}

    def test_corrupt_data_file_is_server_error(self, app, db_path):
        with TestClient(app, raise_server_exceptions=False) as client:
            db_path.write_text("{broken", encoding="utf-8")
            res = client.get("/api/products")
        assert res.status_code == 500
        assert res.json() == {"message": "Server Error"}


class TestDevelopmentLogging:

    def test_handled_errors_are_logged_in_development(self, app, caplog):
        app.state.settings.environment = "development"
        with TestClient(app) as client:
            with caplog.at_level(logging.WARNING, logger="product_catalog_api.app.core.errors"):
                res = client.get("/api/products/missing")
        assert res.status_code == 404
        assert "Product not found" in caplog.text

    def test_handled_errors_are_quiet_in_production(self, app, caplog):
        app.state.settings.environment = "production"
        with TestClient(app) as client:
            with caplog.at_level(logging.WARNING, logger="product_catalog_api.app.core.errors"):
                client.get("/api/products/missing")
        assert "Product not found" not in caplog.text
