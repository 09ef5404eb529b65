"""
响应工具函数单元测试
"""

import re
from typing import Any

import pytest
from flask import Flask

from editgrid.constants.system_constants import ErrorCategory, ErrorMessages, SuccessMessages
from editgrid.errors import ConfigurationError, NotFoundError, ValidationError
from editgrid.utils.response_utils import (
    jsonify_unified_success,
    unified_error_response,
    unified_success_response,
)


@pytest.fixture
def flask_app() -> Any:
    """构造临时 Flask 应用，供 jsonify 系列函数使用"""
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.mark.unit
def test_unified_success_response_default():
    """默认成功响应结构包含必要字段"""
    payload, status = unified_success_response()

    assert status == 200
    assert payload["success"] is True
    assert payload["error"] is False
    assert payload["message"] == SuccessMessages.OPERATION_SUCCESS
    assert re.match(r"\d{4}-\d{2}-\d{2}T", payload["timestamp"])
    assert "data" not in payload


@pytest.mark.unit
def test_jsonify_unified_success(flask_app: Any):
    """jsonify 版本的成功响应可直接返回 HTTP Response"""
    with flask_app.app_context():
        response, status = jsonify_unified_success(data={"saved_ids": [5]}, message=SuccessMessages.GRID_SAVED)

    assert status == 200
    assert response.get_json()["data"] == {"saved_ids": [5]}


@pytest.mark.unit
def test_unified_error_response_for_validation_error():
    """校验错误映射为 400 且可恢复"""
    payload, status = unified_error_response(ValidationError(ErrorMessages.INVALID_RECORD_ID))

    assert status == 400
    assert payload["success"] is False
    assert payload["message"] == ErrorMessages.INVALID_RECORD_ID
    assert payload["category"] == ErrorCategory.VALIDATION.value
    assert payload["recoverable"] is True


@pytest.mark.unit
def test_unified_error_response_for_not_found_uses_message_key():
    payload, status = unified_error_response(NotFoundError(message_key="RECORD_NOT_FOUND"))

    assert status == 404
    assert payload["message_code"] == "RECORD_NOT_FOUND"
    assert payload["message"] == ErrorMessages.RECORD_NOT_FOUND


@pytest.mark.unit
def test_unified_error_response_for_configuration_error():
    payload, status = unified_error_response(ConfigurationError("列 body 配置错误"))

    assert status == 500
    assert payload["category"] == ErrorCategory.CONFIGURATION.value
    assert payload["recoverable"] is False


@pytest.mark.unit
def test_unified_error_response_for_unknown_exception():
    payload, status = unified_error_response(RuntimeError("boom"))

    assert status == 500
    assert payload["category"] == ErrorCategory.SYSTEM.value
