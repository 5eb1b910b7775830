"""Tests for the Lambda entry point with API Gateway proxy events."""

import json

import pytest

from lambda_users.handler import handler


def api_gateway_event(method, path, body=None, query=None):
    return {
        "resource": "/{proxy+}",
        "path": path,
        "httpMethod": method,
        "headers": {"Host": "abc123.execute-api.us-east-1.amazonaws.com", "Content-Type": "application/json"},
        "multiValueHeaders": {},
        "queryStringParameters": query,
        "multiValueQueryStringParameters": None,
        "pathParameters": {"proxy": path.lstrip("/")},
        "stageVariables": None,
        "requestContext": {
            "resourcePath": "/{proxy+}",
            "httpMethod": method,
            "path": f"/prod{path}",
            "stage": "prod",
            "identity": {"sourceIp": "203.0.113.7"},
        },
        "body": body,
        "isBase64Encoded": False,
    }


class LambdaContext:
    function_name = "users-api"
    aws_request_id = "test-request"


@pytest.mark.unit
def test_post_then_get_through_lambda(api_overrides, store):
    user = {"email": "jane@example.com", "firstName": "Jane", "lastName": "Doe"}

    created = handler(api_gateway_event("POST", "/users", body=json.dumps(user)), LambdaContext())
    fetched = handler(api_gateway_event("GET", "/users", query={"email": "jane@example.com"}), LambdaContext())

    assert created["statusCode"] == 201
    assert json.loads(created["body"]) == user
    assert fetched["statusCode"] == 200
    assert json.loads(fetched["body"]) == user


@pytest.mark.unit
def test_error_response_through_lambda(api_overrides):
    response = handler(api_gateway_event("POST", "/users", body="{broken"), LambdaContext())

    assert response["statusCode"] == 400
    assert json.loads(response["body"]) == {"error": "Invalid user data"}
