"""Turning HTTPResponse objects into typed values or the matching error."""

import json
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError  # type: ignore

from apiclients.sources.client.http.exceptions import ApiError, DecodeError
from apiclients.sources.client.http.http_response import HTTPResponse

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_detail(response: HTTPResponse) -> Any:
    """The server's error payload: parsed JSON when possible, raw text otherwise"""
    try:
        return response.json()
    except ValueError:
        return response.text()


def ensure_success(response: HTTPResponse) -> HTTPResponse:
    """Raise ApiError for any non-2xx response, otherwise return it unchanged"""
    if not response.is_success:
        raise ApiError(
            status=response.status,
            detail=_error_detail(response),
            method=response.response.request.method,
            url=response.url,
        )
    return response


def decode_json(response: HTTPResponse) -> Any:
    """Parse a successful response body as JSON"""
    ensure_success(response)
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Response from {response.url} is not valid JSON: {e}") from e


def validate_as(data: Any, type_: Any, source: str = "") -> Any:
    """Validate already-parsed JSON against any type pydantic understands"""
    try:
        return TypeAdapter(type_).validate_python(data)
    except ValidationError as e:
        raise DecodeError(f"Response from {source} does not match {type_!r}: {e}") from e


def decode_model(response: HTTPResponse, model: Type[ModelT]) -> ModelT:
    """Parse a successful JSON response into `model`"""
    return validate_as(decode_json(response), model, response.url)


def decode_list(response: HTTPResponse, item_type: Any) -> List[Any]:
    """Parse a successful JSON array response into a list of `item_type`"""
    return validate_as(decode_json(response), List[item_type], response.url)


def decode_empty(response: HTTPResponse) -> None:
    """Check a response whose body carries nothing of interest"""
    ensure_success(response)
