import json
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field  # type: ignore


def encode_path_segment(value: Any) -> str:
    """Percent-encode a value so it is safe as a single URL path segment"""
    return quote(str(value), safe="")


class HTTPRequest(BaseModel):
    """HTTP request descriptor. Immutable once constructed.
    Args:
        url: The URL template of the request, with `{name}` placeholders
        method: The HTTP method to use
        headers: The headers to send with the request
        body: The body of the request (dict sent as JSON, bytes sent raw)
        path_params: Values for the URL template placeholders
        query_params: The query parameters, already filtered to non-empty values
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(alias="uri")
    method: str = Field(default="GET")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Union[Dict[str, Any], bytes, None] = None
    path_params: Dict[str, str] = Field(default_factory=dict, alias="path")
    query_params: Dict[str, str] = Field(default_factory=dict, alias="query")

    def resolved_url(self) -> str:
        """URL with every path placeholder substituted and percent-encoded"""
        encoded = {key: encode_path_segment(value) for key, value in self.path_params.items()}
        return self.url.format(**encoded)

    def with_query(self, **params: Optional[str]) -> "HTTPRequest":
        """
        Return a copy with the given query parameters set.
        A value of None removes the parameter. The original request is untouched.
        """
        query = dict(self.query_params)
        for name, value in params.items():
            if value is None:
                query.pop(name, None)
            else:
                query[name] = str(value)
        return self.model_copy(update={"query_params": query})

    def with_headers(self, headers: Dict[str, str]) -> "HTTPRequest":
        """Return a copy with extra headers merged in (new values win)"""
        return self.model_copy(update={"headers": {**self.headers, **headers}})

    def to_json(self) -> str:
        """
        Convert request to a JSON string.
        Bytes are decoded as UTF-8.
        """
        data = self.model_dump()

        if isinstance(self.body, bytes):
            data["body"] = self.body.decode("utf-8", errors="replace")

        return json.dumps(data, indent=2)
