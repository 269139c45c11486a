"""Request → use case input helpers shared by the route modules."""
from __future__ import annotations

from typing import Any

from flask import request


def json_body() -> Any:
    """Parsed JSON body, or None when the body is missing or not JSON."""
    return request.get_json(silent=True)


def query_args() -> dict:
    return request.args.to_dict()


def with_keys(payload: Any, **keys: str) -> Any:
    """Merge path parameters into a JSON payload; path values win.

    Non-object payloads are passed through untouched so validation reports them.
    """
    if payload is None:
        return dict(keys)
    if not isinstance(payload, dict):
        return payload
    return {**payload, **keys}
