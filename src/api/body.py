"""Length-capped JSON request body parsing."""

import json

from fastapi import Request
from starlette.requests import ClientDisconnect

from src.errors import BodyParseError


async def read_json_body(request: Request, max_bytes: int) -> dict:
    """
    Read and parse a JSON object body, refusing anything over max_bytes.

    Reading stops as soon as the cap is exceeded. An empty body parses as {}.

    Raises:
        BodyParseError: oversize payload, invalid JSON, or a non-object document
    """
    body = bytearray()
    try:
        async for chunk in request.stream():
            body.extend(chunk)
            if len(body) > max_bytes:
                raise BodyParseError(f"payload exceeds {max_bytes} bytes")
    except ClientDisconnect:
        raise BodyParseError("client disconnected while sending body") from None

    if not body:
        return {}

    try:
        data = json.loads(body)
    except ValueError as e:
        raise BodyParseError(f"invalid JSON body: {e}") from None

    if not isinstance(data, dict):
        raise BodyParseError("JSON body must be an object")
    return data
