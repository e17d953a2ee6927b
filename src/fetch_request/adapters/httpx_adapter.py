"""
Conversion of a finished Request into an httpx.Request.

Nothing is sent; the result can be handed to ``httpx.Client.send``.
A stream body is read to the end by the conversion, so a Request
carrying one converts to a full body only once.
"""
import io
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..body import (
    BytesBody, EntityWriterBody, FormParamsBody, GeneratorBody, MultipartBody,
    StreamBody, TextBody, describe,
)
from ..core.request import Request

logger = logging.getLogger(__name__)
LOG_PREFIX = "[HttpxAdapter]"

DEFAULT_CHARSET = "utf-8"


def _form_data(request: Request) -> Dict[str, List[str]]:
    data: Dict[str, List[str]] = {}
    for param in request.form_params:
        data.setdefault(param.name, []).append(param.value if param.value is not None else "")
    return data


def _cookie_header(request: Request) -> Optional[str]:
    if not request.cookies:
        return None
    return "; ".join(str(cookie) for cookie in request.cookies)


def _body_kwargs(request: Request) -> Dict[str, Any]:
    body = request.body
    charset = request.charset or DEFAULT_CHARSET

    if isinstance(body, BytesBody):
        return {"content": body.data}
    if isinstance(body, TextBody):
        return {"content": body.data.encode(charset)}
    if isinstance(body, StreamBody):
        return {"content": body.stream.read()}
    if isinstance(body, GeneratorBody):
        return {"content": iter(body.generator)}
    if isinstance(body, EntityWriterBody):
        buffer = io.BytesIO()
        body.writer.write_entity(buffer)
        return {"content": buffer.getvalue()}
    if isinstance(body, FormParamsBody):
        return {"data": _form_data(request)}
    if isinstance(body, MultipartBody):
        return {"files": [(part.name, part.file_tuple()) for part in body.parts]}
    if request.file is not None:
        return {"content": request.file.read_bytes()}
    return {}


def to_httpx_request(request: Request) -> httpx.Request:
    """Build an httpx.Request carrying the method, URL, headers and body."""
    headers = request.headers
    cookie = _cookie_header(request)
    if cookie and "Cookie" not in headers:
        headers["Cookie"] = cookie

    logger.debug(f"{LOG_PREFIX} {request.method} {request.uri} body={describe(request.body)}")
    return httpx.Request(
        method=request.method,
        url=str(request.uri),
        headers=headers,
        **_body_kwargs(request),
    )
