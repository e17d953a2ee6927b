"""
Request body variants.

A request carries exactly one of these values. Installing a new variant
replaces the old one, so two competing representations can never be
active together.
"""
from dataclasses import dataclass
from typing import Any, BinaryIO, Tuple, Union

from .multipart import Part
from .types import BodyGenerator, EntityWriter, Param


@dataclass(frozen=True)
class NoBody:
    pass


@dataclass(frozen=True)
class BytesBody:
    data: bytes


@dataclass(frozen=True)
class TextBody:
    data: str


@dataclass(frozen=True)
class StreamBody:
    stream: BinaryIO


@dataclass(frozen=True)
class EntityWriterBody:
    writer: EntityWriter
    length: int = -1


@dataclass(frozen=True)
class GeneratorBody:
    generator: BodyGenerator


@dataclass(frozen=True)
class FormParamsBody:
    params: Tuple[Param, ...] = ()


@dataclass(frozen=True)
class MultipartBody:
    parts: Tuple[Part, ...] = ()


Body = Union[
    NoBody, BytesBody, TextBody, StreamBody, EntityWriterBody,
    GeneratorBody, FormParamsBody, MultipartBody,
]

NO_BODY = NoBody()

# Single-value bodies, as opposed to form and multipart ones
SCALAR_BODY_TYPES = (BytesBody, TextBody, StreamBody, EntityWriterBody, GeneratorBody)


def is_scalar(body: Any) -> bool:
    return isinstance(body, SCALAR_BODY_TYPES)


def describe(body: Body) -> str:
    """Short, log-safe description of a body."""
    if isinstance(body, BytesBody):
        return f"<binary data: {len(body.data)} bytes>"
    if isinstance(body, TextBody):
        return f"<text: {len(body.data)} chars>"
    if isinstance(body, FormParamsBody):
        return f"<form: {len(body.params)} params>"
    if isinstance(body, MultipartBody):
        return f"<multipart: {len(body.parts)} parts>"
    if isinstance(body, NoBody):
        return "<empty>"
    return f"<{type(body).__name__}>"
