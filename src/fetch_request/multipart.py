"""
Parts of a multipart/form-data body.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

DEFAULT_TEXT_CONTENT_TYPE = "text/plain"
DEFAULT_BINARY_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class StringPart:
    name: str
    value: str
    content_type: str = DEFAULT_TEXT_CONTENT_TYPE
    charset: str = "utf-8"

    def file_tuple(self) -> Tuple[None, bytes, str]:
        return (None, self.value.encode(self.charset), f"{self.content_type}; charset={self.charset}")


@dataclass(frozen=True)
class ByteArrayPart:
    name: str
    data: bytes
    file_name: Optional[str] = None
    content_type: str = DEFAULT_BINARY_CONTENT_TYPE

    def file_tuple(self) -> Tuple[Optional[str], bytes, str]:
        return (self.file_name, self.data, self.content_type)


@dataclass(frozen=True)
class FilePart:
    """A part whose content is read from ``path`` when the body is rendered."""
    name: str
    path: Path
    file_name: Optional[str] = None
    content_type: str = DEFAULT_BINARY_CONTENT_TYPE

    def file_tuple(self) -> Tuple[str, bytes, str]:
        path = Path(self.path)
        return (self.file_name or path.name, path.read_bytes(), self.content_type)


Part = Union[StringPart, ByteArrayPart, FilePart]
