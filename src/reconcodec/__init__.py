from __future__ import annotations

from .api import parse_chunks, parse_data, parse_file, parse_number, parse_source
from .base64_codec import Base64, Base64Parser
from .cursor import Cursor, CursorState
from .data import DataParser
from .diagnostic import Diagnostic
from .errors import ParseError
from .format import format_data, format_number
from .numeric import DecimalParser, HexadecimalParser, NumberParser, Uint32, Uint64
from .parser import Parser
from .render import RenderSettings, render
from .severity import Severity
from .sink import BytesSink, Sink, StringSink
from .source import FileSource, LineSource, StreamSource, TextSource
from .spans import Location, Mark, Span

__all__ = [
    "Base64",
    "Base64Parser",
    "BytesSink",
    "Cursor",
    "CursorState",
    "DataParser",
    "DecimalParser",
    "Diagnostic",
    "FileSource",
    "HexadecimalParser",
    "LineSource",
    "Location",
    "Mark",
    "NumberParser",
    "ParseError",
    "Parser",
    "RenderSettings",
    "Severity",
    "Sink",
    "Span",
    "StreamSource",
    "StringSink",
    "TextSource",
    "Uint32",
    "Uint64",
    "format_data",
    "format_number",
    "parse_chunks",
    "parse_data",
    "parse_file",
    "parse_number",
    "parse_source",
    "render",
]
