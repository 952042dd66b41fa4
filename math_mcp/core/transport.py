"""
Stdio transport: framing detection on the way in, same-framing responses on
the way out.

Two framings share one byte stream:

* length-prefixed: ``Content-Length: N\\r\\n\\r\\n`` followed by N body bytes
* bare JSON: a JSON object on its own, usually newline-terminated

The reader decides per message by peeking at the buffered bytes, so nothing
is consumed until the framing is known.
"""
import io
import json
import logging
import threading
from typing import BinaryIO, Optional

from ..config import DEFAULT_MAX_MESSAGE_SIZE
from .errors import (
    InternalError,
    InvalidRequestError,
    McpError,
    ParseError,
    ResourceLimitError,
)
from .protocol import EncodingTag, JsonRpcRequest, JsonRpcResponse, ParsedMessage

logger = logging.getLogger(__name__)

HEADER_PREFIX = b"Content-Length:"
MAX_HEADER_LINE = 1024
MAX_EXTRA_HEADERS = 16
PREVIEW_LENGTH = 50

_WHITESPACE = b" \t\r\n"
_CHUNK_SIZE = 8192

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_OPEN_BRACE = ord("{")
_CLOSERS = {ord("{"): ord("}"), ord("["): ord("]")}
_CLOSING = frozenset(_CLOSERS.values())


def _preview(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace").strip()
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


class _StructureScanner:
    """
    Tracks string state and bracket nesting across chunks to find the byte
    where a top-level JSON object ends. It does not validate the JSON; that
    is left to ``json.loads`` once the object is complete.
    """

    def __init__(self):
        self.stack = []
        self.in_string = False
        self.escaped = False
        # index just past the last byte examined by the previous feed()
        self.offset = 0

    def feed(self, chunk: bytes) -> bool:
        """
        Scan ``chunk``. Returns True once the outermost object has closed.

        Raises:
            ParseError: on a closing bracket that does not match.
        """
        for idx, byte in enumerate(chunk):
            if self.in_string:
                if self.escaped:
                    self.escaped = False
                elif byte == _BACKSLASH:
                    self.escaped = True
                elif byte == _QUOTE:
                    self.in_string = False
                continue

            if byte == _QUOTE:
                self.in_string = True
            elif byte in _CLOSERS:
                self.stack.append(_CLOSERS[byte])
            elif byte in _CLOSING:
                if not self.stack or self.stack.pop() != byte:
                    self.offset = idx + 1
                    raise ParseError(
                        f"Parse error: unexpected '{chr(byte)}' in JSON message"
                    )
                if not self.stack:
                    self.offset = idx + 1
                    return True

        self.offset = len(chunk)
        return False


class MessageReader:
    """
    Reads one JSON-RPC request at a time from a binary stream.

    Args:
        stream: Binary input, typically ``sys.stdin.buffer``. Streams without
            ``peek()`` are wrapped in ``io.BufferedReader``.
        max_message_size: Largest body accepted in either framing, in bytes.
    """

    def __init__(self, stream: BinaryIO, max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE):
        if not hasattr(stream, "peek"):
            stream = io.BufferedReader(stream)
        self._stream = stream
        self.max_message_size = max_message_size

    def read_message(self) -> Optional[ParsedMessage]:
        """
        Read the next request.

        Returns:
            The parsed request with its framing, or None at end of stream.

        Raises:
            McpError: the message could not be framed, decoded or validated.
                The stream is left positioned at the start of the next
                message wherever that can be determined.
        """
        if not self._skip_whitespace():
            return None

        head = self._stream.peek(len(HEADER_PREFIX))
        # a short peek may only hold part of the header name
        if HEADER_PREFIX.startswith(head[:len(HEADER_PREFIX)]):
            return self._read_length_prefixed()
        if head[0] == _OPEN_BRACE:
            return self._read_bare_json()

        line = self._discard_line()
        raise InvalidRequestError(
            f"Expected Content-Length header or JSON object, got: {_preview(line)}"
        )

    def _skip_whitespace(self) -> bool:
        """Consume whitespace between messages; False at end of stream."""
        while True:
            chunk = self._stream.peek(1)
            if not chunk:
                return False
            remainder = chunk.lstrip(_WHITESPACE)
            skipped = len(chunk) - len(remainder)
            if skipped:
                self._stream.read(skipped)
            if remainder:
                return True

    def _discard_line(self) -> bytes:
        """Consume through the next newline, returning the first chunk of it."""
        first = None
        while True:
            part = self._stream.readline(_CHUNK_SIZE)
            if first is None:
                first = part
            if not part or part.endswith(b"\n"):
                return first

    def _read_header_line(self) -> bytes:
        line = self._stream.readline(MAX_HEADER_LINE + 1)
        if len(line) > MAX_HEADER_LINE and not line.endswith(b"\n"):
            self._discard_line()
            raise InvalidRequestError(
                f"Header line exceeds maximum length of {MAX_HEADER_LINE} bytes"
            )
        return line

    def _read_length_prefixed(self) -> ParsedMessage:
        line = self._read_header_line()
        if not line.startswith(HEADER_PREFIX):
            raise InvalidRequestError(
                f"Expected Content-Length header, got: {_preview(line)}"
            )

        value = line[len(HEADER_PREFIX):].strip()
        if not value:
            raise InvalidRequestError("Invalid Content-Length header format")
        if not value.isdigit():
            raise InvalidRequestError(f"Invalid Content-Length value: {_preview(value)}")

        length = int(value)
        if length > self.max_message_size:
            error = ResourceLimitError(
                f"Content-Length {length} exceeds maximum allowed size of "
                f"{self.max_message_size} bytes"
            )
            self._abandon_body()
            raise error

        self._skip_extra_headers()

        body = self._stream.read(length)
        if len(body) < length:
            raise InternalError(
                f"Failed to read JSON message: expected {length} bytes, got {len(body)}"
            )
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Invalid UTF-8 in message: {e}") from e

        return self._decode(text, EncodingTag.LENGTH_PREFIXED)

    def _skip_extra_headers(self) -> None:
        """Consume header lines up to and including the blank separator."""
        for _ in range(MAX_EXTRA_HEADERS + 1):
            line = self._read_header_line()
            if not line:
                raise InternalError("Unexpected end of stream while reading headers")
            if not line.strip():
                return
            if b":" not in line:
                raise InvalidRequestError(f"Malformed header line: {_preview(line)}")
            logger.debug(f"Skipping header: {_preview(line)}")
        raise InvalidRequestError(
            f"Too many header lines (maximum {MAX_EXTRA_HEADERS} besides Content-Length)"
        )

    def _abandon_body(self) -> None:
        """
        Drop the body of a length-prefixed message refused for its size.

        The declared length is not trusted, so the body is skipped by
        structure instead: a JSON object is scanned to its end without being
        kept, anything else up to the end of its line. A following
        ``Content-Length`` header is left for the next read.
        """
        try:
            self._skip_extra_headers()
            if not self._skip_whitespace():
                return
            head = self._stream.peek(len(HEADER_PREFIX))
            if head[0] == _OPEN_BRACE:
                self._consume_object(0)
            elif not HEADER_PREFIX.startswith(head[:len(HEADER_PREFIX)]):
                self._discard_line()
        except McpError as e:
            logger.debug(f"Error while skipping refused message body: {e}")

    def _consume_object(self, limit: int) -> Optional[bytearray]:
        """
        Consume one JSON object from the stream.

        Returns:
            The object's bytes, or None if it grew past ``limit`` bytes. Past
            the limit the scan continues but nothing more is kept.

        Raises:
            ParseError: on a mismatched bracket (the rest of that line is
                discarded) or end of stream inside the object.
        """
        scanner = _StructureScanner()
        buffered = bytearray()

        while True:
            chunk = self._stream.peek(_CHUNK_SIZE)
            if not chunk:
                raise ParseError("Parse error: unexpected end of stream inside JSON message")

            try:
                done = scanner.feed(chunk)
            except ParseError:
                self._stream.read(scanner.offset)
                self._discard_line()
                raise

            data = self._stream.read(scanner.offset)
            if buffered is not None:
                if len(buffered) + len(data) > limit:
                    buffered = None
                else:
                    buffered += data
            if done:
                return buffered

    def _read_bare_json(self) -> ParsedMessage:
        buffered = self._consume_object(self.max_message_size)
        if buffered is None:
            raise ResourceLimitError(
                f"Message exceeds maximum allowed size of {self.max_message_size} bytes"
            )
        try:
            text = buffered.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Invalid UTF-8 in message: {e}") from e

        return self._decode(text, EncodingTag.BARE_JSON)

    def _decode(self, text: str, encoding: EncodingTag) -> ParsedMessage:
        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise ParseError(f"Parse error: {e}") from e

        if not isinstance(payload, dict):
            raise InvalidRequestError(
                f"Invalid request: expected a JSON object, got {type(payload).__name__}"
            )

        try:
            request = JsonRpcRequest.from_dict(payload)
        except McpError as e:
            e.encoding = encoding
            raise
        return ParsedMessage(request=request, encoding=encoding)


class ResponseWriter:
    """
    Writes responses in the framing their request arrived in.

    Each message goes out in a single ``write()`` under a lock and is flushed
    immediately, so frames never interleave.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._lock = threading.Lock()

    def write(self, response: JsonRpcResponse, encoding: EncodingTag) -> None:
        body = json.dumps(response.to_dict(), separators=(",", ":")).encode("utf-8")
        if encoding is EncodingTag.LENGTH_PREFIXED:
            frame = b"Content-Length: %d\r\n\r\n" % len(body) + body
        else:
            frame = body + b"\n"

        with self._lock:
            self._stream.write(frame)
            self._stream.flush()
