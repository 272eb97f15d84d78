"""Forward-only event reader for project documents."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional, Tuple, Union
from xml.parsers import expat


Attributes = Tuple[Tuple[str, str], ...]

# Bytes handed to the parser per feed call.
DEFAULT_CHUNK_SIZE = 16 * 1024


@dataclass(frozen=True)
class ElementStart:
    """An opening tag, e.g. ``<ItemGroup Condition="...">``."""

    name: str
    attributes: Attributes = ()

    def attribute(self, key: str) -> Optional[str]:
        """Return the value of the first attribute named key, ignoring case."""
        return _find_attribute(self.attributes, key)


@dataclass(frozen=True)
class ElementEmpty:
    """A self-closing tag, e.g. ``<PackageReference Include="..." />``."""

    name: str
    attributes: Attributes = ()

    def attribute(self, key: str) -> Optional[str]:
        """Return the value of the first attribute named key, ignoring case."""
        return _find_attribute(self.attributes, key)


@dataclass(frozen=True)
class ElementEnd:
    """A closing tag."""

    name: str


@dataclass(frozen=True)
class Text:
    """Character data between tags."""

    content: str


@dataclass(frozen=True)
class EndOfDocument:
    """
    Last event of every scan.

    ``error`` describes why the scan stopped early, or is None when the
    whole document was read.
    """

    error: Optional[str] = None


Event = Union[ElementStart, ElementEmpty, ElementEnd, Text, EndOfDocument]


def _find_attribute(attributes: Attributes, key: str) -> Optional[str]:
    wanted = key.lower()
    for name, value in attributes:
        if name.lower() == wanted:
            return value
    return None


class DocumentScanner:
    """
    Lazy scanner over the text of a markup document.

    Iterating yields element events in document order and always ends with
    an EndOfDocument event. A malformed document does not raise: events read
    before the problem are yielded, then EndOfDocument carries a description
    of the error. Each iteration parses the text again from its start.

    Example:
        >>> events = list(DocumentScanner('<Project Sdk="x"><A/></Project>'))
        >>> events[1]
        ElementEmpty(name='A', attributes=())
    """

    def __init__(
        self,
        text: str,
        trim_text: bool = True,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._source = b""
        self._encode_error: Optional[str] = None
        try:
            # Whitespace before the prolog is insignificant but rejected by expat
            self._source = text.lstrip("\ufeff").lstrip().encode("utf-8")
        except UnicodeEncodeError as e:
            self._encode_error = f"text cannot be encoded as UTF-8: {e.reason}"
        self._trim_text = trim_text
        self._chunk_size = chunk_size
        self._error: Optional[str] = None
        self._parser = None
        self._events: Deque[Event] = deque()
        self._open: Optional[Tuple[str, Attributes, int]] = None

    @property
    def error(self) -> Optional[str]:
        """Description of the error that ended the last scan, if any."""
        return self._error

    def __iter__(self) -> Iterator[Event]:
        self._reset()
        if self._encode_error is not None:
            self._error = self._encode_error
            yield EndOfDocument(self._error)
            return
        source = self._source
        try:
            for offset in range(0, len(source), self._chunk_size):
                self._parser.Parse(source[offset:offset + self._chunk_size], False)
                yield from self._drain()
            self._parser.Parse(b"", True)
        except expat.ExpatError as e:
            self._error = str(e)
        self._flush_open()
        yield from self._drain()
        yield EndOfDocument(self._error)

    def _reset(self) -> None:
        # The encoding argument overrides any encoding declared in the prolog,
        # since the text has already been decoded.
        parser = expat.ParserCreate("utf-8")
        parser.ordered_attributes = True
        parser.buffer_text = True
        parser.StartElementHandler = self._on_start
        parser.EndElementHandler = self._on_end
        parser.CharacterDataHandler = self._on_text
        self._parser = parser
        self._error = None
        self._events.clear()
        self._open = None

    def _drain(self) -> Iterator[Event]:
        while self._events:
            yield self._events.popleft()

    def _flush_open(self) -> None:
        if self._open is not None:
            name, attributes, _ = self._open
            self._open = None
            self._events.append(ElementStart(name, attributes))

    def _on_start(self, name: str, attributes: List[str]) -> None:
        self._flush_open()
        # ordered_attributes gives a flat [key, value, key, value, ...] list
        pairs = tuple(zip(attributes[0::2], attributes[1::2]))
        # In a start handler the parser points at the opening "<"
        self._open = (name, pairs, self._parser.CurrentByteIndex)

    def _on_end(self, name: str) -> None:
        if self._open is not None and self._open[0] == name:
            _, attributes, tag_start = self._open
            if _is_self_closing(self._source, tag_start):
                self._open = None
                self._events.append(ElementEmpty(name, attributes))
                return
        self._flush_open()
        self._events.append(ElementEnd(name))

    def _on_text(self, data: str) -> None:
        self._flush_open()
        if self._trim_text:
            data = data.strip()
            if not data:
                return
        self._events.append(Text(data))


def _is_self_closing(source: bytes, tag_start: int) -> bool:
    """Check whether the start tag beginning at tag_start ends with "/>"."""
    quote = None
    for index in range(tag_start + 1, len(source)):
        byte = source[index:index + 1]
        if quote is not None:
            if byte == quote:
                quote = None
        elif byte in (b'"', b"'"):
            quote = byte
        elif byte == b">":
            return source[index - 1:index] == b"/"
    return False


def iter_elements(text: str) -> Iterator[Union[ElementStart, ElementEmpty]]:
    """Yield only the opening and self-closing elements of a document."""
    for event in DocumentScanner(text):
        if isinstance(event, (ElementStart, ElementEmpty)):
            yield event
