"""
MOV/MP4 atom tree walker.

A MOV file is a list of atoms, each laid out as::

    +--------+--------+-----------------------+
    | size   | type   | content (size - 8)    |
    | 4B BE  | 4B     |                       |
    +--------+--------+-----------------------+

Atoms whose type is in ``config.CONTAINER_ATOMS`` hold a list of child
atoms as their content.  :func:`visit_atoms` walks the tree depth-first and
hands every atom to a visitor *before* its children, together with the path
of atom types leading to it and a :class:`SectionReader` bounded to the
atom's content.  Nothing is read into memory until a visitor asks for it.
"""

from __future__ import annotations

import logging
import os
import struct
from typing import BinaryIO, Callable, Iterable, Protocol, Union

from dashcam_gps.config import config
from dashcam_gps.exceptions import (
    MalformedAtomError,
    TruncatedReadError,
    UnsupportedSizeEncodingError,
)

logger = logging.getLogger(__name__)

ATOM_HEADER_SIZE = 8

_HEADER = struct.Struct(">I4s")


class SectionReader:
    """Read-only view of ``size`` bytes of *source* starting at *base*.

    Every read seeks the underlying file first, so any number of views can
    share one open file.  Sub-views created with :meth:`section` refer to
    the same file and copy nothing.
    """

    def __init__(self, source: BinaryIO, base: int, size: int):
        self._source = source
        self.base = base
        self.size = size
        self._pos = 0

    @classmethod
    def from_file(cls, source: BinaryIO) -> SectionReader:
        """Return a view covering the whole of *source*."""
        size = source.seek(0, os.SEEK_END)
        return cls(source, 0, size)

    @property
    def remaining(self) -> int:
        return self.size - self._pos

    @property
    def position(self) -> int:
        """Absolute file offset of the next byte to be read."""
        return self.base + self._pos

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if whence == os.SEEK_CUR:
            offset += self._pos
        elif whence == os.SEEK_END:
            offset += self.size
        if offset < 0:
            raise ValueError(f"negative seek position {offset}")
        self._pos = offset
        return self._pos

    def read(self, n: int = -1) -> bytes:
        if n < 0 or n > self.remaining:
            n = max(self.remaining, 0)
        if n == 0:
            return b""
        self._source.seek(self.position)
        data = self._source.read(n)
        self._pos += len(data)
        return data

    def read_exact(self, n: int, what: str = "data") -> bytes:
        """Read exactly *n* bytes or raise :class:`TruncatedReadError`."""
        start = self.position
        data = self.read(n)
        if len(data) < n:
            raise TruncatedReadError(
                f"Short read of {what}: wanted {n} bytes, got {len(data)}",
                offset=start,
            )
        return data

    def skip(self, n: int) -> None:
        self._pos += n

    def section(self, offset: int, size: int) -> SectionReader:
        """Return a view of *size* bytes starting *offset* bytes into this one."""
        return SectionReader(self._source, self.base + offset, size)

    def __repr__(self) -> str:
        return f"SectionReader(base=0x{self.base:x}, size={self.size})"


AtomPath = list[str]


class Visitor(Protocol):
    def visit(self, path: AtomPath, section: SectionReader) -> None: ...


VisitorFunc = Callable[[AtomPath, SectionReader], None]


def _next_atom(
    path: AtomPath, section: SectionReader
) -> tuple[str, SectionReader] | None:
    """Decode the next atom header in *section*.

    Returns ``(type, content)`` and leaves *section* positioned after the
    atom, or ``None`` once fewer than a header's worth of bytes remain or the
    next atom runs past the end of *section*.
    """
    if section.remaining < ATOM_HEADER_SIZE:
        return None

    start = section.position
    size, raw_type = _HEADER.unpack(section.read_exact(ATOM_HEADER_SIZE, "atom header"))
    atom_type = raw_type.decode("latin1")

    if size == 0:
        # Atom runs to the end of its parent
        content_size = section.remaining
    elif size == 1:
        raise UnsupportedSizeEncodingError(
            "64-bit extended atom sizes are not supported",
            offset=start,
            path=path + [atom_type],
        )
    elif size < ATOM_HEADER_SIZE:
        raise MalformedAtomError(
            f"Atom size {size} is smaller than its header",
            offset=start,
            path=path + [atom_type],
        )
    else:
        content_size = size - ATOM_HEADER_SIZE

    if content_size > section.remaining:
        # Overrunning atom ends its parent: trailing audio bytes in a
        # telemetry window, or the last atom of a cut-off recording
        logger.debug(
            "Atom %s at 0x%x declares %d bytes, %d remain; end of section",
            "/".join(path + [atom_type]),
            start,
            size,
            section.remaining + ATOM_HEADER_SIZE,
        )
        section.skip(section.remaining)
        return None

    content = section.section(section.tell(), content_size)
    section.skip(content_size)
    return atom_type, content


def visit_atoms(
    visitor: Union[Visitor, VisitorFunc],
    source: Union[BinaryIO, SectionReader],
    containers: Iterable[str] | None = None,
) -> None:
    """Visit every atom of *source* in depth-first pre-order.

    Parameters
    ----------
    visitor:
        Object with a ``visit(path, section)`` method, or a plain callable
        with the same signature.  Exceptions raised by the visitor abort the
        traversal.
    source:
        Seekable binary file (walked from byte 0 to its end) or a
        :class:`SectionReader` (walked from its current position to its end).
    containers:
        Atom types to descend into; defaults to ``config.CONTAINER_ATOMS``.
    """
    visit = visitor.visit if hasattr(visitor, "visit") else visitor
    container_types = frozenset(
        config.CONTAINER_ATOMS if containers is None else containers
    )

    if isinstance(source, SectionReader):
        root = source
    else:
        root = SectionReader.from_file(source)

    # Explicit stack of (path, section) so deep nesting can't exhaust recursion
    stack: list[tuple[AtomPath, SectionReader]] = [([], root)]
    while stack:
        path, section = stack[-1]
        atom = _next_atom(path, section)
        if atom is None:
            stack.pop()
            continue

        atom_type, content = atom
        atom_path = path + [atom_type]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Atom %s at 0x%x (%d bytes)",
                "/".join(atom_path),
                content.base,
                content.size,
            )
        visit(atom_path, content)

        if atom_type in container_types:
            stack.append((atom_path, content))
