# -*- coding: utf-8 -*-
#
# This file is part of `neuma`, a library for Gregorio and the `.gabc` format
#
# Copyright © 2024-2025 by the neuma authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
The GABC parser.

Example::

    >>> from neuma.parser import GabcParser
    >>> doc = GabcParser().parse("name: Kyrie;\\n%%\\n(c4) KY(f)ri(gh)e(h.) (::)")
    >>> doc.headers['name']
    'Kyrie'
    >>> [s.text or s.notes[0].gabc for s in doc.notation.syllables if s.text or s.notes]
    ['c4', 'KY', 'f', 'ri', 'gh', 'e', 'h.', '::']

"""

import logging

from parce.transform import transform_text

from . import document
from .backend import TreeSitterBackend, accelerator_disabled
from .lang.gabc import Gabc, ScanResult


logger = logging.getLogger(__name__)


def first_bracket(text, comments):
    """Return the offset of the first ``(`` that is not in a comment, or -1."""
    pos = text.find('(')
    while pos != -1 and any(c.pos <= pos < c.end for c in comments):
        pos = text.find('(', pos + 1)
    return pos


def scan_text(text):
    """Return the :class:`~neuma.lang.gabc.ScanResult` for the text.

    A text without separator is read as notation only if it has no header,
    or if a note bracket comes before the first header, so that snippets like
    ``"(c4) Al(f)le(g)"`` or ``"(c4) Do(f)mi(g)nus:(h)"`` can be parsed too.

    """
    if not text:
        return ScanResult([], None, [], [], [])
    scan = transform_text(Gabc.root, text)
    if scan.body_pos is None and (not scan.headers
            or 0 <= first_bracket(text, scan.comments) < scan.headers[0].pos):
        syllables, comments = transform_text(Gabc.body, text)
        scan = ScanResult([], 0, syllables, comments, [])
    return scan


def parse_text(text):
    """Parse the text with the *parce* based parser and return a ParsedDocument."""
    return document.assemble(scan_text(text), text)


class GabcParser:
    """Parses GABC text into a :class:`~neuma.model.ParsedDocument`.

    If a ``backend`` is given (an object with a ``try_parse(text)`` method),
    it is tried first. Otherwise, if ``use_accelerator`` is True (the default,
    unless the ``DISABLE_TREE_SITTER`` environment variable is set), a
    :class:`~neuma.backend.TreeSitterBackend` is created.

    When the backend is unavailable, fails or returns None, this parser
    stops using it and parses all texts with the *parce* based parser.

    """
    def __init__(self, backend=None, use_accelerator=None):
        if backend is None:
            if use_accelerator is None:
                use_accelerator = not accelerator_disabled()
            if use_accelerator:
                backend = TreeSitterBackend()
                if not backend.available():
                    backend = None
        self._backend = backend

    @property
    def accelerated(self):
        """True if texts are parsed by a backend."""
        return self._backend is not None

    def parse(self, text):
        """Return a :class:`~neuma.model.ParsedDocument` for the text."""
        if not isinstance(text, str):
            raise TypeError("text must be a str, not {}".format(type(text).__name__))
        if self._backend is not None:
            try:
                result = self._backend.try_parse(text)
            except Exception:
                logger.warning("backend %r failed", self._backend, exc_info=True)
                result = None
            if result is not None:
                return result
            self._backend = None
        return parse_text(text)

