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
Alternative parser backends.

A backend is any object with a ``try_parse(text)`` method that returns a
:class:`~neuma.model.ParsedDocument`, or None if it can't parse the text.
The :class:`~neuma.parser.GabcParser` uses a backend if it has one, and
falls back to the *parce* based parser otherwise.

The :class:`TreeSitterBackend` uses the *tree-sitter* library with a GABC
grammar. Backends that build a syntax tree only need to wrap their nodes in
a :class:`TreeNode` implementation; :func:`assemble_tree` then builds the
document in the same way the *parce* based parser does.

Set the environment variable ``DISABLE_TREE_SITTER`` to ``true`` to never
use the tree-sitter backend by default.

"""

import bisect
import enum
import importlib
import logging
import os

from . import document
from .lang.gabc import (
    CommentSpan, HeaderSpan, LyricSpan, Problem, ScanResult, bracket_span)


logger = logging.getLogger(__name__)

#: Environment variable that disables the tree-sitter backend.
DISABLE_VARIABLE = "DISABLE_TREE_SITTER"


def accelerator_disabled(environ=None):
    """Return True if the environment disables the tree-sitter backend."""
    if environ is None:
        environ = os.environ
    return environ.get(DISABLE_VARIABLE, '').strip().lower() in ('1', 'true', 'yes', 'on')


class State(enum.Enum):
    """The state of a backend."""
    available = 'available'
    unavailable = 'unavailable'
    failed = 'failed'


class Backend:
    """Base class for a backend.

    The default implementation is never available and always returns None.

    """
    state = State.unavailable

    def available(self):
        """Return True if this backend can be used."""
        return self.state is State.available

    def try_parse(self, text):
        """Return a ParsedDocument for the text, or None."""
        return None


class TreeNode:
    """The interface a syntax tree node of a backend must implement.

    ``kind`` is the node type name, ``children`` the list of child nodes,
    ``pos`` and ``end`` the string offsets in the text and ``is_error`` is
    True for error or missing nodes.

    """
    kind = None
    children = ()
    pos = 0
    end = 0
    is_error = False

    def field_named(self, name):
        """Return the child node for the field name, or None."""
        return None

    def text_of(self):
        """Return the text of this node."""
        raise NotImplementedError


class TreeSitterNode(TreeNode):
    """A TreeNode wrapping a tree-sitter node.

    ``source`` is the UTF-8 encoded text, ``offsets`` a sorted list of the
    byte offset of every character, used to translate byte offsets to
    string offsets.

    """
    def __init__(self, node, source, offsets):
        self.node = node
        self._source = source
        self._offsets = offsets

    @property
    def kind(self):
        return self.node.type

    @property
    def children(self):
        return [TreeSitterNode(c, self._source, self._offsets) for c in self.node.children]

    @property
    def pos(self):
        return bisect.bisect_left(self._offsets, self.node.start_byte)

    @property
    def end(self):
        return bisect.bisect_left(self._offsets, self.node.end_byte)

    @property
    def is_error(self):
        return self.node.type == 'ERROR' or self.node.is_missing

    def field_named(self, name):
        node = self.node.child_by_field_name(name)
        if node is not None:
            return TreeSitterNode(node, self._source, self._offsets)

    def text_of(self):
        return self._source[self.node.start_byte:self.node.end_byte].decode('utf-8', errors='replace')


def byte_offsets(text):
    """Return the list of UTF-8 byte offsets of every character, plus the end."""
    offsets = [0]
    for c in text:
        offsets.append(offsets[-1] + len(c.encode('utf-8', errors='surrogatepass')))
    return offsets


def scan_tree(root, text):
    """Return a :class:`~neuma.lang.gabc.ScanResult` from a TreeNode tree.

    Header nodes (``header`` or ``header_line``) need ``name`` and ``value``
    fields; syllable nodes (``syllable`` or ``word``) may have ``text`` and
    ``notes`` fields. ``comment`` nodes become comments, the end of a
    ``separator`` node is the start of the body. Error nodes are reported.

    """
    headers = []
    syllables = []
    comments = []
    problems = []
    body_pos = None

    def walk(node):
        nonlocal body_pos
        for child in node.children:
            kind = child.kind
            if child.is_error:
                problems.append(Problem("Syntax error: unexpected {}".format(kind),
                    child.pos, child.end, 'error'))
            if kind in ('header', 'header_line'):
                name = child.field_named('name')
                value = child.field_named('value')
                if name and value:
                    headers.append(HeaderSpan(name.text_of(), value.text_of().strip(),
                        child.pos, child.end))
            elif kind in ('syllable', 'word'):
                syllable(child)
            elif kind == 'comment':
                comments.append(CommentSpan(child.text_of()[1:], child.pos, child.end))
            elif kind == 'separator':
                body_pos = child.end
            else:
                walk(child)

    def syllable(node):
        lyric = node.field_named('text')
        if lyric:
            lyric_text = lyric.text_of().strip()
            if lyric_text:
                syllables.append(LyricSpan(lyric_text, lyric.pos, lyric.end))
        notes = node.field_named('notes')
        if notes:
            content = notes.text_of()
            if content.startswith('('):
                pos, content_pos = notes.pos, notes.pos + 1
                closed = content.endswith(')')
                content = content[1:-1] if closed else content[1:]
            else:
                # the node only holds the bracket content
                content_pos = notes.pos
                pos = content_pos - 1 if text[content_pos-1:content_pos] == '(' else content_pos
                closed = text.startswith(')', notes.end)
            syllables.append(bracket_span(pos, content_pos, content, closed))

    walk(root)
    if body_pos is None and syllables:
        body_pos = syllables[0].pos
    return ScanResult(headers, body_pos, syllables, comments, problems)


def assemble_tree(root, text):
    """Return a ParsedDocument for the TreeNode tree of the text."""
    return document.assemble(scan_tree(root, text), text)


class TreeSitterBackend(Backend):
    """A backend using tree-sitter.

    The ``language_module`` is the name of the Python module with the GABC
    grammar; it must have a ``language()`` function. If the tree-sitter
    library or the grammar can't be loaded, the backend is unavailable. If
    parsing fails once, the backend remains failed.

    """
    def __init__(self, language_module="tree_sitter_gregorio"):
        self.language_module = language_module
        self.state = State.unavailable
        self._parser = None
        try:
            tree_sitter = importlib.import_module("tree_sitter")
            grammar = importlib.import_module(language_module)
            parser = tree_sitter.Parser()
            parser.language = tree_sitter.Language(grammar.language())
        except (ImportError, AttributeError, TypeError, ValueError) as e:
            logger.debug("tree-sitter backend unavailable: %s", e)
        else:
            self._parser = parser
            self.state = State.available

    def try_parse(self, text):
        """Parse the text using tree-sitter, return a ParsedDocument or None."""
        if self.state is not State.available:
            return None
        try:
            source = text.encode('utf-8', errors='surrogatepass')
            tree = self._parser.parse(source)
            root = TreeSitterNode(tree.root_node, source, byte_offsets(text))
            return assemble_tree(root, text)
        except Exception:
            logger.warning("tree-sitter backend failed, using the parce parser", exc_info=True)
            self.state = State.failed
            self._parser = None
            return None
