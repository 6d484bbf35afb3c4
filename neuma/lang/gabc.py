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
GABC language and transform definition.

The :class:`Gabc` language definition lexes a GABC file: the header section
in the ``root`` lexicon (and a ``header`` lexicon for every header value),
then after the ``%%`` separator the ``body`` lexicon, which contains lyric
text, comments and a ``syllable`` lexicon for every note bracket.

The :class:`GabcTransform` turns the *parce* tree into a :class:`ScanResult`,
a set of records that only know string offsets. The records are turned into
the document model by :func:`neuma.document.assemble`, which also decodes the
note brackets.

Example::

    >>> from parce.transform import transform_text
    >>> from neuma.lang.gabc import Gabc
    >>> result = transform_text(Gabc.root, "name: Kyrie;\\n%%\\nKy(f)")
    >>> result.headers
    [HeaderSpan(name='name', value='Kyrie', pos=0, end=12)]
    >>> result.syllables
    [LyricSpan(text='Ky', pos=16, end=18), BracketSpan(pos=18, end=21, content_pos=19, content='f', segments=(Segment(pos=19, text='f'),), closed=True)]

"""

import collections

import parce.action as a
from parce import Language, lexicon, default_action
from parce.rule import bygroup
from parce.transform import Transform


# the actions used by the lexicons, and checked for by the transform
Separator = a.Delimiter.Separator
Comment = a.Comment
Whitespace = a.Whitespace
Unknown = a.Text.Unknown
HeaderName = a.Name.Header
HeaderColon = a.Delimiter.Header
HeaderValue = a.Text.Header
HeaderEnd = a.Delimiter.Header.End
Lyric = a.Text.Lyric
BracketOpen = a.Delimiter.Bracket.Start
BracketClose = a.Delimiter.Bracket.End
NabcSeparator = a.Delimiter.Separator.Nabc
Music = a.Text.Music


class Gabc(Language):
    """GABC language definition."""
    @lexicon
    def root(cls):
        """The header section, until the ``%%`` separator."""
        yield r'%%', Separator, cls.body
        yield r'%[^\n]*', Comment
        yield r'([A-Za-z0-9-]+)(:)', bygroup(HeaderName, HeaderColon), cls.header
        yield r'\s+', Whitespace
        yield default_action, Unknown

    @lexicon(consume=True)
    def header(cls):
        """A header name and its value, until a ``;`` or ``;;``."""
        yield r';;?', HeaderEnd, -1
        yield r'%[^\n]*', Comment
        yield r'\n', Whitespace
        yield default_action, HeaderValue

    @lexicon
    def body(cls):
        """The notation: lyric text and note brackets."""
        yield r'\(', BracketOpen, cls.syllable
        yield r'%[^\n]*', Comment
        yield r'\s+', Whitespace
        yield r'[^(%]+', Lyric

    @lexicon(consume=True)
    def syllable(cls):
        """The contents of a note bracket, NABC snippets follow a ``|``."""
        yield r'\)', BracketClose, -1
        yield r'\|', NabcSeparator
        yield default_action, Music


ScanResult = collections.namedtuple("ScanResult", "headers body_pos syllables comments problems")
ScanResult.__doc__ = """Everything found in a GABC text, with string offsets.

``headers`` is a list of :class:`HeaderSpan`, ``body_pos`` the offset right
after the separator (or None if there is no separator), ``syllables`` a list
of :class:`LyricSpan` and :class:`BracketSpan`, ``comments`` a list of
:class:`CommentSpan` and ``problems`` a list of :class:`Problem`.
"""

HeaderSpan = collections.namedtuple("HeaderSpan", "name value pos end")
LyricSpan = collections.namedtuple("LyricSpan", "text pos end")
BracketSpan = collections.namedtuple("BracketSpan", "pos end content_pos content segments closed")
Segment = collections.namedtuple("Segment", "pos text")
CommentSpan = collections.namedtuple("CommentSpan", "text pos end")
Problem = collections.namedtuple("Problem", "message pos end severity")


def comment_span(token):
    """Return a CommentSpan for a comment token."""
    return CommentSpan(token.text[1:], token.pos, token.end)


def split_segments(content, content_pos):
    """Split the bracket content at every ``|``, return a tuple of Segments."""
    segments = []
    pos = content_pos
    for text in content.split('|'):
        segments.append(Segment(pos, text))
        pos += len(text) + 1
    return tuple(segments)


def bracket_span(pos, content_pos, content, closed):
    """Return a BracketSpan for a bracket opened at ``pos``.

    If ``closed`` is True the closing bracket directly follows the content.

    """
    end = content_pos + len(content) + (1 if closed else 0)
    return BracketSpan(pos, end, content_pos, content,
        split_segments(content, content_pos), closed)


class GabcTransform(Transform):
    """Transform a GABC text to a :class:`ScanResult`."""
    def root(self, items):
        """Combine headers, body and comments in a ScanResult."""
        headers = []
        comments = []
        problems = []
        body_pos = None
        syllables = []
        unknown = None
        for i in items:
            if i.is_token:
                if i.action is Unknown:
                    # adjacent unrecognized runs, only separated by whitespace,
                    # are reported once
                    unknown = (unknown[0] if unknown else i.pos, i.end)
                    continue
                elif i.action is Comment:
                    comments.append(comment_span(i))
                elif i.action is Separator:
                    body_pos = i.end
                elif i.action is Whitespace:
                    continue
            elif i.name == 'header':
                header, header_comments = i.obj
                headers.append(header)
                comments.extend(header_comments)
            elif i.name == 'body':
                syllables, body_comments = i.obj
                comments.extend(body_comments)
            if unknown:
                problems.append(self.unknown_problem(*unknown))
                unknown = None
        if unknown:
            problems.append(self.unknown_problem(*unknown))
        return ScanResult(headers, body_pos, syllables, comments, problems)

    def unknown_problem(self, pos, end):
        """Return a Problem for unrecognized text in the header section."""
        return Problem("Unrecognized text in header section", pos, end, 'warning')

    def header(self, items):
        """Return a two-tuple (HeaderSpan, comments)."""
        name = items[0]
        value = []
        comments = []
        end = name.end
        for i in items[1:]:
            end = i.end
            if i.action is HeaderValue:
                value.append(i.text)
            elif i.action is Comment:
                comments.append(comment_span(i))
        return HeaderSpan(name.text, ''.join(value).strip(), name.pos, end), comments

    def body(self, items):
        """Return a two-tuple (syllables, comments)."""
        syllables = []
        comments = []
        for i in items:
            if not i.is_token:
                syllables.append(i.obj)
            elif i.action is Lyric:
                text = i.text.strip()
                if text:
                    syllables.append(LyricSpan(text, i.pos, i.end))
            elif i.action is Comment:
                comments.append(comment_span(i))
        return syllables, comments

    def syllable(self, items):
        """Return a BracketSpan."""
        head = items[0]
        closed = len(items) > 1 and items[-1].action is BracketClose
        content = ''.join(i.text for i in (items[1:-1] if closed else items[1:]))
        return bracket_span(head.pos, head.end, content, closed)
