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
Assemble a :class:`~neuma.model.ParsedDocument` from a scan result.

The scan result (see :mod:`neuma.lang.gabc`) knows where everything is in
the text, but the contents of the note brackets are still raw text. Here
every bracket is split in note groups, the notes are decomposed, the NABC
snippets decoded and validated, and a clef or bar is looked for. All string
offsets are converted to line/character positions.

The bracket content is split at every ``|``. The first part is GABC, the
parts after it are NABC snippets, which belong to the GABC part before them.
If the ``nabc-lines`` header is set to a number N, the parts alternate: one
GABC part, N NABC parts, again a GABC part, etcetera.

"""

import reprlib

from . import nabc, notes, signs
from .model import (
    Bar, Clef, Comment, Diagnostic, Headers, NotationSection, NoteGroup,
    ParsedDocument, Severity, Syllable)
from .position import PositionTracker, Range


def nabc_lines(headers):
    """Return the positive integer value of the ``nabc-lines`` header, or None."""
    try:
        value = int(headers.get('nabc-lines', ''))
    except ValueError:
        return None
    return value if value > 0 else None


def group_segments(segments, lines=None):
    """Yield two-tuples (gabc_segment, nabc_segments) for the bracket segments.

    Without ``lines``, all segments after the first one are NABC snippets of
    the first segment. With ``lines``, every ``lines + 1``-th segment starts
    a new GABC part.

    """
    gabc, snippets = segments[0], []
    for index, segment in enumerate(segments[1:], 1):
        if lines and index % (lines + 1) == 0:
            yield gabc, snippets
            gabc, snippets = segment, []
        else:
            snippets.append(segment)
    yield gabc, snippets


class Assembler:
    """Builds the document model for one text.

    Create an Assembler for every text; it collects the diagnostics while
    building the syllables.

    """
    def __init__(self, text):
        self.text = text
        self.tracker = PositionTracker(text)
        self.diagnostics = []

    def range(self, pos, end):
        """Return a Range for the string offsets."""
        return self.tracker.range(pos, end)

    def report(self, message, pos, end, severity=Severity.error):
        """Add a Diagnostic."""
        self.diagnostics.append(Diagnostic(message, self.range(pos, end), Severity(severity)))

    def document(self, scan):
        """Return the ParsedDocument for the ScanResult."""
        headers = Headers((h.name, h.value) for h in scan.headers)
        for p in scan.problems:
            self.report(p.message, p.pos, p.end, p.severity)
        lines = nabc_lines(headers)
        syllables = tuple(self.syllable(s, lines) for s in scan.syllables)
        end = len(self.text)
        body_pos = end if scan.body_pos is None else scan.body_pos
        notation = NotationSection(syllables, self.range(body_pos, end))
        comments = tuple(Comment(c.text, self.range(c.pos, c.end))
            for c in sorted(scan.comments, key=lambda c: c.pos))
        return ParsedDocument(headers, notation, comments, tuple(self.diagnostics))

    def syllable(self, span, lines=None):
        """Return a Syllable for a LyricSpan or BracketSpan."""
        if not hasattr(span, 'segments'):
            return Syllable(span.text, (), self.range(span.pos, span.end))
        groups = tuple(g for g in (self.note_group(gabc, snippets)
            for gabc, snippets in group_segments(span.segments, lines)) if g)
        clef, bar = signs.classify(span.content, span.content_pos)
        if clef:
            clef = Clef(clef.type, clef.line, clef.has_flat, self.range(clef.pos, clef.end))
        if bar:
            bar = Bar(bar.type, self.range(bar.pos, bar.end))
        if not span.closed:
            self.report("Unclosed note bracket", span.pos, span.pos + 1, Severity.warning)
        return Syllable('', groups, self.range(span.pos, span.end), clef, bar)

    def note_group(self, gabc, snippets):
        """Return a NoteGroup, or None if there are no notes and no snippets."""
        if not gabc.text.strip() and not snippets:
            return None
        pos = gabc.pos if gabc.text.strip() or not snippets else snippets[0].pos
        end = snippets[-1].pos + len(snippets[-1].text) if snippets else gabc.pos + len(gabc.text)
        note_tuple = notes.decompose(gabc.text, self.tracker, gabc.pos)
        glyphs = tuple(g for g in map(self.glyph, snippets) if g)
        return NoteGroup(gabc.text, tuple(s.text for s in snippets) or None,
            note_tuple, self.range(pos, end), glyphs)

    def glyph(self, snippet):
        """Decode and validate a NABC snippet, return a descriptor or None."""
        stripped = snippet.text.strip()
        if not stripped:
            return None
        pos = snippet.pos + snippet.text.index(stripped)
        end = pos + len(stripped)
        descriptor = nabc.decode(snippet.text)
        if descriptor is None:
            self.report("Unknown NABC glyph code: {}".format(
                reprlib.repr(nabc.glyph_code(stripped))), pos, end, Severity.warning)
            return None
        descriptor = descriptor._replace(range=self.range(pos, end))
        for message in nabc.validate(descriptor):
            self.report(message, pos, end, Severity.error)
        return descriptor


def assemble(scan, text):
    """Return a :class:`~neuma.model.ParsedDocument` for the scan result of text."""
    return Assembler(text).document(scan)
