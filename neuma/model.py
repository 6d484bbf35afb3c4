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
The document model that results from parsing a GABC text.

All records are named tuples, so a :class:`ParsedDocument` can't be
modified after it has been assembled. Sequences are tuples as well. Every
record that corresponds to a piece of the source text has a ``range``
attribute, a :class:`~neuma.position.Range`.

"""

import collections
import collections.abc
import enum


class Shape(enum.Enum):
    """The shape of a single note.

    ``Linea``, ``Flat``, ``Sharp`` and ``Natural`` belong to the vocabulary,
    but the note decomposer does not produce them.

    """
    Punctum = 'punctum'
    PunctumInclinatum = 'punctum_inclinatum'
    Virga = 'virga'
    VirgaReversa = 'virga_reversa'
    Oriscus = 'oriscus'
    Quilisma = 'quilisma'
    Stropha = 'stropha'
    Liquescent = 'liquescent'
    Cavum = 'cavum'
    Linea = 'linea'
    Flat = 'flat'
    Sharp = 'sharp'
    Natural = 'natural'


class ModifierType(enum.Enum):
    """The kind of a note :class:`Modifier`."""
    InitioDebilis = 'initio_debilis'
    PunctumMora = 'punctum_mora'
    HorizontalEpisema = 'horizontal_episema'
    VerticalEpisema = 'vertical_episema'
    Liquescent = 'liquescent'
    Oriscus = 'oriscus'
    Quilisma = 'quilisma'
    Fusion = 'fusion'
    Cavum = 'cavum'
    Strata = 'strata'


class BarType(enum.Enum):
    """The kind of a :class:`Bar`.

    ``dominican`` is reserved: no bar token produces it yet.

    """
    virgula = 'virgula'
    divisio_minima = 'divisio_minima'
    divisio_minor = 'divisio_minor'
    divisio_maior = 'divisio_maior'
    divisio_finalis = 'divisio_finalis'
    dominican = 'dominican'


class Severity(enum.Enum):
    """The severity of a :class:`Diagnostic`."""
    error = 'error'
    warning = 'warning'
    info = 'info'


Modifier = collections.namedtuple("Modifier", "type value", defaults=(None,))
Modifier.__doc__ = "A note modifier of a :class:`ModifierType`, with an optional value."

Note = collections.namedtuple("Note", "pitch shape modifiers range")
Note.__doc__ = "A single note: pitch letter (a-n or p), Shape, Modifier tuple and range."

Clef = collections.namedtuple("Clef", "type line has_flat range")
Clef.__doc__ = "A clef: type ('c' or 'f'), staff line (1-4), whether a flat follows."

Bar = collections.namedtuple("Bar", "type range")
Bar.__doc__ = "A bar line (divisio), with a :class:`BarType`."

Comment = collections.namedtuple("Comment", "text range")
Comment.__doc__ = "A comment, the text does not include the ``%``."

Diagnostic = collections.namedtuple("Diagnostic", "message range severity",
    defaults=(Severity.error,))
Diagnostic.__doc__ = "A problem found in the source text."

#: Alias, for code that talks about parse errors.
ParseError = Diagnostic

NotationSection = collections.namedtuple("NotationSection", "syllables range")
NotationSection.__doc__ = "The body of the document: a tuple of syllables and a range."


class NoteGroup(collections.namedtuple("NoteGroup", "gabc nabc notes range glyphs")):
    """A group of notes from one part of a note bracket.

    ``gabc`` is the raw GABC fragment, ``nabc`` a tuple of the raw NABC
    snippets attached to it (or None), ``notes`` the tuple of :class:`Note`
    objects and ``glyphs`` the glyph descriptors decoded from the snippets.

    """
    __slots__ = ()


class Syllable(collections.namedtuple("Syllable", "text notes range clef bar",
        defaults=(None, None))):
    """A syllable: either lyric text or the contents of one note bracket.

    A lyric syllable has ``text`` and no ``notes``; a bracket syllable has an
    empty ``text``, a tuple of :class:`NoteGroup` objects and optionally a
    :class:`Clef` or :class:`Bar` found in the bracket.

    """
    __slots__ = ()

    def is_lyric(self):
        """Return True if this syllable holds lyric text."""
        return bool(self.text)


class Headers(collections.abc.Mapping):
    """A read-only, ordered, case-insensitive mapping of header values.

    Keys are lower-cased when stored and when looked up. Of duplicate keys
    the last one wins.

    """
    def __init__(self, items=()):
        d = {}
        for name, value in items:
            d[name.lower()] = value
        self._d = d

    def __getitem__(self, name):
        if not isinstance(name, str):
            raise KeyError(name)
        return self._d[name.lower()]

    def __contains__(self, name):
        return isinstance(name, str) and name.lower() in self._d

    def __iter__(self):
        return iter(self._d)

    def __len__(self):
        return len(self._d)

    def __eq__(self, other):
        if isinstance(other, Headers):
            return self._d == other._d
        return NotImplemented

    def __hash__(self):
        return hash(tuple(self._d.items()))

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self._d)


class ParsedDocument(collections.namedtuple("ParsedDocument", "headers notation comments errors")):
    """The result of parsing one GABC text.

    ``headers`` is a :class:`Headers` mapping, ``notation`` a
    :class:`NotationSection`, ``comments`` a tuple of :class:`Comment` and
    ``errors`` a tuple of :class:`Diagnostic` objects, both in the order they
    were found.

    The ``*_at()`` methods help finding the thing below the cursor, they
    return None if there is nothing at the position.

    """
    __slots__ = ()

    def syllable_at(self, position):
        """Return the :class:`Syllable` whose range contains the position."""
        for syllable in self.notation.syllables:
            if position in syllable.range:
                return syllable
            if syllable.range.start > position:
                break

    def note_group_at(self, position):
        """Return the :class:`NoteGroup` whose range contains the position."""
        syllable = self.syllable_at(position)
        if syllable:
            for group in syllable.notes:
                if position in group.range:
                    return group

    def note_at(self, position):
        """Return the :class:`Note` whose range contains the position."""
        group = self.note_group_at(position)
        if group:
            for note in group.notes:
                if position in note.range:
                    return note

    def comment_at(self, position):
        """Return the :class:`Comment` whose range contains the position."""
        for comment in self.comments:
            if position in comment.range:
                return comment
