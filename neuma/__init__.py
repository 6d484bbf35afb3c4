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
The neuma module.

Reads GABC files, the chant notation format of Gregorio, and returns a
:class:`~neuma.model.ParsedDocument` with the headers, syllables, notes,
comments and diagnostics, all annotated with their position in the text.

Example::

    >>> import neuma
    >>> doc = neuma.parse("name: Kyrie;\\n%%\\n(c4) KY(f)ri(gh)e(h.)")
    >>> doc.notation.syllables[0].clef
    Clef(type='c', line=4, has_flat=False, range=Range(start=Position(line=2, character=1), end=Position(line=2, character=3)))

"""

from .pkginfo import version, version_string
from .registry import find
from .parser import GabcParser


__all__ = ('GabcParser', 'find', 'load', 'parse', 'version', 'version_string')


def parse(text, use_accelerator=None):
    """Parse the text and return a :class:`~neuma.model.ParsedDocument`.

    A new :class:`~neuma.parser.GabcParser` is created for every call; see
    there for the use_accelerator argument.

    """
    return GabcParser(use_accelerator=use_accelerator).parse(text)


def load(filename, encoding='utf-8', errors=None, use_accelerator=None):
    """Convenience function to read text from ``filename`` and parse it.

    The ``encoding`` and ``errors`` arguments are passed to Python's
    :func:`open` function. Raises :class:`OSError` if the file can't be read.

    """
    with open(filename, encoding=encoding, errors=errors) as f:
        text = f.read()
    return parse(text, use_accelerator)
