"""Fixed-width field rendering and string escaping for WNDB records."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from wordnet_grinder.exceptions import UnknownIdentifierError

_T = TypeVar("_T")

OFFSET_WIDTH = 8


def escape(item: str) -> str:
    """Escape a lemma for a space-separated record."""
    return item.replace(" ", "_")


def offset_format(offset: int) -> str:
    """Render an offset as 8 zero-padded decimal digits."""
    return f"{offset:0{OFFSET_WIDTH}d}"


def byte_length(text: str) -> int:
    """Length of ``text`` once written as UTF-8."""
    return len(text.encode("utf-8"))


def join_with_count(
    items: Iterable[_T],
    count_format: str,
    render: Callable[[_T], str] = str,
    separator: str = " ",
) -> str:
    """Render ``items`` prefixed by their count.

    ``count_format`` is a format spec such as ``"02x"`` or ``"03d"``. An
    empty collection renders as the count alone.
    """
    rendered = [render(item) for item in items]
    parts = [format(len(rendered), count_format), *rendered]
    return separator.join(parts)


def join_and_quote(items: Iterable[Any], delimiter: str = " ") -> str:
    """Join items, double-quoting those not already quoted."""
    quoted = []
    for item in items:
        value = str(item)
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            quoted.append(value)
        else:
            quoted.append(f'"{value}"')
    return delimiter.join(quoted)


def header_named(name: str) -> str:
    """Legal header by name: ``oewn`` or ``princeton``."""
    try:
        return HEADERS[name.lower()]
    except KeyError:
        raise UnknownIdentifierError("header", name) from None


# ---------------------------------------------------------------------------
# Legal headers. Their UTF-8 byte length is the offset origin of every
# data.* file, so they must stay byte-exact (trailing spaces included).
# ---------------------------------------------------------------------------

PRINCETON_HEADER = (
    "  1 This software and database is being provided to you, the LICENSEE, by  \n"
    "  2 Princeton University under the following license.  By obtaining, using  \n"
    "  3 and/or copying this software and database, you agree that you have  \n"
    "  4 read, understood, and will comply with these terms and conditions.:  \n"
    "  5   \n"
    "  6 Permission to use, copy, modify and distribute this software and  \n"
    "  7 database and its documentation for any purpose and without fee or  \n"
    "  8 royalty is hereby granted, provided that you agree to comply with  \n"
    "  9 the following copyright notice and statements, including the disclaimer,  \n"
    "  10 and that the same appear on ALL copies of the software, database and  \n"
    "  11 documentation, including modifications that you make for internal  \n"
    "  12 use or for distribution.  \n"
    "  13   \n"
    "  14 WordNet 3.1 Copyright 2011 by Princeton University.  All rights reserved.  \n"
    "  15   \n"
    "  16 THIS SOFTWARE AND DATABASE IS PROVIDED \"AS IS\" AND PRINCETON  \n"
    "  17 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES, EXPRESS OR  \n"
    "  18 IMPLIED.  BY WAY OF EXAMPLE, BUT NOT LIMITATION, PRINCETON  \n"
    "  19 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES OF MERCHANT-  \n"
    "  20 ABILITY OR FITNESS FOR ANY PARTICULAR PURPOSE OR THAT THE USE  \n"
    "  21 OF THE LICENSED SOFTWARE, DATABASE OR DOCUMENTATION WILL NOT  \n"
    "  22 INFRINGE ANY THIRD PARTY PATENTS, COPYRIGHTS, TRADEMARKS OR  \n"
    "  23 OTHER RIGHTS.  \n"
    "  24   \n"
    "  25 The name of Princeton University or Princeton may not be used in  \n"
    "  26 advertising or publicity pertaining to distribution of the software  \n"
    "  27 and/or database.  Title to copyright in this software, database and  \n"
    "  28 any associated documentation shall at all times remain with  \n"
    "  29 Princeton University and LICENSEE agrees to preserve same.  \n"
)

OEWN_HEADER = (
    "  1 This software and database is being provided to you, the LICENSEE, by  \n"
    "  2 the Open English Wordnet team under the Creative Commons Attribution 4.0  \n"
    "  3 International License (CC-BY 4.0).  \n"
    "  4 Open English Wordnet 2021 Copyright 2021 by the Open English Wordnet team.  \n"
    "  5 \n"
    "  6 Permission to use, copy, modify and distribute this software and  \n"
    "  7 database and its documentation for any purpose and without fee or  \n"
    "  8 royalty is hereby granted, provided that you agree to comply with  \n"
    "  9 the following copyright notice and statements, including the disclaimer,  \n"
    "  10 and that the same appear on ALL copies of the software, database and  \n"
    "  11 documentation, including modifications that you make for internal  \n"
    "  12 use or for distribution.  \n"
    "  13 \n"
    "  14 WordNet 3.1 Copyright 2011 by Princeton University.  All rights reserved.  \n"
    "  15 THIS SOFTWARE AND DATABASE IS PROVIDED \"AS IS\" AND PRINCETON  \n"
    "  16 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES, EXPRESS OR  \n"
    "  17 IMPLIED.  BY WAY OF EXAMPLE, BUT NOT LIMITATION, PRINCETON  \n"
    "  18 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES OF MERCHANT-  \n"
    "  19 ABILITY OR FITNESS FOR ANY PARTICULAR PURPOSE OR THAT THE USE  \n"
    "  20 OF THE LICENSED SOFTWARE, DATABASE OR DOCUMENTATION WILL NOT  \n"
    "  21 INFRINGE ANY THIRD PARTY PATENTS, COPYRIGHTS, TRADEMARKS OR  \n"
    "  22 OTHER RIGHTS.  \n"
    "  23 The name of Princeton University or Princeton may not be used in  \n"
    "  24 advertising or publicity pertaining to distribution of the software  \n"
    "  25 and/or database.  Title to copyright in this software, database and  \n"
    "  26 any associated documentation shall at all times remain with  \n"
    "  27 Princeton University and LICENSEE agrees to preserve same.  \n"
    "  28 \n"
    "  29 Ground by oewntk@gmail.com     \n"
)

HEADERS: dict[str, str] = {
    "oewn": OEWN_HEADER,
    "princeton": PRINCETON_HEADER,
}
