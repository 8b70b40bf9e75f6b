# literal.py
# Tell a dotted-decimal IPv4 literal apart from a hostname.

from __future__ import annotations

import re

# Four groups of 1-3 ASCII digits. Compiled once at import; never mutated.
LITERAL_IPV4 = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")


def parse_literal_ipv4(text: str) -> tuple[int, int, int, int] | None:
    """Return the four octets of ``text`` if it is a literal IPv4 address.

    Components are read as base-10, so "010" is ten. Anything that is not
    exactly ``D.D.D.D`` with each ``D`` in 0-255 gives None.
    """
    m = LITERAL_IPV4.fullmatch(text)
    if m is None:
        return None
    octets = tuple(int(g) for g in m.groups())
    if any(o > 255 for o in octets):
        return None
    return octets


def is_literal_ipv4(text: str) -> bool:
    return parse_literal_ipv4(text) is not None
