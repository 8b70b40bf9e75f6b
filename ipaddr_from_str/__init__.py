# __init__.py
# Public surface: the literal check, resolve(), and its failure kinds.

from ipaddr_from_str.errors import IoFailure, LookupFailure, ParseFailure, ResolutionError
from ipaddr_from_str.iterative import IterativeLookup, iterative_lookup
from ipaddr_from_str.literal import LITERAL_IPV4, is_literal_ipv4, parse_literal_ipv4
from ipaddr_from_str.resolver import Address, resolve, system_lookup

__all__ = [
    "Address",
    "IoFailure",
    "IterativeLookup",
    "LITERAL_IPV4",
    "LookupFailure",
    "ParseFailure",
    "ResolutionError",
    "is_literal_ipv4",
    "iterative_lookup",
    "parse_literal_ipv4",
    "resolve",
    "system_lookup",
]
