# resolver.py
# Turn a hostname or IPv4 literal into a list of addresses.
# Literals are parsed directly; everything else goes to a lookup function.

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Callable, List, Optional, Union

import dns.exception

from ipaddr_from_str.errors import IoFailure, LookupFailure, ParseFailure, ResolutionError
from ipaddr_from_str.literal import parse_literal_ipv4

logger = logging.getLogger(__name__)

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
LookupFn = Callable[[str], List[Address]]


def system_lookup(name: str) -> list[Address]:
    """Resolve ``name`` with the system resolver (getaddrinfo).

    SOCK_STREAM keeps getaddrinfo to one entry per address instead of one
    per socket type. Order is whatever the resolver returns.
    """
    infos = socket.getaddrinfo(name, None, type=socket.SOCK_STREAM)
    return [ipaddress.ip_address(ai[4][0]) for ai in infos]


def classify_error(target: str, exc: BaseException) -> Optional[ResolutionError]:
    """Map a collaborator exception onto one of the three failure kinds.

    Returns None for exceptions that are not resolution failures at all
    (programming errors); the caller re-raises those untouched.
    """
    if isinstance(exc, ResolutionError):
        return exc
    # gaierror is an OSError, check it first
    if isinstance(exc, socket.gaierror):
        return LookupFailure(target, exc)
    if isinstance(exc, dns.exception.DNSException):
        return LookupFailure(target, exc)
    if isinstance(exc, OSError):
        return IoFailure(target, exc)
    # IDNA encoding rejected the name before any query went out
    if isinstance(exc, UnicodeError):
        return LookupFailure(target, exc)
    if isinstance(exc, ValueError):
        return ParseFailure(target, exc)
    return None


def resolve(hostname_or_address: str, lookup: Optional[LookupFn] = None) -> list[Address]:
    """Resolve a hostname or literal IPv4 address.

    A literal in dotted-decimal form yields exactly one IPv4Address and never
    touches ``lookup``. Anything else is passed unchanged to ``lookup``
    (default: :func:`system_lookup`) and its result is returned as-is.

    Raises LookupFailure, ParseFailure or IoFailure.
    """
    octets = parse_literal_ipv4(hostname_or_address)
    if octets is not None:
        logger.debug("literal %r", hostname_or_address)
        try:
            return [ipaddress.IPv4Address(bytes(octets))]
        except ValueError as exc:
            raise ParseFailure(hostname_or_address, exc) from exc

    if lookup is None:
        lookup = system_lookup
    logger.debug("lookup %r via %r", hostname_or_address, lookup)
    try:
        addrs = lookup(hostname_or_address)
    except Exception as exc:
        err = classify_error(hostname_or_address, exc)
        if err is None:
            raise
        if err is exc:
            raise
        raise err from exc
    return list(addrs)
