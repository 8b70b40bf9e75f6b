# iterative.py
# Iterative resolver for A records, walking down from the root servers.
# Usable as the lookup function for resolve():
#   resolve("example.com", lookup=IterativeLookup(timeout=1.0))

from __future__ import annotations

import ipaddress
import logging
import random

import dns.exception
import dns.message
import dns.name
import dns.query
import dns.rcode
import dns.rdatatype
import dns.resolver

logger = logging.getLogger(__name__)

ROOTS = [  # a few IPv4 root servers
    "198.41.0.4", "199.9.14.201", "192.33.4.12", "199.7.91.13",
    "192.203.230.10", "192.5.5.241", "192.112.36.4", "198.97.190.53",
]


def ask(server, name, rdtype="A", timeout=2.0):
    """One UDP question to one server; referrals are left to the caller."""
    q = dns.message.make_query(name, getattr(dns.rdatatype, rdtype))
    return dns.query.udp(q, server, timeout=timeout)


def pick_next(resp):
    # Prefer IPs (glue) from ADDITIONAL
    ips = []
    for rr in resp.additional:
        if rr.rdtype == dns.rdatatype.A:
            ips.extend(r.address for r in rr)
    # Else use NS names from AUTHORITY
    ns = []
    for rr in resp.authority:
        if rr.rdtype == dns.rdatatype.NS:
            ns.extend(str(r.target).rstrip(".") for r in rr)
    return ips, ns


def parse_answer(resp):
    cname = None
    addrs = []
    for rr in resp.answer:
        if rr.rdtype == dns.rdatatype.CNAME:
            cname = str(rr[0].target).rstrip(".")
        elif rr.rdtype == dns.rdatatype.A:
            addrs.extend(ipaddress.IPv4Address(r.address) for r in rr)
    return addrs, cname


def _roots():
    servers = ROOTS[:]
    random.shuffle(servers)
    return servers


def iterative_lookup(name: str, timeout: float = 2.0, maxsteps: int = 40) -> list[ipaddress.IPv4Address]:
    """Resolve A records for ``name`` starting at the roots.

    Raises dns.resolver.NXDOMAIN when a server says the name does not exist
    and dns.resolver.NoAnswer when ``maxsteps`` queries produce no address.
    Socket errors propagate.
    """
    qname = name.rstrip(".")
    servers = _roots()
    for _ in range(maxsteps):
        if not servers:
            servers = _roots()
        s = servers.pop(0)
        logger.debug("asking %s for %s", s, qname)
        try:
            resp = ask(s, qname, "A", timeout)
        except dns.exception.Timeout:
            logger.debug("timeout from %s", s)
            continue
        if resp.rcode() == dns.rcode.NXDOMAIN:
            raise dns.resolver.NXDOMAIN(qnames=[dns.name.from_text(qname)])
        addrs, cname = parse_answer(resp)
        if addrs:
            return addrs
        if cname:  # follow CNAME, restart at roots
            qname = cname
            servers = _roots()
            continue
        ips, ns = pick_next(resp)
        if ips:
            servers = ips + servers
            continue
        # No glue: resolve one NS hostname to IP, then continue
        for host in ns[:2]:
            try:
                ns_ips = iterative_lookup(host, timeout, maxsteps // 2)
            except dns.exception.DNSException:
                continue
            servers = [str(ip) for ip in ns_ips] + servers
            break
    raise dns.resolver.NoAnswer()


class IterativeLookup:
    """iterative_lookup with its timeout and step budget bound up front."""

    def __init__(self, timeout: float = 2.0, maxsteps: int = 40):
        self.timeout = timeout
        self.maxsteps = maxsteps

    def __call__(self, name: str) -> list[ipaddress.IPv4Address]:
        return iterative_lookup(name, self.timeout, self.maxsteps)

    def __repr__(self):
        return f"IterativeLookup(timeout={self.timeout}, maxsteps={self.maxsteps})"
