import ipaddress

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.resolver
import dns.rrset
import pytest

from ipaddr_from_str import IoFailure, IterativeLookup, LookupFailure, resolve
from ipaddr_from_str import iterative
from ipaddr_from_str.iterative import iterative_lookup, parse_answer, pick_next

TLD = "192.5.6.30"


def referral(q):
    resp = dns.message.make_response(q)
    resp.authority.append(dns.rrset.from_text("com.", 300, "IN", "NS", "a.gtld-servers.net."))
    resp.additional.append(dns.rrset.from_text("a.gtld-servers.net.", 300, "IN", "A", TLD))
    return resp


def answer(q, *texts):
    resp = dns.message.make_response(q)
    name = q.question[0].name
    resp.answer.append(dns.rrset.from_text(name, 300, "IN", "A", *texts))
    return resp


@pytest.fixture
def udp(monkeypatch):
    calls = []

    def install(handler):
        def fake_udp(q, server, timeout=None):
            calls.append((str(q.question[0].name), server))
            return handler(q, server)

        monkeypatch.setattr(dns.query, "udp", fake_udp)
        return calls

    return install


def test_follows_glue(udp):
    def handler(q, server):
        if server == TLD:
            return answer(q, "93.184.216.34", "93.184.216.35")
        return referral(q)

    calls = udp(handler)
    assert iterative_lookup("example.com.") == [
        ipaddress.IPv4Address("93.184.216.34"),
        ipaddress.IPv4Address("93.184.216.35"),
    ]
    assert calls[0][1] in iterative.ROOTS
    assert calls[-1] == ("example.com.", TLD)


def test_follows_cname(udp):
    def handler(q, server):
        name = str(q.question[0].name)
        if server != TLD:
            return referral(q)
        resp = dns.message.make_response(q)
        if name == "www.example.com.":
            resp.answer.append(dns.rrset.from_text(name, 300, "IN", "CNAME", "example.com."))
            return resp
        return answer(q, "10.1.2.3")

    udp(handler)
    assert iterative_lookup("www.example.com") == [ipaddress.IPv4Address("10.1.2.3")]


def test_timeout_moves_to_next_server(udp):
    state = {"n": 0}

    def handler(q, server):
        state["n"] += 1
        if state["n"] == 1:
            raise dns.exception.Timeout()
        return answer(q, "10.0.0.1")

    calls = udp(handler)
    assert iterative_lookup("example.com") == [ipaddress.IPv4Address("10.0.0.1")]
    assert len(calls) == 2
    assert calls[0][1] != calls[1][1]


def test_nxdomain(udp):
    def handler(q, server):
        resp = dns.message.make_response(q)
        resp.set_rcode(dns.rcode.NXDOMAIN)
        return resp

    udp(handler)
    with pytest.raises(dns.resolver.NXDOMAIN):
        iterative_lookup("nope.example")
    with pytest.raises(LookupFailure) as ei:
        resolve("nope.example", lookup=IterativeLookup())
    assert isinstance(ei.value.cause, dns.resolver.NXDOMAIN)


def test_out_of_steps(udp):
    calls = udp(lambda q, server: dns.message.make_response(q))
    with pytest.raises(dns.resolver.NoAnswer):
        iterative_lookup("example.com", maxsteps=5)
    assert len(calls) == 5
    with pytest.raises(LookupFailure):
        resolve("example.com", lookup=IterativeLookup(maxsteps=3))


def test_socket_error_is_io_failure(udp):
    def handler(q, server):
        raise OSError(101, "Network is unreachable")

    udp(handler)
    with pytest.raises(IoFailure):
        resolve("example.com", lookup=IterativeLookup())


def test_literal_skips_iterative(udp):
    calls = udp(lambda q, server: pytest.fail("queried"))
    assert resolve("8.8.8.8", lookup=IterativeLookup()) == [ipaddress.IPv4Address("8.8.8.8")]
    assert calls == []


def test_pick_next_and_parse_answer():
    q = dns.message.make_query("example.com", "A")
    ips, ns = pick_next(referral(q))
    assert ips == [TLD]
    assert ns == ["a.gtld-servers.net"]
    assert parse_answer(referral(q)) == ([], None)


def test_resolves_ns_without_glue(udp):
    ns_ip = "203.0.113.5"

    def handler(q, server):
        name = str(q.question[0].name)
        resp = dns.message.make_response(q)
        if name == "ns1.example.net.":
            return answer(q, ns_ip)
        if server == ns_ip:
            return answer(q, "10.9.9.9")
        resp.authority.append(dns.rrset.from_text("example.org.", 300, "IN", "NS", "ns1.example.net."))
        return resp

    udp(handler)
    assert iterative_lookup("example.org") == [ipaddress.IPv4Address("10.9.9.9")]
