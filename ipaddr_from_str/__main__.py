# Usage: python -m ipaddr_from_str example.com [--iterative]

from __future__ import annotations

import argparse
import logging
import sys

from ipaddr_from_str.errors import ResolutionError
from ipaddr_from_str.iterative import IterativeLookup
from ipaddr_from_str.resolver import resolve


def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="ipaddr-from-str", description="resolve a hostname or IPv4 literal")
    p.add_argument("target", help="hostname or dotted-decimal IPv4 address")
    p.add_argument("--iterative", action="store_true", help="walk from the root servers instead of using the system resolver")
    p.add_argument("--timeout", type=float, default=2.0, help="per-query timeout for --iterative (seconds)")
    p.add_argument("--maxsteps", type=int, default=40, help="query budget for --iterative")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    lookup = IterativeLookup(args.timeout, args.maxsteps) if args.iterative else None
    try:
        addrs = resolve(args.target, lookup=lookup)
    except ResolutionError as e:
        print(e, file=sys.stderr)
        return 1

    for a in addrs:
        print(a)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
