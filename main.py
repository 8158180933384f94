#!/usr/bin/env python3
from __future__ import annotations
import argparse
import logging
import sys
from typing import Dict, List, Optional, Tuple

from cas import CAS
from config import DEFAULT_MAX_DEPTH, EngineConfig, check_max_depth
from errors import DiffError, ParseError


def _binding(text: str) -> Tuple[str, float]:
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None


def _max_depth(text: str) -> int:
    try:
        return check_max_depth(int(text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="symalg", description="Parse, rewrite and evaluate an expression."
    )
    p.add_argument("expression")
    p.add_argument("--simplify", action="store_true", help="fold constant subtrees")
    p.add_argument("--diff", metavar="VAR", help="differentiate with respect to VAR")
    p.add_argument(
        "--subs",
        metavar="NAME=VALUE",
        type=_binding,
        action="append",
        default=[],
        help="replace NAME by VALUE in the tree",
    )
    p.add_argument(
        "--let",
        metavar="NAME=VALUE",
        type=_binding,
        action="append",
        default=[],
        help="bind NAME to VALUE when evaluating",
    )
    p.add_argument("--max-depth", type=_max_depth, default=DEFAULT_MAX_DEPTH)
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    cas = CAS(EngineConfig(max_depth=args.max_depth))
    try:
        f = cas.parse(args.expression)
        if args.diff:
            df = f.diff(args.diff)
            f.release()
            f = df
        for name, value in args.subs:
            g = f.subs(name, value)
            f.release()
            f = g
        if args.simplify:
            f.simplify()
    except (ParseError, DiffError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(f)
    env: Dict[str, float] = dict(args.let)
    if env or not f.tree.variables():
        print(f.eval(env))
    return 0


if __name__ == "__main__":
    sys.exit(main())
