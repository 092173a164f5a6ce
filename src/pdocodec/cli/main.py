"""Main CLI entry point for pdocodec."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

from .. import __version__
from ..codec import (
    FieldName,
    PdoVariant,
    decode_pdo,
    decode_rdo,
    encode,
    summarize,
    variant_from_leaf_name,
)
from ..config import OutputConfig
from ..exceptions import LiteralError
from ..models import DecodedObject, PdoQuery, RdoQuery
from ..utils import format_word

logger = logging.getLogger(__name__)

_ENCODABLE = [v.value for v in PdoVariant if v is not PdoVariant.NULL]


def _attribute(text: str) -> Tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdocodec",
        description="pdocodec: USB Power Delivery PDO/RDO decoder and encoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdocodec --pdo 0x0a01912c --first         Decode the first source PDO
  pdocodec --pdo 0x0001912c --sink          Decode a sink PDO
  pdocodec --rdo 0x1304b12c --ref F         Decode a fixed supply request
  pdocodec --encode fixed --first --attr voltage=5000mV --attr maximum_current=3000mA

RDO reference codes: F or V (fixed/variable), B (battery), P (pps),
A, E or S (adjustable voltage supply).
        """,
    )

    parser.add_argument(
        "--pdo",
        metavar="WORD",
        action="append",
        default=[],
        help="PDO to decode, decimal or 0x-prefixed hex (may be repeated)",
    )
    parser.add_argument(
        "--rdo",
        metavar="WORD",
        action="append",
        default=[],
        help="RDO to decode, decimal or 0x-prefixed hex (may be repeated)",
    )
    parser.add_argument(
        "--ref",
        metavar="CODE",
        help="type of the PDO the RDOs refer to: F, B, V, P, A, E or S",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="the PDO is at object position 1 (adds the fixed supply capability bits)",
    )
    parser.add_argument(
        "--sink",
        action="store_true",
        help="PDOs are sink capabilities (default: source capabilities)",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--variant",
        choices=_ENCODABLE,
        help="decode PDOs as this variant instead of classifying them",
    )
    group.add_argument(
        "--leaf",
        metavar="NAME",
        help="take the PDO variant and position from a capability leaf name, "
        "e.g. 1:fixed_supply",
    )
    parser.add_argument(
        "--spr",
        action="store_true",
        help="an adjustable_supply leaf is SPR AVS (default: EPR AVS)",
    )
    parser.add_argument(
        "--encode",
        metavar="VARIANT",
        choices=_ENCODABLE,
        help="encode the --attr values as a PDO of this variant",
    )
    parser.add_argument(
        "--attr",
        metavar="NAME=VALUE",
        type=_attribute,
        action="append",
        default=[],
        help="capability attribute for --encode, e.g. voltage=5000mV (may be repeated)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="with --encode, also print a one line summary",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="render results as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase verbosity (may be repeated)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pdocodec {__version__}",
    )
    return parser


def _pdo_context(args: argparse.Namespace, config: OutputConfig) -> Dict[str, Any]:
    """Variant and position for PDO decoding from --variant, --leaf and --first."""
    context: Dict[str, Any] = {"first": args.first, "source": not args.sink, "variant": None}
    if args.variant:
        context["variant"] = PdoVariant(args.variant)
    elif args.leaf:
        parsed = variant_from_leaf_name(args.leaf, config.avs_variant)
        if parsed is None:
            raise LiteralError(args.leaf, "expected <index>:<kind>", "capability leaf")
        index, variant = parsed
        context["variant"] = variant
        context["first"] = args.first or index == 1
    return context


def _render(result: DecodedObject) -> str:
    if result.kind == "pdo":
        label = PdoVariant(result.variant).description or result.variant
    else:
        label = f"request for {result.variant}"
    header = f">> {result.kind.upper()} {format_word(result.word)}, type: {label}\n"
    return header + result.as_text()


def run(args: argparse.Namespace, config: OutputConfig) -> int:
    """Carry out every requested operation.

    Each operation stands alone: a bad literal is reported and makes the exit
    status 1, but the remaining operations still run.

    Returns:
        Exit code (0 for success, 1 if any operation failed)
    """
    status = 0
    results: List[Dict[str, Any]] = []

    def emit(result: DecodedObject) -> None:
        if result.is_empty:
            logger.warning(
                "could not decode %s %s as %s",
                result.kind,
                format_word(result.word),
                result.variant,
            )
        if config.json:
            results.append(result.as_dict())
        else:
            sys.stdout.write(_render(result))

    pdo_literals = args.pdo
    if pdo_literals:
        try:
            context = _pdo_context(args, config)
        except LiteralError as e:
            print(f"Error: {e}", file=sys.stderr)
            status = 1
            pdo_literals = []
        for literal in pdo_literals:
            try:
                pdo_query = PdoQuery.from_literal(literal, **context)
            except LiteralError as e:
                print(f"Error: {e}", file=sys.stderr)
                status = 1
                continue
            emit(decode_pdo(pdo_query.word, pdo_query.first, pdo_query.source, pdo_query.variant))

    for literal in args.rdo:
        try:
            rdo_query = RdoQuery.from_literal(literal, args.ref)
        except LiteralError as e:
            print(f"Error: {e}", file=sys.stderr)
            status = 1
            continue
        emit(decode_rdo(rdo_query.word, rdo_query.reference))

    if args.encode:
        variant = PdoVariant(args.encode)
        attrs = dict(args.attr)
        for name in attrs:
            if FieldName.from_attribute(name) is None:
                logger.warning("unknown attribute %r ignored", name)
        # any position other than 1 drops the first-PDO capability bits
        word = encode(variant, not args.sink, 1 if args.first else 2, attrs)
        line = summarize(variant, not args.sink, attrs) if args.summary else ""
        if config.json:
            entry: Dict[str, Any] = {
                "kind": "encoded",
                "raw": format_word(word),
                "variant": variant.value,
            }
            if args.summary:
                entry["summary"] = line
            results.append(entry)
        else:
            print(f"raw_pdo: {format_word(word)}")
            if args.summary:
                print(f"summary: {line}")

    if config.json and results:
        print(json.dumps(results, indent=2))
    return status


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the pdocodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.rdo and not args.ref:
        parser.error("--rdo needs --ref to say which kind of PDO is requested")

    config = OutputConfig(
        verbosity=args.verbose,
        json=args.json,
        avs_variant=PdoVariant.SPR_AVS if args.spr else PdoVariant.EPR_AVS,
    )
    config.configure_logging()

    # If no command specified, show help
    if not (args.pdo or args.rdo or args.encode):
        parser.print_help()
        return 0

    return run(args, config)


if __name__ == "__main__":
    sys.exit(main())
