# ==============================================
# CLI - Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run the normalizer over a saved, already-bridged JSON response.
#
# COMMANDS:
# ---------
# 1. Flatten a bridged JSON document:
#    bridge-normalizer flatten response.json --service Trading --op GetOrders
#    bridge-normalizer flatten response.json --max-depth 3
#
# 2. Classify a response (exit code 0 success, 1 API error, 2 client error):
#    bridge-normalizer classify response.json --op GetOrders
#    cat response.json | bridge-normalizer classify - --op GetOrders
#
# OPTIONS (both commands):
# ------------------------
#   --array-keys FILE  Extra per-endpoint array keys (JSON)
#   --verbose          DEBUG logging
#
# ==============================================

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any, List, Optional

from bridge_normalizer.classification import OutcomeKind, ResponseClassifier
from bridge_normalizer.config import AppConfig, get_config
from bridge_normalizer.normalization import RequestContext

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_CLIENT_ERROR = 2


def _read_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r") as f:
        return json.load(f)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bridge-normalizer",
        description="Normalize and classify JSON produced from legacy XML API responses.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="JSON file to read, or - for stdin")
    common.add_argument("--service", default="", help="Service name, e.g. Trading")
    common.add_argument("--array-keys", dest="array_keys", help="JSON file of extra array keys")
    common.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    flatten_parser = subparsers.add_parser("flatten", parents=[common], help="Flatten a bridged document")
    flatten_parser.add_argument("--op", default="", help="Operation name, e.g. GetOrders")
    flatten_parser.add_argument("--max-depth", type=int, default=None, help="Levels to restructure")

    classify_parser = subparsers.add_parser("classify", parents=[common], help="Classify an API response")
    classify_parser.add_argument("--op", required=True, help="Operation name, e.g. GetOrders")

    return parser


def _effective_config(args: argparse.Namespace) -> AppConfig:
    config = get_config()
    if args.array_keys:
        config = replace(config, array_keys_file=args.array_keys)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    config = _effective_config(args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    payload = _read_json(args.file)
    context = RequestContext(service_name=args.service, op_type=args.op)
    classifier = ResponseClassifier.from_config(config)

    if args.command == "flatten":
        result = classifier.engine.flatten(payload, args.max_depth, context)
        print(json.dumps(result, indent=2, default=str))
        return EXIT_OK

    outcome = classifier.classify(payload, context)
    print(json.dumps(outcome.to_dict(), indent=2, default=str))

    if outcome.kind is OutcomeKind.SUCCESS:
        return EXIT_OK
    if outcome.kind is OutcomeKind.CLIENT_ERROR:
        return EXIT_CLIENT_ERROR
    return EXIT_API_ERROR


if __name__ == "__main__":
    sys.exit(main())
