# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Look into a data pack from the shell.
#
# COMMANDS:
# ---------
# 1. List the ids of a category:
#    python -m sophena --pack project.sophena ids fuels
#
# 2. Print the name of every entity in a category:
#    python -m sophena --pack project.sophena names fuels
#
# 3. Decode one entity (references resolved) and print its document:
#    python -m sophena --pack project.sophena show fuels f1
#
#   --pack may be omitted when SOPHENA_PACK_PATH is set.
#   Categories are directory names ("fuels") or model types ("FUEL").
#
# ==============================================

import argparse
import json
import sys
from typing import List, Optional

import structlog

from sophena.config import get_config
from sophena.errors import SophenaError
from sophena.observability import configure_logging
from sophena.persistence import JsonReader, JsonWriter
from sophena.storage import DataPack

log = structlog.get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sophena", description="Inspect Sophena data packs.")
    parser.add_argument(
        "--pack",
        help="path of the data pack (default: SOPHENA_PACK_PATH)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    ids = commands.add_parser("ids", help="list the ids of a category")
    ids.add_argument("category")

    names = commands.add_parser("names", help="print the names of a category")
    names.add_argument("category")

    show = commands.add_parser("show", help="print the document of one entity")
    show.add_argument("category")
    show.add_argument("id")

    return parser


def _open_pack(path: Optional[str]) -> DataPack:
    path = path or get_config().pack.default_path
    if not path:
        raise SophenaError("no data pack given (use --pack or SOPHENA_PACK_PATH)")
    return DataPack.load(path)


def run(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    pack = _open_pack(args.pack)
    model_type = pack.registry.parse(args.category)

    if args.command == "ids":
        for entity_id in pack.list_ids(model_type):
            print(entity_id)
        return 0

    if args.command == "names":
        for entity_id in pack.list_ids(model_type):
            document = pack.read(model_type, entity_id) or {}
            print(document.get("name") or "")
        return 0

    entity = JsonReader(pack).load(model_type, args.id)
    if entity is None:
        print(f"no {model_type.name} with id {args.id!r}", file=sys.stderr)
        return 1
    print(json.dumps(JsonWriter().to_document(entity), indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        configure_logging()
        return run(argv)
    except SophenaError as e:
        log.error("command_failed", error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
