"""Command Line Interface for face_template_migration.

Provides convenient commands:
  face-migrate version <template>
  face-migrate convert <template>
  face-migrate batch <file-or-folder>

A <template> is a file holding raw or base64 template bytes, or a base64
string given directly on the command line. A batch file holds one base64
template per line; a batch folder holds one template file per entry.

Optional flags:
  --max-rounds N  (zlib layers allowed per wrapper level, default 8)
  --max-depth N   (JSON/AMF3 wrapper levels allowed, default 16)

Example:
  face-migrate version tests/data/template.b64
  face-migrate convert tests/data/template.b64 --version 24 --print
  face-migrate batch tests/data/templates.txt --workers 4 --output out.json
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from tqdm import tqdm

from .commons.errors import TemplateMigrationError
from .commons.template_utils import load_template, load_templates
from .migration import FaceTemplateMigration
from .versions import resolve_version


def _print_json(data: Any, stream=None):  # pretty print helper
    print(json.dumps(data, indent=2, default=float), file=stream or sys.stdout)


def _parse_version(value: str) -> int | None:
    if value == "auto":
        return None
    return int(value)


def _migration(args) -> FaceTemplateMigration:
    return FaceTemplateMigration(max_decompression_rounds=args.max_rounds,
                                 max_unwrap_depth=args.max_depth,
                                 workers=getattr(args, "workers", 1))


def cmd_version(args):
    fm = _migration(args)
    version = fm.detect_version(load_template(args.template))
    _print_json({"version": version})


def cmd_convert(args):
    fm = _migration(args)
    template = load_template(args.template)
    if args.version is None:
        converted = fm.convert_one_any(template)
    else:
        converted = fm.convert(template, args.version)
    result = converted.to_dict()
    if not args.print:
        del result["vector"]
    _print_json(result)


def cmd_batch(args):
    fm = _migration(args)
    if args.version is not None:
        args.version = resolve_version(args.version)
    templates = load_templates(args.path)

    if fm.workers > 1:
        if args.version is None:
            converted = fm.convert_any(templates)
        else:
            converted = fm.convert_by_version(templates, args.version)
    else:
        converted = []
        for template in tqdm(templates, desc="Converting", unit="template", disable=args.no_progress):
            if args.version is None:
                converted.append(fm.convert_one_any(template))
            else:
                result = fm.convert_matching(template, args.version)
                if result is not None:
                    converted.append(result)

    rows = [c.to_dict() for c in converted]
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(rows, f)
        print(f"Converted {len(rows)} of {len(templates)} templates to {args.output}")
    else:
        _print_json(rows)


def build_parser():
    p = argparse.ArgumentParser(prog="face-migrate", description="Legacy face template migration CLI")
    p.add_argument("--max-rounds", type=int, default=8, help="zlib layers allowed per wrapper level")
    p.add_argument("--max-depth", type=int, default=16, help="JSON/AMF3 wrapper levels allowed")
    sub = p.add_subparsers(dest="command", required=True)

    pv = sub.add_parser("version", help="Print the version tag of a legacy template")
    pv.add_argument("template")
    pv.set_defaults(func=cmd_version)

    pc = sub.add_parser("convert", help="Convert one legacy template")
    pc.add_argument("template")
    pc.add_argument("--version", type=_parse_version, default=None, help="Template version (16|24|auto)")
    pc.add_argument("--print", action="store_true", help="Include the normalized vector in the output")
    pc.set_defaults(func=cmd_convert)

    pb = sub.add_parser("batch", help="Convert a file or folder of legacy templates")
    pb.add_argument("path")
    pb.add_argument("--version", type=_parse_version, default=None, help="Keep only this version (16|24|auto)")
    pb.add_argument("--workers", type=int, default=1)
    pb.add_argument("--output", default=None, help="Write the converted templates to this JSON file")
    pb.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    pb.set_defaults(func=cmd_batch)

    return p


def main(argv: list[str] | None = None):
    argv = argv or sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (TemplateMigrationError, FileNotFoundError) as e:
        _print_json({"error": str(e), "type": type(e).__name__}, stream=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
