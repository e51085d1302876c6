from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api import emit_file
from .errors import DecodeError, EmitError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="protoemit", description="Render proto3 files from JSON declaration trees")
    ap.add_argument("inputs", nargs="+", help="Input .json tree files")
    ap.add_argument("-o", "--out-dir", default=None, help="Write <stem>.proto files into this directory")
    ap.add_argument("--stdout", action="store_true", help="Print output even when --out-dir is given")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable)")
    args = ap.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    out_dir = Path(args.out_dir).resolve() if args.out_dir else None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    for inp in args.inputs:
        try:
            text = emit_file(inp)
        except (DecodeError, EmitError, OSError) as e:
            print(f"{inp}: {e}", file=sys.stderr)
            return 1

        if out_dir is not None:
            dest = out_dir / (Path(inp).stem + ".proto")
            dest.write_text(text, encoding="utf-8")
            logger.info("wrote %s", dest)
        if out_dir is None or args.stdout:
            sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
