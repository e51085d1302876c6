"""Write a generated corpus as protoemit inputs plus the text they render to.

Each case becomes `case_NNNNNN.json` (a tree `protoemit` accepts) and
`case_NNNNNN.proto`, so the CLI can be run over the `.json` files and its
output diffed against the `.proto` files.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from protoemit import encode_file, write_proto_file
from protoemit.testing import generate_corpus_trees

logger = logging.getLogger("generate_corpus")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="generate_corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=1000)
    ap.add_argument("--out", default="tests/fixtures/generated_corpus")
    ap.add_argument("--no-proto", action="store_true", help="Only write the .json inputs")
    args = ap.parse_args(argv)

    out_dir = Path(args.out).resolve() / f"seed_{args.seed}_count_{args.count}"
    out_dir.mkdir(parents=True, exist_ok=True)

    for rel, tree in generate_corpus_trees(seed=args.seed, count=args.count):
        stem = Path(rel).stem
        (out_dir / f"{stem}.json").write_text(json.dumps(encode_file(tree), indent=2) + "\n", encoding="utf-8")
        if not args.no_proto:
            (out_dir / rel).write_text(write_proto_file(tree), encoding="utf-8")
        logger.debug("wrote %s", stem)

    print(str(out_dir))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
