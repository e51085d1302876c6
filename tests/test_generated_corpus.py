from __future__ import annotations

import runpy
from pathlib import Path

from protoemit import PROTO_HEADER, decode_file, encode_file, write_proto_file
from protoemit.ast import EnumDeclaration, MessageDeclaration
from protoemit.cli import main as cli_main
from protoemit.testing import generate_corpus_files, generate_corpus_trees, generate_trees


SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "generate_corpus.py"


def test_trees_are_deterministic() -> None:
    assert generate_trees(seed=7, count=25) == generate_trees(seed=7, count=25)
    assert generate_trees(seed=7, count=5) != generate_trees(seed=8, count=5)


def test_trees_render_repeatably() -> None:
    for tree in generate_trees(seed=3, count=100):
        out = write_proto_file(tree)
        assert out.startswith(PROTO_HEADER)
        assert out == write_proto_file(tree)


def test_enums_start_at_zero() -> None:
    def enums(decls):
        for d in decls:
            if isinstance(d, EnumDeclaration):
                yield d
            elif isinstance(d, MessageDeclaration):
                yield from enums(d.declarations)

    for tree in generate_trees(seed=11, count=100):
        for e in enums(tree.declarations):
            assert e.variants[0][1] == 0


def test_corpus_files_only_import_earlier_files() -> None:
    files = generate_corpus_files(seed=1, count=30)
    names = [rel for rel, _ in files]
    assert names[0] == "case_000000.proto"
    for i, (rel, src) in enumerate(files):
        assert f"package corpus.case{i};" in src
        for line in src.splitlines():
            if line.startswith("import "):
                target = line[len('import "'):-len('";')]
                assert target in names[:i]


def test_encoded_trees_decode_to_the_same_tree() -> None:
    for _, tree in generate_corpus_trees(seed=5, count=30):
        assert decode_file(encode_file(tree)) == tree


def test_corpus_script_inputs_render_to_its_outputs(tmp_path: Path, capsys) -> None:
    script = runpy.run_path(str(SCRIPT))
    assert script["main"](["--seed", "2", "--count", "12", "--out", str(tmp_path)]) == 0
    corpus_dir = Path(capsys.readouterr().out.strip())
    assert corpus_dir == tmp_path.resolve() / "seed_2_count_12"

    inputs = sorted(corpus_dir.glob("*.json"))
    assert len(inputs) == 12

    rendered = tmp_path / "rendered"
    assert cli_main([str(p) for p in inputs] + ["-o", str(rendered)]) == 0
    for p in inputs:
        expected = (corpus_dir / f"{p.stem}.proto").read_text(encoding="utf-8")
        assert (rendered / f"{p.stem}.proto").read_text(encoding="utf-8") == expected
