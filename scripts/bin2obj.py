#!/usr/bin/env python3
"""
Extract raw vertex/face data from arbitrary binary files into Wavefront OBJ.

The layout is described entirely by byte offsets, strides and field encodings,
so the tool works on undocumented formats once the regions have been located
(e.g. with a hex editor).

Usage
  python scripts/bin2obj.py model.bin -soff 128 -eoff 2524 -outp model.obj
  python scripts/bin2obj.py model.bin -vtyp 1 -vtxs 0.01 -fsof 2560 -feof 4096 -ftyp 0
  python scripts/bin2obj.py model.bin --config configs/profiles/console_i16.yaml --report run.json

Running without arguments prints the flag table.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Iterable

from binmesh.config import DEFAULT_OUT_PATH, ExtractionConfig, config_from_mapping, parse_offset
from binmesh.errors import ExtractionError
from binmesh.extract import run
from binmesh.profile import load_profile


def _offset_arg(value: str) -> int:
    try:
        return parse_offset(value)
    except ExtractionError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


# (short, long, dest, argparse kwargs, description)
LAUNCH_ARGUMENTS: list[tuple[str | None, str, str, dict[str, Any], str]] = [
    ("-soff", "--start-offset", "start_offset", {"type": _offset_arg}, "Set the start offset to begin reading from."),
    ("-eoff", "--end-offset", "end_offset", {"type": _offset_arg}, "Set the end offset to stop reading, otherwise reads to EOF."),
    ("-stri", "--stride", "stride", {"type": _offset_arg}, "Number of bytes to proceed after reading XYZ."),
    ("-outp", "--output", "out_path", {"type": Path}, f"Set the path for the output file (default: {DEFAULT_OUT_PATH})."),
    ("-vtxs", "--scale", "scale", {"type": float}, "Scales the vertices by the defined amount."),
    ("-vtyp", "--vertex-type", "vertex_type", {"type": int, "choices": [0, 1]}, "Sets how the vertex bytes are stored. 0 = float32 (default), 1 = int16"),
    ("-noswap", "--no-swap-yz", "swap_yz", {"action": "store_false"}, "Keep int16 vertex components in source order (default swaps Y and Z)."),
    ("-fsof", "--face-start", "face_start_offset", {"type": _offset_arg}, "Sets the start offset to start loading face indices from."),
    ("-feof", "--face-end", "face_end_offset", {"type": _offset_arg}, "Sets the end offset to finish loading face indices from."),
    ("-fstr", "--face-stride", "face_stride", {"type": _offset_arg}, "Number of bytes to proceed after reading in face indices."),
    ("-ftyp", "--face-type", "face_type", {"type": int, "choices": [0, 1]}, "Sets how the face bytes are stored. 0 = int16, 1 = int32 (default)"),
    ("-fquad", "--quad", "face_quad", {"action": "store_true"}, "Indicates that the faces are made up of four elements, a quad."),
    ("-bord", "--byte-order", "byte_order", {"choices": ["little", "big"]}, "Byte order of all decoded fields (default: little)."),
    ("-verb", "--verbose", "verbose", {"action": "store_true"}, "Enables more verbose output."),
    (None, "--config", "config", {"type": Path}, "YAML extraction profile; explicit flags override it."),
    (None, "--report", "report_path", {"type": Path}, "Write a JSON run report to this path."),
]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="bin2obj",
        description="Extract vertices/faces at known byte offsets of a binary file into OBJ.",
        allow_abbrev=False,
        argument_default=argparse.SUPPRESS,
    )
    ap.add_argument("input_path", nargs="?", default=None, help="Path to the binary file to read.")
    for short, long, dest, kwargs, desc in LAUNCH_ARGUMENTS:
        names = [n for n in (short, long) if n]
        ap.add_argument(*names, dest=dest, help=desc, **kwargs)
    return ap


def print_usage() -> None:
    print("No arguments provided. Possible arguments are provided below.")
    print("First argument is required to be a path to the file, then followed by any of the optional arguments.")
    for short, long, _dest, _kwargs, desc in LAUNCH_ARGUMENTS:
        names = ", ".join(n for n in (short, long) if n)
        print(f"   {names:<24}{desc}")
    print("For example,\n\tbin2obj ../path/myfile.whatever -soff 128")


def resolve_config(args: argparse.Namespace) -> ExtractionConfig:
    values: dict[str, Any] = {}
    cli = vars(args).copy()
    profile_path = cli.pop("config", None)
    if cli.get("input_path") is None:
        cli.pop("input_path", None)
    if profile_path is not None:
        values.update(load_profile(Path(profile_path)))
    values.update(cli)
    return config_from_mapping(values)


def main(argv: Iterable[str]) -> int:
    argv = list(argv)
    if not argv:
        print_usage()
        return 0

    args = build_parser().parse_args(argv)
    try:
        cfg = resolve_config(args)
        summary = run(cfg)
    except ExtractionError as e:
        raise SystemExit(f"[FAIL] {e}") from e

    print(f"Vertices: {summary.vertex_count}")
    print(f"Faces:    {summary.faces_written} written / {summary.face_count} read")
    return 0


def console_main() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    console_main()
