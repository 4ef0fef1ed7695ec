from __future__ import annotations

import os
import sys
import argparse
import hashlib
import json as _json

from pathlib import Path
from typing import List, Dict, Any, Optional

from armorkit.decoder import Block, ScanResult, scan
from armorkit.errors import ArmorError, NoMarkerFound


def _read_input(path: str) -> bytes:
    """Read a whole input file; '-' reads standard input."""
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _describe_error(exc: ArmorError) -> str:
    return f"{type(exc).__name__}: {exc}"


def _warn_stopped(path: str, res: ScanResult) -> None:
    if res.error is None:
        return
    if res.blocks:
        print(
            f"Warning: {path}: stopped after {len(res.blocks)} block(s): {_describe_error(res.error)}",
            file=sys.stderr,
        )
    elif isinstance(res.error, NoMarkerFound):
        print(f"Warning: {path}: no armored block found", file=sys.stderr)
    else:
        print(f"Warning: {path}: {_describe_error(res.error)}", file=sys.stderr)


def _block_json(block: Block, index: int) -> Dict[str, Any]:
    return {
        "index": index,
        "type": block.type,
        "headers": dict(block.headers),
        "size": len(block.payload),
        "sha256": hashlib.sha256(block.payload).hexdigest(),
    }


def _slug(label: str) -> str:
    return "-".join(label.lower().split()) or "block"


def cmd_list(paths: List[str], *, as_json: bool = False, verbose: bool = False) -> bool:
    """List armored blocks found in each input.

    Args:
        paths: Input files ('-' for stdin).
        as_json: Emit one JSON document instead of text lines.
        verbose: Also print headers and a per-file summary.

    Returns:
        True when every input scanned cleanly and held at least one block.
    """
    ok = True
    report: List[Dict[str, Any]] = []
    for path in paths:
        res = scan(_read_input(path))
        if not res.blocks or res.error is not None:
            ok = False
        if as_json:
            report.append(
                {
                    "path": path,
                    "blocks": [_block_json(b, i) for i, b in enumerate(res.blocks)],
                    "error": _describe_error(res.error) if res.error is not None else None,
                }
            )
            continue
        for b in res.blocks:
            print(f"{b.type}\t{len(b.payload)}\t{path}")
            if verbose:
                for key, value in sorted(b.headers.items()):
                    print(f"  {key}: {value}")
        if verbose:
            print(f"{path}: {len(res.blocks)} block(s)")
        _warn_stopped(path, res)
    if as_json:
        print(_json.dumps(report, indent=2))
    return ok


def cmd_verify(paths: List[str], *, verbose: bool = False) -> bool:
    """Verify framing and checksums of every block in each input.

    Prints:
        "<path>: OK (<n> block(s))" or "<path>: FAIL: <reason>".
    """
    ok = True
    for path in paths:
        res = scan(_read_input(path))
        if res.blocks and res.error is None:
            print(f"{path}: OK ({len(res.blocks)} block(s))")
            if verbose:
                for i, b in enumerate(res.blocks):
                    print(f"  [{i}] {b.type} {len(b.payload)} bytes")
            continue
        ok = False
        if res.error is None or isinstance(res.error, NoMarkerFound):
            reason = "no armored block found"
        else:
            reason = _describe_error(res.error)
        if res.blocks:
            reason += f" (after {len(res.blocks)} good block(s))"
        print(f"{path}: FAIL: {reason}")
    return ok


def cmd_extract(path: str, *, outdir: str = ".", index: Optional[int] = None, quiet: bool = False) -> bool:
    """Write decoded payloads to files.

    Args:
        path: Input file ('-' for stdin).
        outdir: Destination directory (created if missing).
        index: Only extract the block at this position (0-based).
        quiet: Do not print written paths.

    Output files are named "<stem>.<n>.<type>.bin".
    """
    res = scan(_read_input(path))
    _warn_stopped(path, res)
    if index is not None:
        if index < 0 or index >= len(res.blocks):
            raise ValueError(f"Block index out of range (found {len(res.blocks)} block(s))")
        selected = [(index, res.blocks[index])]
    else:
        selected = list(enumerate(res.blocks))
    if not selected:
        return False

    os.makedirs(outdir, exist_ok=True)
    stem = "stdin" if path == "-" else Path(path).stem
    for i, b in selected:
        out = Path(outdir) / f"{stem}.{i}.{_slug(b.type)}.bin"
        out.write_bytes(b.payload)
        if not quiet:
            print(f"Wrote {out} ({len(b.payload)} bytes)")
    return res.ok


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="armorkit",
        description="Inspect ASCII-armored blocks",
        epilog="Scanning stops at the first corrupt block; blocks before it are still reported.",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_list = sub.add_parser("list", help="List armored blocks")
    ap_list.add_argument("paths", nargs="+", help="Input files ('-' for stdin)")
    ap_list.add_argument("--json", action="store_true", help="Emit JSON result summary")
    ap_list.add_argument("--verbose", "-V", action="store_true", help="Show headers and per-file counts")

    ap_verify = sub.add_parser("verify", help="Verify framing and CRC-24 of every block")
    ap_verify.add_argument("paths", nargs="+", help="Input files ('-' for stdin)")
    ap_verify.add_argument("--verbose", "-V", action="store_true", help="Show each verified block")

    ap_extract = sub.add_parser("extract", help="Write decoded payloads to files")
    ap_extract.add_argument("path", help="Input file ('-' for stdin)")
    ap_extract.add_argument("--outdir", default=".", help="Output directory")
    ap_extract.add_argument("--index", type=int, help="Only extract this block (0-based)")
    ap_extract.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "list":
            success = cmd_list(args.paths, as_json=args.json, verbose=args.verbose)
        elif args.cmd == "verify":
            success = cmd_verify(args.paths, verbose=args.verbose)
        else:
            success = cmd_extract(args.path, outdir=args.outdir, index=args.index, quiet=args.quiet)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
