"""Tabulate byte-mode capacity and block structure per version and level."""

from __future__ import annotations

import argparse
import csv
from pathlib import Path
from typing import List, Tuple

from ..symbol.capacity import (
    MAX_VERSION,
    ECLevel,
    byte_capacity,
    count_bits,
    rs_blocks,
    symbol_size,
)


def capacity_rows(max_version: int = MAX_VERSION) -> List[Tuple]:
    rows = []
    for version in range(1, max_version + 1):
        for level in (ECLevel.L, ECLevel.M, ECLevel.Q, ECLevel.H):
            blocks = rs_blocks(version, level)
            rows.append(
                (
                    version,
                    level.name,
                    symbol_size(version),
                    len(blocks),
                    sum(b.total_codewords for b in blocks),
                    sum(b.data_codewords for b in blocks),
                    blocks[0].ec_codewords,
                    count_bits(version),
                    byte_capacity(version, level),
                )
            )
    return rows


def run(args: argparse.Namespace) -> None:
    report_path = Path(args.report)
    report_path.parent.mkdir(parents=True, exist_ok=True)

    with report_path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(
            [
                "version",
                "level",
                "size",
                "blocks",
                "total_codewords",
                "data_codewords",
                "ec_per_block",
                "count_bits",
                "byte_capacity",
            ]
        )
        writer.writerows(capacity_rows(args.max_version))

    print(f"Saved capacity report to {report_path}")


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Report QR byte-mode capacities")
    parser.add_argument("--report", required=True, help="CSV output path")
    parser.add_argument("--max_version", type=int, default=MAX_VERSION)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_argparser()
    args = parser.parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
