"""Sweep random payloads and record per-mask penalties and selections."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .. import config
from ..utils.seeding import seed_all
from ..symbol.capacity import byte_capacity
from ..symbol.encode import encode
from ..symbol.masking import NUM_MASKS


def run_sweep(args: argparse.Namespace) -> List[Dict[str, float]]:
    cfg = config.get_config()
    cfg.max_version = args.max_version
    seed_all(args.seed)

    max_len = byte_capacity(args.max_version, args.level)
    lengths = [n for n in range(args.len_lo, args.len_hi + 1, max(args.len_step, 1)) if n <= max_len]

    results: List[Dict[str, float]] = []
    for length in lengths:
        rng = np.random.default_rng(args.seed + length)
        selections = np.zeros(NUM_MASKS, dtype=np.int64)
        penalty_sum = np.zeros(NUM_MASKS, dtype=np.float64)
        dark_sum = 0.0
        versions = set()

        for _ in range(args.samples):
            payload = rng.integers(0, 256, size=length, dtype=np.uint8).tobytes()
            symbol = encode(payload, args.level, cfg)
            selections[symbol.mask] += 1
            penalty_sum += np.asarray(symbol.penalties, dtype=np.float64)
            dark_sum += symbol.dark_ratio()
            versions.add(symbol.version)

        row: Dict[str, float] = {
            "length": length,
            "version": max(versions),
            "dark_ratio": dark_sum / args.samples,
        }
        for mask in range(NUM_MASKS):
            row[f"penalty_{mask}"] = penalty_sum[mask] / args.samples
            row[f"selected_{mask}"] = int(selections[mask])
        results.append(row)
        print(
            f"len={length:4d} v{row['version']} -> most selected mask {int(selections.argmax())}, "
            f"mean dark ratio {row['dark_ratio']:.3f}"
        )

    output_dir = Path(args.out_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"mask_sweep_{args.level}.csv"
    headers = ["length", "version", "dark_ratio"]
    headers.extend(f"penalty_{m}" for m in range(NUM_MASKS))
    headers.extend(f"selected_{m}" for m in range(NUM_MASKS))
    with csv_path.open("w") as f:
        f.write(",".join(headers) + "\n")
        for row in results:
            values = [str(row["length"]), str(row["version"]), f"{row['dark_ratio']:.6f}"]
            values.extend(f"{row[f'penalty_{m}']:.3f}" for m in range(NUM_MASKS))
            values.extend(str(row[f"selected_{m}"]) for m in range(NUM_MASKS))
            f.write(",".join(values) + "\n")
    print(f"Saved mask sweep table to {csv_path}")

    plot_dir = Path(args.plot_dir)
    plot_dir.mkdir(parents=True, exist_ok=True)
    plot_path = plot_dir / f"mask_sweep_{args.level}.png"
    totals = [sum(row[f"selected_{m}"] for row in results) for m in range(NUM_MASKS)]
    plt.figure(figsize=(6, 4))
    plt.bar(range(NUM_MASKS), totals)
    plt.xlabel("Mask pattern")
    plt.ylabel("Times selected")
    plt.title(f"Mask selection, level {args.level}")
    plt.grid(True, axis="y", ls="--", alpha=0.4)
    plt.tight_layout()
    plt.savefig(plot_path, dpi=200)
    plt.close()
    print(f"Saved mask sweep plot to {plot_path}")

    return results


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sweep mask penalties over random payloads")
    parser.add_argument("--level", choices=["L", "M", "Q", "H"], default=config.DEFAULTS.ec_level)
    parser.add_argument("--samples", type=int, default=50, help="Payloads per length")
    parser.add_argument("--len_lo", type=int, default=1)
    parser.add_argument("--len_hi", type=int, default=200)
    parser.add_argument("--len_step", type=int, default=25)
    parser.add_argument("--max_version", type=int, default=config.DEFAULTS.max_version)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--out_dir", type=str, default="results")
    parser.add_argument("--plot_dir", type=str, default="plots")
    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_argparser()
    args = parser.parse_args(argv)
    run_sweep(args)


if __name__ == "__main__":
    main()
