"""Encode a string and save the module matrix (plus an optional preview)."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .. import config
from ..symbol.encode import QRSymbol, encode


def save_preview(symbol: QRSymbol, path: Path, quiet_zone: int = 4) -> None:
    padded = np.pad(symbol.matrix, quiet_zone, constant_values=False)
    plt.figure(figsize=(4, 4))
    plt.imshow(~padded, cmap="gray", interpolation="nearest")
    plt.axis("off")
    plt.title(f"v{symbol.version}-{symbol.ec_level.name} mask {symbol.mask}")
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close()


def run(args: argparse.Namespace) -> QRSymbol:
    cfg = config.get_config()
    cfg.mask_workers = args.workers
    symbol = encode(args.text, args.level, cfg)

    print(
        f"Encoded {len(args.text.encode('utf-8'))} bytes -> version {symbol.version}-{symbol.ec_level.name}, "
        f"{symbol.size}x{symbol.size} modules, mask {symbol.mask}, dark ratio {symbol.dark_ratio():.3f}"
    )

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    np.save(out_path, symbol.matrix)
    print(f"Saved matrix to {out_path}")

    if args.preview:
        preview_path = Path(args.preview)
        preview_path.parent.mkdir(parents=True, exist_ok=True)
        save_preview(symbol, preview_path)
        print(f"Saved preview to {preview_path}")
    return symbol


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encode text into a QR module matrix")
    parser.add_argument("text", help="Payload text (UTF-8 encoded)")
    parser.add_argument("--level", choices=["L", "M", "Q", "H"], default=config.DEFAULTS.ec_level)
    parser.add_argument("--out", default="results/symbol.npy", help="Output .npy path")
    parser.add_argument("--preview", help="Optional PNG preview path")
    parser.add_argument("--workers", type=int, default=1, help="Threads for mask trials")
    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_argparser()
    args = parser.parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
