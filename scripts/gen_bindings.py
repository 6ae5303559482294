#!/usr/bin/env python3
"""
gen_bindings.py - tesseract binding generator entry point

Locates tesseract, then writes capi_bindings.py and public_types_bindings.py
to the build output directory.

Usage:
    python scripts/gen_bindings.py [--out-dir DIR] [--discovery {bundled,system}]
                                   [--root DIR] [--platform NAME]
"""

import argparse
import os
import sys

from tess_bindgen import (
    BindgenError, BundledStrategy, Generator, Platform, Toolchain, system_strategy,
)
from bindings import tesseract


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate tesseract bindings')
    parser.add_argument('--out-dir', default=os.environ.get('OUT_DIR'),
                        help='Build output directory (default: $OUT_DIR)')
    parser.add_argument('--discovery', choices=['bundled', 'system'], default='bundled',
                        help='Use the bundled copy or the platform install (default: bundled)')
    parser.add_argument('--root', default=os.getcwd(),
                        help='Project root holding resources/libs/ (default: cwd)')
    parser.add_argument('--platform', default=None,
                        help='Override the detected platform (e.g. linux, darwin, win32)')
    args = parser.parse_args(argv)
    if not args.out_dir:
        parser.error('no output directory: pass --out-dir or set OUT_DIR')
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    platform = Platform.detect(args.platform)

    gen = Generator(out_dir=args.out_dir, platform=platform, toolchain=Toolchain())

    # Apply tesseract-specific configuration
    tesseract.configure(gen)

    if args.discovery == 'bundled':
        strategy = BundledStrategy(root=args.root)
    else:
        strategy = system_strategy(platform)

    try:
        gen.generate_all(strategy)
    except BindgenError as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
