"""Command line interface for the quad preview."""

import argparse
import sys
from pathlib import Path

import matplotlib

# Must be set before any pyplot import for headless environments.
matplotlib.use("Agg", force=True)

from .config import DEFAULT_PHYSICAL_ASPECT, DEFAULT_SAVE_SLICES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render axial/sagittal/coronal center slices of a NIfTI volume")

    parser.add_argument("input", type=Path, help="Volume file (.nii, .nii.gz, .nrrd, .mha, ...)")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Explicit quad PNG path")
    parser.add_argument("--out-dir", type=Path, help="Output directory (file auto-named as *_quad.png)")

    parser.add_argument("--index-x", type=int, default=None, help="Sagittal slice index (default: center)")
    parser.add_argument("--index-y", type=int, default=None, help="Coronal slice index (default: center)")
    parser.add_argument("--index-z", type=int, default=None, help="Axial slice index (default: center)")

    parser.add_argument("--save-slices", action="store_true", default=DEFAULT_SAVE_SLICES, help="Also write one PNG per slice")
    parser.add_argument(
        "--no-physical-aspect",
        action="store_false",
        dest="physical_aspect",
        default=DEFAULT_PHYSICAL_ASPECT,
        help="Keep slice PNGs one pixel per voxel instead of resizing to voxel spacing",
    )
    parser.add_argument("--quiet", action="store_true", help="Less console output")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    from .preview import run_preview

    indices = {"x": args.index_x, "y": args.index_y, "z": args.index_z}

    try:
        run_preview(
            input_path=args.input,
            output_path=args.output,
            out_dir=args.out_dir,
            indices=indices,
            save_slices=args.save_slices,
            physical_aspect=args.physical_aspect,
            verbose=not args.quiet,
        )
    except SystemExit:
        raise
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        if not args.quiet:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
