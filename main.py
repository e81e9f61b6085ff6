from __future__ import annotations
import logging
import os
import sys
from config import PathMode, RenderOptions
from errors import SVGRasterError
from renderer import Renderer

USAGE = """SVG rasterizer
Usage: python main.py <svg_file1> [svg_file2] ... [options]

Options:
  -v, --verbose            Print detailed information
  -o, --output PATH        Output file (one input) or directory
  -aa, --anti-aliasing     Enable anti-aliasing (disables stroke thickness)
  -p, --path-mode MODE     continuous (default) or discontinuous
  -b, --background RGBA    Background color as R,G,B[,A] (default: transparent)
  --skip-render            Only parse and validate

Examples:
  python main.py test.svg
  python main.py *.svg -o out/ -v
  python main.py icon.svg -p discontinuous -b 255,255,255"""


def process_svg_file(svg_path: str, output_path: str | None = None, verbose: bool = False,
                     options: RenderOptions | None = None, skip_render: bool = False) -> bool:
    if not os.path.exists(svg_path):
        print(f"Error: File not found: {svg_path}")
        return False

    if not svg_path.lower().endswith('.svg'):
        print(f"Warning: {svg_path} does not have .svg extension")

    options = options or RenderOptions()

    try:
        renderer = Renderer.from_file(svg_path, options)
        svg_state = renderer.svg_state

        if verbose:
            print(f"\nProcessing: {svg_path}")
            print(f"Canvas: {svg_state.width}x{svg_state.height}")
            print(f"ViewBox: {svg_state.viewbox}")
            print(f"Path mode: {options.path_mode.value}")
            svg_state.print_validation_report()

        if output_path is None:
            base_name = os.path.splitext(os.path.basename(svg_path))[0]
            output_path = f"{base_name}.png"

        if skip_render:
            print(f"[OK] Parsed: {svg_path} -> {output_path} (rendering skipped)")
            return True

        canvas = renderer.render()
        canvas.save(output_path)
        if verbose:
            print(f"[OK] Rendered and saved: {output_path}")
        else:
            print(f"[OK] {svg_path} -> {output_path}")
        return True

    except (SVGRasterError, OSError, UnicodeDecodeError) as e:
        print(f"Error processing {svg_path}: {e}")
        return False


def parse_background(value: str) -> tuple[int, int, int, int]:
    parts = [int(p.strip()) for p in value.split(',')]
    if len(parts) == 3:
        parts.append(255)
    if len(parts) != 4:
        raise ValueError(value)
    return tuple(max(0, min(255, p)) for p in parts)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    if len(args) == 0:
        print(USAGE)
        return 0

    verbose = False
    output_dir = None
    antialias = False
    path_mode = PathMode.CONTINUOUS
    background = (0, 0, 0, 0)
    skip_render = False
    svg_files = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ['-v', '--verbose']:
            verbose = True
        elif arg in ['-o', '--output']:
            if i + 1 >= len(args):
                print("Error: -o/--output requires a path argument")
                return 2
            output_dir = args[i + 1]
            i += 1
        elif arg in ['-aa', '--anti-aliasing']:
            if i + 1 < len(args) and not args[i + 1].lower().endswith('.svg') and not args[i + 1].startswith('-'):
                aa_value = args[i + 1].lower()
                if aa_value in ['true', '1', 'yes', 'on']:
                    antialias = True
                elif aa_value in ['false', '0', 'no', 'off']:
                    antialias = False
                else:
                    print("Error: -aa/--anti-aliasing requires true/false, 1/0, yes/no, or on/off")
                    return 2
                i += 1
            else:
                antialias = True
        elif arg in ['-p', '--path-mode']:
            if i + 1 >= len(args):
                print("Error: -p/--path-mode requires continuous or discontinuous")
                return 2
            try:
                path_mode = PathMode.parse(args[i + 1])
            except ValueError as e:
                print(f"Error: {e}")
                return 2
            i += 1
        elif arg in ['-b', '--background']:
            if i + 1 >= len(args):
                print("Error: -b/--background requires R,G,B[,A] values")
                return 2
            try:
                background = parse_background(args[i + 1])
            except ValueError:
                print("Error: Background must be R,G,B or R,G,B,A integers (e.g., 255,255,255)")
                return 2
            i += 1
        elif arg == '--skip-render':
            skip_render = True
        elif arg.startswith('-'):
            print(f"Unknown option: {arg}")
            return 2
        else:
            svg_files.append(arg)
        i += 1

    if len(svg_files) == 0:
        print("Error: No SVG files specified")
        return 2

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    options = RenderOptions(path_mode=path_mode, antialias=antialias, background=background)

    success_count = 0
    for svg_file in svg_files:
        output_path = None
        if output_dir:
            if os.path.isdir(output_dir):
                base_name = os.path.splitext(os.path.basename(svg_file))[0]
                output_path = os.path.join(output_dir, f"{base_name}.png")
            elif len(svg_files) == 1:
                output_path = output_dir
            else:
                print("Warning: -o with multiple files requires a directory, not a file")

        if process_svg_file(svg_file, output_path, verbose, options, skip_render):
            success_count += 1

    print(f"\nProcessed {success_count}/{len(svg_files)} file(s) successfully")
    return 0 if success_count == len(svg_files) else 1


if __name__ == "__main__":
    sys.exit(main())
