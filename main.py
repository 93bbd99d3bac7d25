"""
Screenplay Parser - CLI Interface

Rebuild scenes, characters and statistics from a screenplay
PDF, Fountain or Final Draft file.

Usage:
    python main.py input.pdf [--pages N] [--strict-cues] [--preview] [-o OUTPUT_DIR]
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from config import ParserConfig
from errors import NoScenesFoundError, ScriptParseError
from extractor import extract_script_text
from script_parser import parse_script, result_to_dict, write_summary


def _load_props(path: str) -> tuple[str, ...]:
    """One prop keyword per line; blank lines and # comments ignored."""
    words = []
    for line in Path(path).read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if line and not line.startswith('#'):
            words.append(line)
    return tuple(words)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Parse screenplays into scenes and characters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py script.pdf                    # Parse with defaults
    python main.py script.pdf --preview          # Print summary, write nothing
    python main.py script.fountain --pages 110   # Override the page count
    python main.py script.pdf --strict-cues      # Require dialogue after cues
    python main.py script.pdf -o parsed/         # Custom output directory
        """
    )
    parser.add_argument(
        "input",
        help="Input script (.pdf, .fountain, .txt or .fdx)"
    )
    parser.add_argument(
        "-o", "--output-dir",
        help="Output directory (default: <input>_parsed/)"
    )
    parser.add_argument(
        "--pages",
        type=int,
        help="Declared page count (default: from the file)"
    )
    parser.add_argument(
        "--preserve-whitespace",
        action="store_true",
        help="Keep tabs and original spacing in page and scene text"
    )
    parser.add_argument(
        "--strict-cues",
        action="store_true",
        help="Only accept character cues followed by dialogue-like text"
    )
    parser.add_argument(
        "--props",
        help="File with one prop keyword per line (replaces the default list)"
    )
    parser.add_argument(
        "--include-lines",
        action="store_true",
        help="Include each scene's classified lines in the JSON output"
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the summary without creating files"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed output"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate input file
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {args.input}")
        return 1

    # Determine output directory
    if args.output_dir:
        output_dir = args.output_dir
    else:
        output_dir = str(input_path.parent / f"{input_path.stem}_parsed")

    options = {
        "preserve_whitespace": args.preserve_whitespace,
        "cue_confirmation": "strict" if args.strict_cues else "permissive",
    }
    if args.props:
        options["prop_keywords"] = _load_props(args.props)
    config = ParserConfig(**options)

    print(f"\nProcessing: {input_path.name}")

    exit_code = 0
    with tqdm(total=2, desc="Progress", disable=not sys.stdout.isatty()) as pbar:
        pbar.set_description("Extracting text")
        try:
            text, page_count = extract_script_text(str(input_path))
        except ScriptParseError as e:
            print(f"Error: {e}")
            return 1
        pbar.update(1)

        pbar.set_description("Parsing scenes")
        try:
            result = parse_script(text, args.pages if args.pages is not None else page_count, config)
        except NoScenesFoundError as e:
            result = e.result
            exit_code = 2
        except ScriptParseError as e:
            print(f"Error: {e}")
            return 1
        pbar.update(1)

    meta = result.metadata

    # Show warnings
    if meta.warnings and args.verbose:
        print("\nWarnings:")
        for w in meta.warnings:
            print(f"  - {w}")

    # Summary
    print(f"\n{'='*50}")
    print(f"Pages: {meta.total_pages} ({meta.page_strategy})")
    print(f"Scenes detected: {meta.scenes}")
    print(f"Characters: {meta.characters}")
    print(f"Dialogue blocks: {meta.total_dialogue}")
    print(f"Confidence: {meta.confidence}")
    if meta.needs_review:
        print("(Needs manual review)")
    print(f"{'='*50}")

    if args.preview:
        print("\nPreview - Scenes:")
        for scene in result.scenes[:10]:
            heading_preview = scene.heading[:55] + "..." if len(scene.heading) > 55 else scene.heading
            print(f"  {scene.scene_number:>3}. {heading_preview} (page {scene.page_number})")
        if len(result.scenes) > 10:
            print(f"  ... and {len(result.scenes) - 10} more scenes")
        print(f"\nTo create files, run without --preview flag")
        return exit_code

    Path(output_dir).mkdir(parents=True, exist_ok=True)
    json_path = Path(output_dir) / "parse_result.json"
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(result_to_dict(result, include_lines=args.include_lines), f, ensure_ascii=False, indent=2)
    summary_path = write_summary(result, output_dir, str(input_path))

    print(f"\nResult:  {json_path}")
    print(f"Summary: {summary_path}")
    print("\nDone!")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
