import argparse
import json
import sys
from pathlib import Path

from .content import build_html_document, render


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Render tutor content (markdown, LaTeX math, pipe tables)")

    parser.add_argument("input", help="Path to a text/markdown file, or - for stdin")
    parser.add_argument("--output", "-o", help="Write here instead of stdout")
    parser.add_argument("--format", "-f", choices=["html", "text", "segments"], default="html", help="Output format (default: html)")
    parser.add_argument("--title", default="", help="Page title for html output")
    parser.add_argument("--plain", action="store_true", help="Show prose literally instead of as markdown")
    parser.add_argument("--normalize-math", action="store_true", help="Rewrite \\( \\) and \\[ \\] delimiters first")

    args = parser.parse_args(argv)

    try:
        content = _read_input(args.input)
    except OSError as e:
        print(f"Error: {e}")
        return 1

    if args.format == "html":
        title = args.title or ("" if args.input == "-" else Path(args.input).stem)
        result = build_html_document(
            title,
            content,
            markdown=not args.plain,
            normalize_math=args.normalize_math,
        )
    else:
        out = render(content, markdown=not args.plain, normalize_math=args.normalize_math)
        if args.format == "text":
            result = out.plain_text() + "\n"
        else:
            result = json.dumps([s.model_dump() for s in out.segments], ensure_ascii=False, indent=2) + "\n"

    if args.output:
        try:
            Path(args.output).write_text(result, encoding="utf-8")
        except OSError as e:
            print(f"Error: {e}")
            return 1
        print(f"Saved to {args.output}")
    else:
        sys.stdout.write(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
