#!/usr/bin/env python3
"""
Audit a local HTML file from the command line

Usage:
    python scripts/run_audit.py page.html [--url URL] [--format json|markdown] [--output PATH]
    cat page.html | python scripts/run_audit.py - --url https://example.com/

Exit codes:
    0  report written
    2  input could not be read
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from app.features.seo_audit.services.audit_engine import analyze_document
from app.features.seo_audit.utils.report_formatter import render_markdown


def read_markup(source: str) -> str:
    """Read markup from a file path, or stdin when source is "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a rule-based SEO audit on a local HTML document.")
    parser.add_argument("source", help="HTML file to audit, or - for stdin")
    parser.add_argument("--url", default="", help="URL the document is served from")
    parser.add_argument("--format", choices=["json", "markdown"], default="markdown")
    parser.add_argument("--output", help="Write the report here instead of stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        markup = read_markup(args.source)
    except OSError as exc:
        print(f"Error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 2

    result = analyze_document(markup, args.url)

    if args.format == "json":
        rendered = result.model_dump_json(by_alias=True, indent=2)
    else:
        rendered = render_markdown(result)

    if args.output:
        Path(args.output).write_text(rendered, encoding="utf-8")
        print(f"✅ Report written to {args.output} (score {result.overall_score}/100, grade {result.grade})")
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
