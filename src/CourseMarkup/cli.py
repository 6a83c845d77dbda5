from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from . import alert_markdown, content_parser, course_parser
from .tables import load_registry
from .utils import configure_logging, read_text, resolve_output_path, write_text

OUTPUT_SUFFIXES = {
    "article": ".html",
    "course": ".json",
    "preparse": ".html",
    "postserialize": ".md",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-markup",
        description="Render the institute's article and course markup to HTML, and convert alert blocks for the editor.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    article = subparsers.add_parser("article", help="Render an article to HTML")
    course = subparsers.add_parser("course", help="Render course content to a JSON list of HTML and quiz items")
    course.add_argument("--schemas", type=str, help="YAML file with table schemas")
    preparse = subparsers.add_parser("preparse", help="Convert alert blocks to editor HTML")
    postserialize = subparsers.add_parser("postserialize", help="Convert editor HTML back to markup")

    for sub in (article, course, preparse, postserialize):
        sub.add_argument("input", type=str, help="Path to the input file")
        sub.add_argument("-o", "--output", type=str, help="Output path")
        sub.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def convert(command: str, text: str, schemas: str | None = None) -> str:
    if command == "article":
        return content_parser.format_article_content_to_html(text)
    if command == "course":
        registry = load_registry(schemas) if schemas else None
        items = course_parser.format_course_detailed_content_to_html(text, registry=registry)
        logging.info("Produced %d content items", len(items))
        return json.dumps([item.to_dict() for item in items], ensure_ascii=False, indent=2)
    if command == "preparse":
        return alert_markdown.preparse_alert_blocks(text)
    if command == "postserialize":
        return alert_markdown.postserialize_alert_blocks(text)
    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    output_path = resolve_output_path(input_path, args.output, OUTPUT_SUFFIXES[args.command])

    logging.info("Reading %s", input_path)
    text = read_text(input_path)
    logging.debug("Input length: %d chars", len(text))

    logging.info("Running %s...", args.command)
    result = convert(args.command, text, schemas=getattr(args, "schemas", None))

    write_text(output_path, result)
    logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
