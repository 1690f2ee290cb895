#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/cli.py
"""Command line interface for fieldtoc.

Reads a JSON or YAML content document (see :mod:`fieldtoc.host.memory`),
generates its table of contents and writes it as JSON, as rendered HTML, or
as the page markup with every field patch applied.

Examples
--------
    $ fieldtoc article.yaml --format html --relative --title "On this page"
    $ fieldtoc article.json --heading-field node:article:field_title --format patched

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from fieldtoc import __version__
from fieldtoc.config import load_config_with_priority, merge_configs, options_from_config
from fieldtoc.constants import HTML_PARSERS, MAX_HEADING_TAG_LEVEL, MIN_HEADING_TAG_LEVEL
from fieldtoc.exceptions import DependencyError, FieldTocError, UnsupportedEntityError, ValidationError
from fieldtoc.formatter import render_toc_field
from fieldtoc.host.memory import MemoryEntity, MemoryHost, entity_from_file
from fieldtoc.logging_utils import configure_logging
from fieldtoc.options.render import TocRendererOptions
from fieldtoc.renderers.html import HtmlTocRenderer
from fieldtoc.renderers.json import toc_to_json
from fieldtoc.toc.generator import TableOfContentsGenerator
from fieldtoc.toc.table import TableOfContents
from fieldtoc.toc.walker import EntityWalker, FieldKind

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_UNSUPPORTED_ENTITY_ERROR = 5


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, DependencyError):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, UnsupportedEntityError):
        return EXIT_UNSUPPORTED_ENTITY_ERROR
    return EXIT_ERROR


def _heading_level(value: str) -> int:
    try:
        level = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid heading level: {value}") from e
    if not MIN_HEADING_TAG_LEVEL <= level <= MAX_HEADING_TAG_LEVEL:
        raise argparse.ArgumentTypeError(
            f"Heading level must be between {MIN_HEADING_TAG_LEVEL} and {MAX_HEADING_TAG_LEVEL}, got {level}"
        )
    return level


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fieldtoc",
        description="Generate a table of contents from the fields of a content document.",
    )
    parser.add_argument("input", help="Content document (.json, .yaml or .yml)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")
    config_group.add_argument(
        "--no-config", action="store_true", help="Ignore FIELDTOC_CONFIG and auto-discovered configuration files"
    )

    gen_group = parser.add_argument_group("generation")
    gen_group.add_argument("--relative", action="store_true", default=None, help="Emit fragment-only links")
    gen_group.add_argument(
        "--field-type",
        action="append",
        dest="field_types",
        metavar="TYPE",
        help="Field type whose HTML is scanned for headings (repeatable)",
    )
    gen_group.add_argument(
        "--heading-field",
        action="append",
        dest="heading_fields",
        metavar="TYPE:BUNDLE:FIELD",
        help="Field whose value is itself a top-level heading (repeatable)",
    )
    gen_group.add_argument(
        "--no-recurse", action="store_true", default=None, help="Do not descend into referenced sub-entities"
    )
    gen_group.add_argument(
        "--max-heading-level", type=_heading_level, metavar="N", help="Deepest heading tag scanned (2-6)"
    )
    gen_group.add_argument("--parser", choices=list(HTML_PARSERS), help="BeautifulSoup parser to use")

    out_group = parser.add_argument_group("output")
    out_group.add_argument(
        "--format",
        choices=["json", "html", "patched"],
        default="json",
        help="json: tree and patch summary; html: rendered table of contents; patched: page markup with patches",
    )
    out_group.add_argument("--title", help="Title rendered above the table of contents")
    out_group.add_argument("--list-tag", choices=["ul", "ol"], help="List element of the rendered table of contents")
    out_group.add_argument("-o", "--output", help="Write output to this file instead of stdout")

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    log_group.add_argument("--log-file", help="Also write log messages to this file")
    log_group.add_argument("--trace", action="store_true", help="Verbose log format with timestamps")

    return parser


def cli_overrides(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    """Turn command line flags into a configuration dictionary."""
    settings: Dict[str, Any] = {}
    renderer: Dict[str, Any] = {}

    if parsed_args.relative:
        settings["is_relative"] = True
    if parsed_args.field_types:
        settings["scannable_field_types"] = parsed_args.field_types
    if parsed_args.heading_fields:
        settings["heading_fields"] = parsed_args.heading_fields
    if parsed_args.no_recurse:
        settings["recurse_into_sub_entities"] = False
    if parsed_args.max_heading_level is not None:
        settings["max_heading_level"] = parsed_args.max_heading_level
    if parsed_args.parser:
        settings["html_parser"] = parsed_args.parser

    if parsed_args.title is not None:
        renderer["title"] = parsed_args.title
    if parsed_args.list_tag:
        renderer["list_tag"] = parsed_args.list_tag

    overrides: Dict[str, Any] = {}
    if settings:
        overrides["settings"] = settings
    if renderer:
        overrides["renderer"] = renderer
    return overrides


def render_patched_page(
    generator: TableOfContentsGenerator,
    entity: MemoryEntity,
    toc: TableOfContents,
    renderer_options: TocRendererOptions,
    root: Optional[MemoryEntity] = None,
) -> str:
    """Render ``entity`` as page markup with the ToC patches applied.

    Fields are emitted in display order. Fields the walker treats as
    sub-entities are rendered in place; any other reference renders as its
    own slot markup. ToC fields are rendered through :func:`render_toc_field`
    with the top-level entity ``root`` as their parent.
    """
    root = root if root is not None else entity
    host = generator.host
    assert isinstance(host, MemoryHost)
    walker = EntityWalker(host, toc.settings)

    render_output = host.build_render_output(entity, toc.settings.view_mode)
    toc.apply_patches(render_output, entity)
    content = render_output["content"]

    parts: list[str] = []
    entity_type, bundle = host.entity_type(entity), host.bundle(entity)
    for item in walker.ordered_items(entity):
        classified = walker.classify(entity_type, bundle, item)
        if classified.kind is FieldKind.TOC_FIELD:
            markup = render_toc_field(generator, root, item.value, toc.settings, renderer_options)
            if markup:
                parts.append(markup)
            continue

        if classified.kind is FieldKind.SUB_ENTITY:
            parts.append(render_patched_page(generator, classified.sub_entity, toc, renderer_options, root))
            continue

        slot = content[item.name][item.delta]
        if slot.get("hidden") or not slot.get("markup"):
            continue
        parts.append(slot["markup"])

    return "\n".join(part.rstrip("\n") for part in parts if part)


def _write_output(text: str, output: Optional[str]) -> None:
    if not text.endswith("\n"):
        text += "\n"
    if output:
        Path(output).write_text(text, encoding="utf-8")
        logger.info("Wrote output to %s", output)
    else:
        sys.stdout.write(text)


def main(args: list[str] | None = None) -> int:
    """Run the command line interface and return the exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    input_path = Path(parsed_args.input)
    if not input_path.is_file():
        print(f"Error: Input file does not exist: {input_path}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        config: Dict[str, Any] = {}
        if not parsed_args.no_config:
            config = load_config_with_priority(parsed_args.config)
        config = merge_configs(config, cli_overrides(parsed_args))
        settings, renderer_options = options_from_config(config)

        entity = entity_from_file(input_path)
        generator = TableOfContentsGenerator(MemoryHost([entity]))
        toc = generator.generate(entity, settings)

        if parsed_args.format == "json":
            text = toc_to_json(toc)
        elif parsed_args.format == "html":
            text = HtmlTocRenderer(renderer_options).render_to_string(toc)
        else:
            text = render_patched_page(generator, entity, toc, renderer_options)

        _write_output(text, parsed_args.output)
    except (FieldTocError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
