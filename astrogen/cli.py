"""astrogen command line.

Usage::

    python -m astrogen.cli classify "FAQ をアコーディオンで"
    python -m astrogen.cli wire tab --root ./site
    python -m astrogen.cli patch request.json --root ./site
    python -m astrogen.cli section about faq --prompt "faq accordion"
    python -m astrogen.cli page about page.json --section faq
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from astrogen.config import Config
from astrogen.editors import PatchRequest, UIPattern
from astrogen.intent import parse_section_intent
from astrogen.report import PatchReport, PatchStatus, print_report
from astrogen.scaffolder import PageData, SectionOptions
from astrogen.utils import (
    load_json,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)
from astrogen.workflow import ProjectPatcher, ScaffoldError

_PATTERN_CHOICES = [pattern.value for pattern in UIPattern]


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------


def _cmd_classify(args: argparse.Namespace, config: Config) -> int:
    intent = parse_section_intent(args.prompt)
    print_summary_table(
        {
            "Content type": intent.content_type,
            "UI pattern": intent.ui_pattern.value,
            "Confidence": f"{intent.confidence:.2f}",
        },
        title="Section intent",
    )
    return 0


def _cmd_wire(args: argparse.Namespace, config: Config) -> int:
    report = PatchReport()
    report.add(ProjectPatcher(config).wire_ui_pattern(args.pattern))
    return _finish(report)


def _cmd_patch(args: argparse.Namespace, config: Config) -> int:
    request = PatchRequest.model_validate(load_json(args.request))
    return _finish(ProjectPatcher(config).apply(request))


def _cmd_section(args: argparse.Namespace, config: Config) -> int:
    options = SectionOptions(
        columns=args.columns,
        gap=args.gap,
        autoplay=args.autoplay,
        open_first=not args.closed,
        has_image=not args.no_image,
    )
    result = asyncio.run(
        ProjectPatcher(config).scaffold_section(
            args.page,
            args.name,
            pattern=args.pattern,
            prompt=args.prompt,
            options=options,
            components=args.component or [],
        )
    )
    summary = {"Section": result.path, "UI pattern": result.pattern.value}
    if result.intent is not None:
        summary["Content type"] = result.intent.content_type
        summary["Confidence"] = f"{result.intent.confidence:.2f}"
    print_summary_table(summary, title="Section")
    return _finish(result.report)


def _cmd_page(args: argparse.Namespace, config: Config) -> int:
    data = PageData.model_validate(load_json(args.data))
    result = asyncio.run(
        ProjectPatcher(config).scaffold_page(
            args.page, data, sections=args.section or [], prompt=args.prompt
        )
    )
    print_summary_table(
        {
            "Page": result.path,
            "Page type": result.intent.page_type.value,
            "Confidence": f"{result.intent.confidence:.2f}",
            "Sections": ", ".join(result.sections) or "-",
        },
        title="Page",
    )
    for name in result.missing_sections:
        print_warning(
            f"Warning: section '{name}' not found at "
            f"{config.section_path(result.page, name)}"
        )
    print_success("Page written.")
    return 0


def _finish(report: PatchReport) -> int:
    """Print the report.  Missing targets are warnings, not failures."""
    print_report(report)
    for outcome in report.outcomes:
        if outcome.status == PatchStatus.MISSING:
            print_warning(f"Warning: {outcome.target} not found at {outcome.path}")
    if report.changed:
        print_success("Project files updated.")
    else:
        print_info("Nothing to change.")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="astrogen",
        description="astrogen -- Astro section scaffolder and project file patcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  astrogen classify \"show the FAQ as an accordion\"\n"
            "  astrogen wire modal --root ./site\n"
            "  astrogen patch request.json\n"
            "  astrogen section top news --pattern list\n"
            "  astrogen page about page.json --section faq --section news\n"
        ),
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Project root (default: $ASTROGEN_ROOT or the current directory)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    classify = sub.add_parser("classify", help="Classify a section request")
    classify.add_argument("prompt", help="Natural-language section description")
    classify.set_defaults(handler=_cmd_classify)

    wire = sub.add_parser("wire", help="Register the scripts a UI pattern needs in app.js")
    wire.add_argument("pattern", choices=_PATTERN_CHOICES)
    wire.set_defaults(handler=_cmd_wire)

    patch = sub.add_parser("patch", help="Apply a JSON change request to the project files")
    patch.add_argument("request", help="Path to the request JSON file")
    patch.set_defaults(handler=_cmd_patch)

    section = sub.add_parser("section", help="Scaffold a section and wire its scripts")
    section.add_argument("page", help="Page the section belongs to, e.g. 'about'")
    section.add_argument("name", help="Section name, e.g. 'faq'")
    source = section.add_mutually_exclusive_group(required=True)
    source.add_argument("--pattern", choices=_PATTERN_CHOICES)
    source.add_argument("--prompt", help="Natural-language description to classify")
    section.add_argument("--component", action="append", help="Child component (repeatable)")
    section.add_argument("--columns", type=int, default=3, help="Grid columns (default: 3)")
    section.add_argument("--gap", default="2.4rem", help="Grid gap (default: 2.4rem)")
    section.add_argument("--autoplay", action="store_true", help="Carousel autoplay")
    section.add_argument("--closed", action="store_true", help="Keep every accordion item closed")
    section.add_argument("--no-image", action="store_true", help="Omit the grid image slot")
    section.set_defaults(handler=_cmd_section)

    page = sub.add_parser("page", help="Scaffold a page that places generated sections")
    page.add_argument("page", help="Page name, e.g. 'about'")
    page.add_argument("data", help="Path to the page data JSON (head, breadcrumbs, contents)")
    page.add_argument(
        "--section", action="append", help="Section to place, in order (repeatable)"
    )
    page.add_argument("--prompt", help="Natural-language description of the page")
    page.set_defaults(handler=_cmd_page)

    return parser


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m astrogen.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config.from_env()
    if args.root:
        config.project_root = Path(args.root)

    try:
        return args.handler(args, config)
    except ValidationError as exc:
        print_error(f"Error: invalid request\n{exc}")
    except json.JSONDecodeError as exc:
        print_error(f"Error: request is not valid JSON: {exc}")
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
    except OSError as exc:
        print_error(f"Error: {exc}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
