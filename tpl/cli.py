from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from .config import load_settings, read_yaml_map
from .errors import TplUserError
from .expr import evaluate_expression
from .template import TemplateRenderer, format_value, tokenize_template
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tpl",
        description="Render templates with {{ expressions }} and {% control tags %}",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_context(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "-c", "--context",
            metavar="FILE",
            help="YAML or JSON file with the context mapping",
        )

    sp_render = sub.add_parser("render", help="render a template file")
    sp_render.add_argument("template", help="template file, or - to read stdin")
    add_context(sp_render)
    sp_render.add_argument("--config", metavar="FILE", help="YAML settings (max_depth, float_precision)")
    sp_render.add_argument("-o", "--output", metavar="FILE", help="write the result to FILE instead of stdout")

    sp_eval = sub.add_parser("eval", help="evaluate a single expression")
    sp_eval.add_argument("expression", help='expression, e.g. "user.age + 1"')
    add_context(sp_eval)
    sp_eval.add_argument("--config", metavar="FILE", help="YAML settings (float_precision)")

    sp_tokens = sub.add_parser("tokens", help="print template segments (JSON)")
    sp_tokens.add_argument("template", help="template file, or - to read stdin")

    return p


def _read_template(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    path = Path(arg)
    if not path.is_file():
        raise ValueError(f"Template file not found: {path}")
    return path.read_text(encoding="utf-8")


def _read_context(arg: Optional[str]) -> Dict[str, Any]:
    if not arg:
        return {}
    path = Path(arg)
    if not path.is_file():
        raise ValueError(f"Context file not found: {path}")
    return read_yaml_map(path)


def _segment_to_dict(segment) -> Dict[str, Any]:
    data = asdict(segment)
    data["kind"] = type(segment).__name__
    return data


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if ns.cmd == "render":
            settings = load_settings(Path(ns.config) if ns.config else None)
            renderer = TemplateRenderer(settings)
            text = renderer.render(_read_template(ns.template), _read_context(ns.context))
            if ns.output:
                Path(ns.output).write_text(text, encoding="utf-8")
            else:
                sys.stdout.write(text)
            return 0

        if ns.cmd == "eval":
            settings = load_settings(Path(ns.config) if ns.config else None)
            value = evaluate_expression(ns.expression, _read_context(ns.context))
            sys.stdout.write(format_value(value, settings.float_precision) + "\n")
            return 0

        if ns.cmd == "tokens":
            segments = tokenize_template(_read_template(ns.template))
            sys.stdout.write(json.dumps([_segment_to_dict(s) for s in segments], ensure_ascii=False, indent=2))
            sys.stdout.write("\n")
            return 0

    except TplUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
