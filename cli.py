from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from movetree.config import Settings
from movetree.errors import ConfigurationError, MoveTreeError
from movetree.pipeline import iter_rendered_roots
from movetree.render import get_palette


def _configure_logging(verbose: bool) -> None:
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
		stream=sys.stderr,
	)


def _render(args: argparse.Namespace, view: str) -> None:
	try:
		settings = Settings.from_env(
			color=False if args.no_color else None,
			jobs=args.jobs,
			verbose=args.verbose or None,
		)
	except ValidationError as e:
		fields = ", ".join(str(err["loc"][0]) for err in e.errors())
		raise ConfigurationError(f"Invalid settings: {fields} (check MOVE_TREE_JOBS)") from e
	_configure_logging(settings.verbose)
	palette = get_palette(settings.color)
	for index, text in enumerate(iter_rendered_roots(args.path, view, palette, settings.jobs)):
		if index:
			print()
		print(text)


def cmd_modules(args: argparse.Namespace) -> None:
	_render(args, "modules")


def cmd_deps(args: argparse.Namespace) -> None:
	_render(args, "deps")


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def _positive_int(value: str) -> int:
	jobs = int(value)
	if jobs < 1:
		raise argparse.ArgumentTypeError("must be at least 1")
	return jobs


def _add_render_arguments(parser: argparse.ArgumentParser) -> None:
	parser.add_argument("path", help="Path to a Move package directory (or a folder containing Move packages)")
	parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
	parser.add_argument("--jobs", type=_positive_int, default=None, help="Load up to N packages concurrently")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="move-tree")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pm = sub.add_parser("modules", help="Render modules and public function signatures")
	_add_render_arguments(pm)
	pm.set_defaults(func=cmd_modules)

	pd = sub.add_parser("deps", help="Render the resolved dependency graph")
	_add_render_arguments(pd)
	pd.set_defaults(func=cmd_deps)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	return parser


def main(argv=None) -> None:
	args = build_parser().parse_args(argv)
	try:
		args.func(args)
	except MoveTreeError as e:
		print(f"Error: {e}", file=sys.stderr)
		sys.exit(1)


if __name__ == "__main__":
	main()
