"""Per-root pipeline: load -> build model -> render."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List

from .collect import collect_modules
from .deps import walk_dependencies
from .discovery import find_package_roots
from .errors import NoPackagesFound
from .loader import load_compiled_package, load_package_graph
from .render import PLAIN, Palette, render_dependency_tree, render_package_tree


logger = logging.getLogger(__name__)

VIEWS = ("modules", "deps")


def render_modules_view(scan_root: str, package_root: str, palette: Palette = PLAIN) -> str:
	compiled = load_compiled_package(package_root)
	modules = collect_modules(compiled)
	lines = render_package_tree(compiled.package_name, modules, scan_root, package_root, palette)
	return "\n".join(lines)


def render_deps_view(scan_root: str, package_root: str, palette: Palette = PLAIN) -> str:
	graph = load_package_graph(package_root)
	root = graph.root_node()
	lines = render_dependency_tree(root.display_name, walk_dependencies(root), scan_root, package_root, palette)
	return "\n".join(lines)


def _view_renderer(view: str) -> Callable[[str, str, Palette], str]:
	if view == "modules":
		return render_modules_view
	if view == "deps":
		return render_deps_view
	raise ValueError(f"unknown view: {view!r}")


def iter_rendered_roots(scan_root: str, view: str, palette: Palette = PLAIN, jobs: int = 1) -> Iterator[str]:
	"""Yield the rendered text of every package root, in discovery order.

	With ``jobs > 1`` roots are loaded concurrently but results are still
	yielded in order; an error surfaces when its root is reached.
	"""
	renderer = _view_renderer(view)
	roots = find_package_roots(scan_root)
	if not roots:
		raise NoPackagesFound(scan_root)

	if jobs <= 1 or len(roots) == 1:
		for root in roots:
			yield renderer(scan_root, root, palette)
		return

	logger.info("rendering %d package roots with %d workers", len(roots), jobs)
	with ThreadPoolExecutor(max_workers=jobs) as executor:
		yield from executor.map(lambda root: renderer(scan_root, root, palette), roots)


def render_roots(scan_root: str, view: str, palette: Palette = PLAIN, jobs: int = 1) -> str:
	"""Render every package root, separated by a blank line."""
	blocks: List[str] = list(iter_rendered_roots(scan_root, view, palette, jobs))
	return "\n\n".join(blocks)
