"""Box-drawing tree rendering for module and dependency views.

Colour is applied through a :class:`Palette`; branch markers and prefixes are
never styled, so removing ANSI codes from coloured output yields exactly the
plain output.
"""

from __future__ import annotations

import os
from typing import List, Optional, Sequence

from rich.color import ColorSystem
from rich.style import Style

from .model import DependencyLine, FunctionInfo, ModuleInfo


BRANCH = "├── "
LAST_BRANCH = "└── "
CONTINUATION = "│   "
LAST_CONTINUATION = "    "


class Palette:
	"""Plain text: every role renders unchanged."""

	def _apply(self, role: str, text: str) -> str:
		return text

	def package_label(self, text: str) -> str:
		return self._apply("package_label", text)

	def package_name(self, text: str) -> str:
		return self._apply("package_name", text)

	def path(self, text: str) -> str:
		return self._apply("path", text)

	def module_label(self, text: str) -> str:
		return self._apply("module_label", text)

	def module_name(self, text: str) -> str:
		return self._apply("module_name", text)

	def function_keyword(self, text: str) -> str:
		return self._apply("function_keyword", text)

	def function_name(self, text: str) -> str:
		return self._apply("function_name", text)

	def type_param(self, text: str) -> str:
		return self._apply("type_param", text)

	def param(self, text: str) -> str:
		return self._apply("param", text)

	def return_type(self, text: str) -> str:
		return self._apply("return_type", text)

	def dependency_name(self, text: str) -> str:
		return self._apply("dependency_name", text)

	def annotation(self, text: str) -> str:
		return self._apply("annotation", text)

	def shared(self, text: str) -> str:
		return self._apply("shared", text)


class AnsiPalette(Palette):
	STYLES = {
		"package_label": Style(color="blue", bold=True),
		"package_name": Style(bold=True),
		"path": Style(dim=True),
		"module_label": Style(color="cyan", bold=True),
		"module_name": Style(color="cyan"),
		"function_keyword": Style(color="bright_black"),
		"function_name": Style(color="green", bold=True),
		"type_param": Style(color="yellow"),
		"param": Style(color="yellow"),
		"return_type": Style(color="magenta"),
		"dependency_name": Style(color="green"),
		"annotation": Style(dim=True),
		"shared": Style(color="yellow", italic=True),
	}

	def __init__(self, color_system: ColorSystem = ColorSystem.STANDARD):
		self.color_system = color_system

	def _apply(self, role: str, text: str) -> str:
		return self.STYLES[role].render(text, color_system=self.color_system)


PLAIN = Palette()


def get_palette(color: bool) -> Palette:
	return AnsiPalette() if color else PLAIN


def branch(is_last: bool) -> str:
	return LAST_BRANCH if is_last else BRANCH


def continuation(is_last: bool) -> str:
	return LAST_CONTINUATION if is_last else CONTINUATION


def relative_location(scan_root: Optional[str], package_path: Optional[str]) -> Optional[str]:
	"""Path of the package below the scan root, or None when there is nothing to show."""
	if scan_root is None or package_path is None:
		return None
	root = os.path.abspath(scan_root)
	path = os.path.abspath(package_path)
	if path == root or os.path.commonpath([root, path]) != root:
		return None
	return os.path.relpath(path, root)


def render_header(
	label: str,
	package_name: str,
	scan_root: Optional[str] = None,
	package_path: Optional[str] = None,
	palette: Palette = PLAIN,
) -> str:
	line = f"{palette.package_label(label)} {palette.package_name(package_name)}"
	relative = relative_location(scan_root, package_path)
	if relative:
		line += " " + palette.path(f"({relative})")
	return line


def render_function(function: FunctionInfo, palette: Palette = PLAIN) -> str:
	type_params = ""
	if function.type_params:
		type_params = "<" + ", ".join(palette.type_param(t) for t in function.type_params) + ">"
	params = "(" + ", ".join(palette.param(p) for p in function.params) + ")"

	if not function.returns:
		returns = palette.return_type("()")
	else:
		returns = ", ".join(palette.return_type(r) for r in function.returns)
		if len(function.returns) > 1:
			returns = f"({returns})"

	return (
		f"{palette.function_keyword('fun')} {palette.function_name(function.name)}"
		f"{type_params}{params}: {returns}"
	)


def render_package_tree(
	package_name: str,
	modules: Sequence[ModuleInfo],
	scan_root: Optional[str] = None,
	package_path: Optional[str] = None,
	palette: Palette = PLAIN,
) -> List[str]:
	lines = [render_header("package", package_name, scan_root, package_path, palette)]
	for module_index, module in enumerate(modules):
		is_last_module = module_index == len(modules) - 1
		lines.append(
			branch(is_last_module)
			+ f"{palette.module_label('module')} {palette.module_name(module.name)}"
		)
		child_prefix = continuation(is_last_module)
		for func_index, function in enumerate(module.functions):
			is_last_function = func_index == len(module.functions) - 1
			lines.append(child_prefix + branch(is_last_function) + render_function(function, palette))
	return lines


def render_dependency_label(line: DependencyLine, palette: Palette = PLAIN) -> str:
	if line.placeholder:
		return palette.annotation(line.name)
	label = palette.dependency_name(line.name)
	if line.registry_name is not None:
		label += " " + palette.annotation(f"({line.registry_name})")
	if line.package_id is not None:
		label += " " + palette.annotation(f"[{line.package_id}]")
	if line.shared:
		label += " " + palette.shared("(shared)")
	return label


def render_dependency_lines(lines: Sequence[DependencyLine], palette: Palette = PLAIN) -> List[str]:
	"""Turn a depth-first walk into prefixed tree lines.

	``prefixes[d]`` holds the continuation contributed by the most recent
	line at depth ``d``; a line's prefix is the join of its ancestors' entries.
	"""
	rendered: List[str] = []
	prefixes: List[str] = []
	for line in lines:
		del prefixes[line.depth:]
		rendered.append("".join(prefixes) + branch(line.is_last) + render_dependency_label(line, palette))
		prefixes.append(continuation(line.is_last))
	return rendered


def render_dependency_tree(
	package_name: str,
	lines: Sequence[DependencyLine],
	scan_root: Optional[str] = None,
	package_path: Optional[str] = None,
	palette: Palette = PLAIN,
) -> List[str]:
	header = render_header("deps", package_name, scan_root, package_path, palette)
	return [header] + render_dependency_lines(lines, palette)
