from __future__ import annotations

from typing import List, Set

from .model import DependencyLine, PackageNode


NO_DEPENDENCIES = "(no dependencies)"


def walk_dependencies(root: PackageNode) -> List[DependencyLine]:
	"""Flatten the dependency graph below ``root`` in depth-first order.

	A package is expanded only at its first occurrence; every later edge to
	it, including back edges of a cycle, is emitted as a shared leaf.
	"""
	if not root.direct_deps:
		return [DependencyLine(depth=0, is_last=True, name=NO_DEPENDENCIES, placeholder=True)]

	lines: List[DependencyLine] = []
	visited: Set[str] = {root.id}
	_walk(root, 0, visited, lines)
	return lines


def _walk(node: PackageNode, depth: int, visited: Set[str], lines: List[DependencyLine]) -> None:
	deps = sorted(node.direct_deps.items(), key=lambda item: (item[0], item[1].id))
	for index, (_, dep) in enumerate(deps):
		already_seen = dep.id in visited
		if not already_seen:
			visited.add(dep.id)
		lines.append(_line_for(dep, depth, index == len(deps) - 1, already_seen))
		if not already_seen:
			_walk(dep, depth + 1, visited, lines)


def _line_for(dep: PackageNode, depth: int, is_last: bool, shared: bool) -> DependencyLine:
	registry_name = dep.registry_name
	if registry_name == dep.display_name:
		registry_name = None
	package_id = dep.id if dep.id != dep.display_name else None
	return DependencyLine(
		depth=depth,
		is_last=is_last,
		name=dep.display_name,
		registry_name=registry_name,
		package_id=package_id,
		shared=shared,
	)
