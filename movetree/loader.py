"""Loading of externally built package artifacts.

The Move compiler and dependency resolver are not run here. An external build
step dumps, per environment, the compiled root modules and the resolved
dependency graph to ``build/<environment>/move-tree.json`` inside the package.
"""

from __future__ import annotations

import logging
import os
import tomllib
from typing import Callable, List, Optional, TypeVar

from pydantic import ValidationError

from .config import ARTIFACT_NAME, BUILD_DIR, DEFAULT_ENVIRONMENT, MANIFEST_NAME
from .errors import PackageLoadError
from .model import CompiledPackage, PackageArtifact, PackageGraph


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ArtifactError(Exception):
	"""An environment's artifact is missing, invalid or lacks the wanted part."""


def read_environments(package_root: str) -> List[str]:
	manifest = os.path.join(package_root, MANIFEST_NAME)
	try:
		with open(manifest, "rb") as fh:
			data = tomllib.load(fh)
	except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
		raise PackageLoadError(package_root, f"Failed to read environments: {e}") from e

	environments = data.get("environments")
	if environments is None:
		return [DEFAULT_ENVIRONMENT]
	if not isinstance(environments, dict):
		raise PackageLoadError(package_root, "`environments` in Move.toml must be a table")
	return list(environments)


def artifact_path(package_root: str, environment: str) -> str:
	return os.path.join(package_root, BUILD_DIR, environment, ARTIFACT_NAME)


def load_artifact(package_root: str, environment: str) -> PackageArtifact:
	path = artifact_path(package_root, environment)
	try:
		with open(path, "rb") as fh:
			data = fh.read()
	except OSError as e:
		raise ArtifactError(f"cannot read {path}: {e.strerror or e}") from e
	try:
		return PackageArtifact.model_validate_json(data)
	except ValidationError as e:
		raise ArtifactError(f"invalid artifact {path}: {e.error_count()} validation error(s)") from e
	except UnicodeDecodeError as e:
		raise ArtifactError(f"invalid artifact {path}: {e.reason}") from e


def _load_first(package_root: str, extract: Callable[[PackageArtifact], Optional[T]], what: str) -> T:
	environments = read_environments(package_root)
	last_error = None
	for environment in environments:
		try:
			value = extract(load_artifact(package_root, environment))
			if value is None:
				raise ArtifactError(f"artifact has no {what}")
		except ArtifactError as e:
			logger.debug("environment %s of %s failed: %s", environment, package_root, e)
			last_error = (environment, e)
			continue
		logger.debug("loaded %s of %s for environment %s", what, package_root, environment)
		return value

	if last_error is None:
		raise PackageLoadError(package_root, f"no environments available to load package at {package_root}")
	environment, err = last_error
	raise PackageLoadError(
		package_root,
		f"unable to load {what} for any environment; last attempt with `{environment}` failed: {err}",
	)


def load_compiled_package(package_root: str) -> CompiledPackage:
	return _load_first(package_root, lambda artifact: artifact.compiled, "compiled package")


def load_package_graph(package_root: str) -> PackageGraph:
	return _load_first(package_root, lambda artifact: artifact.graph, "dependency graph")
