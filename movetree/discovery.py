from __future__ import annotations

import logging
import os
from typing import List

from .config import MANIFEST_NAME, SKIP_DIRS
from .errors import PackageDiscoveryError


logger = logging.getLogger(__name__)


def _raise_walk_error(err: OSError) -> None:
	raise PackageDiscoveryError(f"Unable to access {err.filename}: {err.strerror or err}") from err


def find_package_roots(path: str) -> List[str]:
	"""Return the sorted directories under ``path`` that hold a Move.toml.

	``path`` may also name a Move.toml file directly, which selects its parent.
	"""
	if not os.path.exists(path):
		raise PackageDiscoveryError(f"Unable to access {path}")

	roots = set()
	if os.path.isfile(path):
		if os.path.basename(path) == MANIFEST_NAME:
			roots.add(os.path.dirname(os.path.abspath(path)))
	else:
		for dirpath, dirnames, filenames in os.walk(path, onerror=_raise_walk_error):
			dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
			if MANIFEST_NAME in filenames:
				roots.add(dirpath)

	logger.debug("found %d package root(s) under %s", len(roots), path)
	return sorted(roots)
