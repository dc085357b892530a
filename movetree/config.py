from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field


MANIFEST_NAME = "Move.toml"
SKIP_DIRS = frozenset({".git", "target", "build", "node_modules"})

BUILD_DIR = "build"
ARTIFACT_NAME = "move-tree.json"
DEFAULT_ENVIRONMENT = "default"


class Settings(BaseModel):
	color: bool = True
	jobs: int = Field(default=1, ge=1)
	verbose: bool = False

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> Settings:
		"""Read NO_COLOR and MOVE_TREE_JOBS; explicit overrides that are not None win."""
		environ = os.environ if environ is None else environ
		values = {}
		if "NO_COLOR" in environ:
			values["color"] = False
		if environ.get("MOVE_TREE_JOBS"):
			values["jobs"] = environ["MOVE_TREE_JOBS"]
		values.update({key: value for key, value in overrides.items() if value is not None})
		return cls(**values)
