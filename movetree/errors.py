from __future__ import annotations


class MoveTreeError(Exception):
	"""Base class for failures reported to the user."""


class PackageDiscoveryError(MoveTreeError):
	pass


class NoPackagesFound(MoveTreeError):
	def __init__(self, path: str):
		super().__init__(f"No Move.toml found under {path}")
		self.path = path


class PackageLoadError(MoveTreeError):
	def __init__(self, path: str, cause: str):
		super().__init__(f"Failed to load Move package at {path}: {cause}")
		self.path = path
		self.cause = cause


class ConfigurationError(MoveTreeError):
	pass
