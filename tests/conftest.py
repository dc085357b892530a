from __future__ import annotations

import json
import os

import pytest

from movetree.model import (
	CompiledModule,
	CompiledPackage,
	DatatypeHandle,
	FunctionDefinition,
	FunctionHandle,
	ModuleHandle,
	PackageArtifact,
	PackageEntry,
	PackageGraph,
	SignatureToken as Tok,
	TokenKind,
	Visibility,
)


def coin_module() -> CompiledModule:
	coin_t0 = Tok.datatype(0, [Tok.type_param(0)])
	cap_t0 = Tok.datatype(1, [Tok.type_param(0)])
	return CompiledModule(
		self_handle=0,
		module_handles=[ModuleHandle(address="0x2", name="coin")],
		datatype_handles=[
			DatatypeHandle(module=0, name="Coin"),
			DatatypeHandle(module=0, name="TreasuryCap"),
		],
		signatures=[
			[],
			[Tok.mutable_reference(cap_t0), Tok.primitive(TokenKind.U64)],
			[coin_t0],
			[Tok.mutable_reference(cap_t0), coin_t0],
			[Tok.primitive(TokenKind.U64)],
			[Tok.reference(coin_t0)],
		],
		function_handles=[
			FunctionHandle(module=0, name="mint", parameters=1, returns=2, type_parameters=1),
			FunctionHandle(module=0, name="burn", parameters=3, returns=4, type_parameters=1),
			FunctionHandle(module=0, name="value", parameters=5, returns=4, type_parameters=1),
			FunctionHandle(module=0, name="split_internal", parameters=0, returns=0),
			FunctionHandle(module=0, name="friend_only", parameters=0, returns=0),
		],
		function_defs=[
			FunctionDefinition(function=0, visibility=Visibility.PUBLIC),
			FunctionDefinition(function=1, visibility=Visibility.PUBLIC),
			FunctionDefinition(function=2, visibility=Visibility.PUBLIC),
			FunctionDefinition(function=3, visibility=Visibility.PRIVATE),
			FunctionDefinition(function=4, visibility=Visibility.FRIEND),
		],
	)


def pay_module() -> CompiledModule:
	coin_t0 = Tok.datatype(0, [Tok.type_param(0)])
	return CompiledModule(
		self_handle=0,
		module_handles=[ModuleHandle(address="0x2", name="pay"), ModuleHandle(address="0x2", name="coin")],
		datatype_handles=[DatatypeHandle(module=1, name="Coin")],
		signatures=[
			[],
			[coin_t0],
			[Tok.primitive(TokenKind.U64), Tok.primitive(TokenKind.BOOL)],
			[Tok.mutable_reference(coin_t0), Tok.vector(Tok.primitive(TokenKind.U64))],
		],
		function_handles=[
			FunctionHandle(module=0, name="split_vec", parameters=3, returns=0, type_parameters=1),
			FunctionHandle(module=0, name="keep", parameters=1, returns=2, type_parameters=1),
		],
		function_defs=[
			FunctionDefinition(function=0, visibility=Visibility.PUBLIC, is_entry=True),
			FunctionDefinition(function=1, visibility=Visibility.PUBLIC),
		],
	)


def sample_package() -> CompiledPackage:
	return CompiledPackage(package_name="Sample", root_modules=[pay_module(), coin_module()])


SAMPLE_TREE = [
	"package Sample",
	"├── module coin",
	"│   ├── fun burn<T0>(&mut TreasuryCap<T0>, Coin<T0>): u64",
	"│   ├── fun mint<T0>(&mut TreasuryCap<T0>, u64): Coin<T0>",
	"│   └── fun value<T0>(&Coin<T0>): u64",
	"└── module pay",
	"    ├── fun keep<T0>(coin::Coin<T0>): (u64, bool)",
	"    └── fun split_vec<T0>(&mut coin::Coin<T0>, vector<u64>): ()",
]


def make_graph(root: str, packages: dict) -> PackageGraph:
	"""``packages`` maps id -> (display_name, {dep_name: dep_id}) or (display, registry, deps)."""
	entries = {}
	for package_id, spec in packages.items():
		if len(spec) == 2:
			display, deps = spec
			registry = None
		else:
			display, registry, deps = spec
		entries[package_id] = PackageEntry(display_name=display, registry_name=registry, dependencies=deps)
	return PackageGraph(root=root, packages=entries)


def diamond_graph() -> PackageGraph:
	return make_graph(
		"R",
		{
			"R": ("R", {"A": "A", "B": "B"}),
			"A": ("A", {"C": "C"}),
			"B": ("B", {"C": "C"}),
			"C": ("C", {"D": "D"}),
			"D": ("D", {}),
		},
	)


def write_package(root, name: str = "Sample", environments=None, artifacts=None) -> str:
	"""Create a package directory with a Move.toml and per-environment artifacts."""
	root = str(root)
	os.makedirs(root, exist_ok=True)
	manifest = f'[package]\nname = "{name}"\n'
	if environments is not None:
		manifest += "\n[environments]\n" + "".join(f'{env} = "{env}-chain"\n' for env in environments)
	with open(os.path.join(root, "Move.toml"), "w", encoding="utf-8") as fh:
		fh.write(manifest)
	for env, artifact in (artifacts or {}).items():
		env_dir = os.path.join(root, "build", env)
		os.makedirs(env_dir, exist_ok=True)
		with open(os.path.join(env_dir, "move-tree.json"), "w", encoding="utf-8") as fh:
			if isinstance(artifact, PackageArtifact):
				fh.write(artifact.model_dump_json())
			else:
				fh.write(json.dumps(artifact) if not isinstance(artifact, str) else artifact)
	return root


@pytest.fixture
def package() -> CompiledPackage:
	return sample_package()


@pytest.fixture
def sample_artifact() -> PackageArtifact:
	return PackageArtifact(compiled=sample_package(), graph=diamond_graph())
