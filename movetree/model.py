from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TokenKind(str, Enum):
	BOOL = "bool"
	U8 = "u8"
	U16 = "u16"
	U32 = "u32"
	U64 = "u64"
	U128 = "u128"
	U256 = "u256"
	ADDRESS = "address"
	SIGNER = "signer"
	VECTOR = "vector"
	REFERENCE = "reference"
	MUTABLE_REFERENCE = "mutable_reference"
	TYPE_PARAMETER = "type_parameter"
	DATATYPE = "datatype"
	DATATYPE_INSTANTIATION = "datatype_instantiation"


PRIMITIVE_KINDS = frozenset(
	{
		TokenKind.BOOL,
		TokenKind.U8,
		TokenKind.U16,
		TokenKind.U32,
		TokenKind.U64,
		TokenKind.U128,
		TokenKind.U256,
		TokenKind.ADDRESS,
		TokenKind.SIGNER,
	}
)

WRAPPER_KINDS = frozenset({TokenKind.VECTOR, TokenKind.REFERENCE, TokenKind.MUTABLE_REFERENCE})


class SignatureToken(BaseModel):
	"""One node of a binary type signature."""

	model_config = ConfigDict(frozen=True)

	kind: TokenKind
	inner: Optional[SignatureToken] = None
	type_parameter: Optional[int] = Field(default=None, ge=0)
	handle: Optional[int] = Field(default=None, ge=0)
	type_args: List[SignatureToken] = []

	@model_validator(mode="after")
	def _check_shape(self) -> SignatureToken:
		if (self.inner is not None) != (self.kind in WRAPPER_KINDS):
			raise ValueError(f"{self.kind.value} token has wrong 'inner' field")
		if (self.type_parameter is not None) != (self.kind is TokenKind.TYPE_PARAMETER):
			raise ValueError(f"{self.kind.value} token has wrong 'type_parameter' field")
		is_datatype = self.kind in (TokenKind.DATATYPE, TokenKind.DATATYPE_INSTANTIATION)
		if (self.handle is not None) != is_datatype:
			raise ValueError(f"{self.kind.value} token has wrong 'handle' field")
		if self.type_args and self.kind is not TokenKind.DATATYPE_INSTANTIATION:
			raise ValueError(f"{self.kind.value} token cannot carry type arguments")
		return self

	@classmethod
	def primitive(cls, kind: TokenKind) -> SignatureToken:
		return cls(kind=kind)

	@classmethod
	def vector(cls, inner: SignatureToken) -> SignatureToken:
		return cls(kind=TokenKind.VECTOR, inner=inner)

	@classmethod
	def reference(cls, inner: SignatureToken) -> SignatureToken:
		return cls(kind=TokenKind.REFERENCE, inner=inner)

	@classmethod
	def mutable_reference(cls, inner: SignatureToken) -> SignatureToken:
		return cls(kind=TokenKind.MUTABLE_REFERENCE, inner=inner)

	@classmethod
	def type_param(cls, index: int) -> SignatureToken:
		return cls(kind=TokenKind.TYPE_PARAMETER, type_parameter=index)

	@classmethod
	def datatype(cls, handle: int, type_args: Optional[List[SignatureToken]] = None) -> SignatureToken:
		if type_args is None:
			return cls(kind=TokenKind.DATATYPE, handle=handle)
		return cls(kind=TokenKind.DATATYPE_INSTANTIATION, handle=handle, type_args=type_args)


class ModuleHandle(BaseModel):
	address: str = "0x0"
	name: str


class DatatypeHandle(BaseModel):
	module: int = Field(ge=0)
	name: str


class FunctionHandle(BaseModel):
	module: int = Field(ge=0)
	name: str
	parameters: int = Field(ge=0)
	returns: int = Field(ge=0)
	type_parameters: int = Field(default=0, ge=0)


class Visibility(str, Enum):
	PRIVATE = "private"
	PUBLIC = "public"
	FRIEND = "friend"


class FunctionDefinition(BaseModel):
	function: int = Field(ge=0)
	visibility: Visibility = Visibility.PRIVATE
	is_entry: bool = False


class CompiledModule(BaseModel):
	"""Handle tables of a compiled module, as read from the binary format.

	Every cross reference is an index into one of the tables; an index that
	does not resolve raises ``IndexError``.
	"""

	self_handle: int = Field(default=0, ge=0)
	module_handles: List[ModuleHandle]
	datatype_handles: List[DatatypeHandle] = []
	function_handles: List[FunctionHandle] = []
	function_defs: List[FunctionDefinition] = []
	signatures: List[List[SignatureToken]] = [[]]

	@property
	def name(self) -> str:
		return self.module_handle_at(self.self_handle).name

	def module_handle_at(self, index: int) -> ModuleHandle:
		return self.module_handles[index]

	def datatype_handle_at(self, index: int) -> DatatypeHandle:
		return self.datatype_handles[index]

	def function_handle_at(self, index: int) -> FunctionHandle:
		return self.function_handles[index]

	def signature_at(self, index: int) -> List[SignatureToken]:
		return self.signatures[index]


class CompiledPackage(BaseModel):
	package_name: str
	root_modules: List[CompiledModule] = []
	dependency_modules: List[CompiledModule] = []


class FunctionInfo(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	type_params: List[str] = []
	params: List[str] = []
	returns: List[str] = []


class ModuleInfo(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	functions: List[FunctionInfo] = []


class PackageNode:
	"""A package in a resolved dependency graph.

	Nodes are shared between every edge that points at the same package id, so
	the graph may contain diamonds and cycles.
	"""

	def __init__(self, id: str, display_name: str, registry_name: Optional[str] = None):
		self.id = id
		self.display_name = display_name
		self.registry_name = registry_name
		self.direct_deps: Dict[str, PackageNode] = {}

	def __repr__(self) -> str:
		return f"PackageNode({self.id!r})"


class PackageEntry(BaseModel):
	display_name: str
	registry_name: Optional[str] = None
	dependencies: Dict[str, str] = {}


class PackageGraph(BaseModel):
	root: str
	packages: Dict[str, PackageEntry]

	@model_validator(mode="after")
	def _check_references(self) -> PackageGraph:
		if self.root not in self.packages:
			raise ValueError(f"root package {self.root!r} is not in the graph")
		for package_id, entry in self.packages.items():
			for dep_name, dep_id in entry.dependencies.items():
				if dep_id not in self.packages:
					raise ValueError(
						f"package {package_id!r} depends on unknown package {dep_id!r} (as {dep_name!r})"
					)
		return self

	def root_node(self) -> PackageNode:
		nodes = {
			package_id: PackageNode(package_id, entry.display_name, entry.registry_name)
			for package_id, entry in self.packages.items()
		}
		for package_id, entry in self.packages.items():
			for dep_name, dep_id in entry.dependencies.items():
				nodes[package_id].direct_deps[dep_name] = nodes[dep_id]
		return nodes[self.root]


class DependencyLine(BaseModel):
	model_config = ConfigDict(frozen=True)

	depth: int = Field(ge=0)
	is_last: bool
	name: str
	registry_name: Optional[str] = None
	package_id: Optional[str] = None
	shared: bool = False
	placeholder: bool = False


class PackageArtifact(BaseModel):
	compiled: Optional[CompiledPackage] = None
	graph: Optional[PackageGraph] = None


SignatureToken.model_rebuild()
