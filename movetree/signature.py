from __future__ import annotations

from typing import List

from .model import PRIMITIVE_KINDS, CompiledModule, SignatureToken, TokenKind


def format_signature_token(module: CompiledModule, token: SignatureToken) -> str:
	"""Render a signature token the way it would be written in Move source.

	Datatypes defined in ``module`` itself are left unqualified; everything
	else is written as ``module::Type``.
	"""
	kind = token.kind
	if kind in PRIMITIVE_KINDS:
		return kind.value
	if kind is TokenKind.VECTOR:
		return f"vector<{format_signature_token(module, token.inner)}>"
	if kind is TokenKind.REFERENCE:
		return f"&{format_signature_token(module, token.inner)}"
	if kind is TokenKind.MUTABLE_REFERENCE:
		return f"&mut {format_signature_token(module, token.inner)}"
	if kind is TokenKind.TYPE_PARAMETER:
		return f"T{token.type_parameter}"
	if kind in (TokenKind.DATATYPE, TokenKind.DATATYPE_INSTANTIATION):
		return format_datatype(module, token.handle, token.type_args)
	raise ValueError(f"unsupported signature token kind: {kind!r}")


def format_datatype(module: CompiledModule, handle_index: int, type_args: List[SignatureToken]) -> str:
	handle = module.datatype_handle_at(handle_index)
	module_name = module.module_handle_at(handle.module).name
	if handle.module == module.self_handle:
		name = handle.name
	else:
		name = f"{module_name}::{handle.name}"
	if type_args:
		args = ", ".join(format_signature_token(module, arg) for arg in type_args)
		name = f"{name}<{args}>"
	return name
