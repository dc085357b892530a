from __future__ import annotations

from typing import List

from .model import CompiledModule, CompiledPackage, FunctionInfo, ModuleInfo, Visibility
from .signature import format_signature_token


def _format_signature(module: CompiledModule, index: int) -> List[str]:
	return [format_signature_token(module, token) for token in module.signature_at(index)]


def collect_functions(module: CompiledModule) -> List[FunctionInfo]:
	functions: List[FunctionInfo] = []
	for definition in module.function_defs:
		if definition.visibility is not Visibility.PUBLIC:
			continue
		handle = module.function_handle_at(definition.function)
		functions.append(
			FunctionInfo(
				name=handle.name,
				# Parameter names are not kept in the binary, only the arity.
				type_params=[f"T{idx}" for idx in range(handle.type_parameters)],
				params=_format_signature(module, handle.parameters),
				returns=_format_signature(module, handle.returns),
			)
		)
	functions.sort(key=lambda fn: fn.name)
	return functions


def collect_modules(compiled: CompiledPackage) -> List[ModuleInfo]:
	"""Build one ModuleInfo per root module, ordered by module name."""
	modules = [
		ModuleInfo(name=module.name, functions=collect_functions(module))
		for module in compiled.root_modules
	]
	modules.sort(key=lambda m: m.name)
	return modules
