"""Tree views of compiled Move packages.

Modules:
- model.py: Compiled module tables, dependency graphs and render models.
- signature.py: Formatting of binary signature tokens as Move types.
- collect.py: Public function listing per root module.
- deps.py: Depth-first dependency walk with shared-package detection.
- render.py: Box-drawing tree rendering with optional colour.
- discovery.py / loader.py / pipeline.py: Package roots, build artifacts and the per-root pipeline.
"""

__all__ = [
	"model",
	"signature",
	"collect",
	"deps",
	"render",
	"config",
	"errors",
	"discovery",
	"loader",
	"pipeline",
]
