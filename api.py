from __future__ import annotations

import os
from typing import Literal

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from movetree.collect import collect_modules
from movetree.deps import walk_dependencies
from movetree.errors import NoPackagesFound, PackageDiscoveryError, PackageLoadError
from movetree.model import CompiledPackage, PackageGraph
from movetree.pipeline import render_roots
from movetree.render import get_palette, render_dependency_tree, render_package_tree


app = FastAPI(title="Move Tree Renderer")


class ModulesRequest(BaseModel):
	package: CompiledPackage
	color: bool = False


class DepsRequest(BaseModel):
	graph: PackageGraph
	color: bool = False


class RenderRequest(BaseModel):
	root_path: str
	view: Literal["modules", "deps"] = "modules"
	color: bool = False


def _text(lines) -> PlainTextResponse:
	return PlainTextResponse("\n".join(lines) + "\n")


@app.post("/render/modules", response_class=PlainTextResponse)
def render_modules(req: ModulesRequest) -> PlainTextResponse:
	modules = collect_modules(req.package)
	return _text(render_package_tree(req.package.package_name, modules, palette=get_palette(req.color)))


@app.post("/render/deps", response_class=PlainTextResponse)
def render_deps(req: DepsRequest) -> PlainTextResponse:
	root = req.graph.root_node()
	lines = walk_dependencies(root)
	return _text(render_dependency_tree(root.display_name, lines, palette=get_palette(req.color)))


@app.post("/render", response_class=PlainTextResponse)
def render(req: RenderRequest) -> PlainTextResponse:
	root = os.path.abspath(req.root_path)
	try:
		text = render_roots(root, req.view, get_palette(req.color))
	except (PackageDiscoveryError, NoPackagesFound) as e:
		raise HTTPException(status_code=400, detail=str(e))
	except PackageLoadError as e:
		raise HTTPException(status_code=422, detail=str(e))
	return PlainTextResponse(text + "\n")


def create_app() -> FastAPI:
	return app
