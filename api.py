from __future__ import annotations

import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from pdkscan.classify import parse_device_class
from pdkscan.config import scan_cache_path
from pdkscan.errors import ScanStoreError
from pdkscan.model import ModelDeckRecord, SpectreModel, WorkspaceScanResult
from pdkscan.scanner import scan_workspace
from pdkscan.store import load_scan, save_scan


app = FastAPI(title="PDK Workspace Scanner")


class ScanRequest(BaseModel):
	root_path: str


def _valid_root(root_path: str) -> str:
	root = os.path.abspath(os.path.expanduser(root_path)) if root_path.strip() else ""
	if not root or not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root_path}")
	return root


def _cached_scan(root_path: str) -> WorkspaceScanResult:
	root = _valid_root(root_path)
	try:
		return load_scan(scan_cache_path(root))
	except ScanStoreError as e:
		raise HTTPException(status_code=404, detail=f"No usable scan for {root}; POST /scan first. ({e})") from e


@app.post("/scan", response_model=WorkspaceScanResult)
def scan(req: ScanRequest) -> WorkspaceScanResult:
	root = _valid_root(req.root_path)
	result = scan_workspace(root)
	save_scan(result, scan_cache_path(root))
	return result


@app.get("/decks", response_model=List[ModelDeckRecord])
def list_decks(root_path: str) -> List[ModelDeckRecord]:
	return _cached_scan(root_path).model_decks


@app.get("/models", response_model=List[SpectreModel])
def list_models(root_path: str, device_class: Optional[str] = None) -> List[SpectreModel]:
	models = _cached_scan(root_path).models
	if device_class is None:
		return models
	wanted = parse_device_class(device_class)
	if wanted is None:
		raise HTTPException(status_code=400, detail=f"Unknown device class: {device_class}")
	return [m for m in models if m.device_class is wanted]


@app.get("/models/{name}", response_model=SpectreModel)
def get_model(name: str, root_path: str) -> SpectreModel:
	for m in _cached_scan(root_path).models:
		if m.name.casefold() == name.casefold():
			return m
	raise HTTPException(status_code=404, detail=f"Model not found: {name}")


def create_app() -> FastAPI:
	return app
