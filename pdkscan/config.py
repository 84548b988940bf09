"""Per-user state: the state directory, scan cache locations and CLI config."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from typing import Optional

from pydantic import ValidationError

from .model import CliConfig


logger = logging.getLogger(__name__)

STATE_DIR_ENV = "PDKSCAN_HOME"
STATE_DIR_NAME = ".pdkscan"
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "cli.log"
SCAN_FILE_NAME = "workspace-scan.json"


def state_root() -> str:
	override = os.environ.get(STATE_DIR_ENV)
	if override:
		return os.path.abspath(os.path.expanduser(override))
	home = os.path.expanduser("~")
	if not home or home == "~":
		home = os.getcwd()
	return os.path.join(home, STATE_DIR_NAME)


def workspace_hash(workspace_root: str) -> str:
	return hashlib.sha256(os.path.abspath(workspace_root).encode("utf-8")).hexdigest()


def workspace_folder(workspace_root: str) -> str:
	return os.path.join(state_root(), "workspaces", workspace_hash(workspace_root))


def scan_cache_path(workspace_root: str) -> str:
	return os.path.join(workspace_folder(workspace_root), SCAN_FILE_NAME)


def config_path() -> str:
	return os.path.join(state_root(), CONFIG_FILE_NAME)


def log_path() -> str:
	return os.path.join(state_root(), LOG_FILE_NAME)


def load_config() -> CliConfig:
	path = config_path()
	if not os.path.isfile(path):
		return CliConfig()
	try:
		with open(path, "r", encoding="utf-8") as fh:
			config = CliConfig.model_validate(json.load(fh))
	except (OSError, ValueError, ValidationError) as e:
		logger.warning("Ignoring unreadable config %s: %s", path, e)
		return CliConfig()
	if config.pdk_root:
		return CliConfig(pdk_root=os.path.abspath(config.pdk_root))
	return config


def save_config(config: CliConfig) -> None:
	path = config_path()
	os.makedirs(os.path.dirname(path), exist_ok=True)
	data = config.model_dump(mode="json", by_alias=True, exclude_none=True)
	with open(path, "w", encoding="utf-8") as fh:
		json.dump(data, fh, indent=2, sort_keys=True)
		fh.write("\n")


def resolve_workspace_root(explicit: Optional[str] = None, config: Optional[CliConfig] = None) -> str:
	"""Explicit root, else the configured default, else the current directory."""
	if explicit:
		return os.path.abspath(os.path.expanduser(explicit))
	if config is not None and config.pdk_root:
		return config.pdk_root
	return os.getcwd()
