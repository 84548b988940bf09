from __future__ import annotations

import logging
import os
from typing import List, Optional, Set

from .model import WorkspaceLibrary
from .paths import normalize_workspace_path, path_key


logger = logging.getLogger(__name__)

CDS_LIB_NAME = "cds.lib"
COMMENT_PREFIXES = ("#", "--")


def _keyword(tokens: List[str]) -> str:
	return tokens[0].upper() if tokens else ""


def _parse_file(
	file_path: str,
	workspace_root: str,
	libraries: List[WorkspaceLibrary],
	visited: Set[str],
	warnings: List[str],
	soft: bool = False,
) -> None:
	key = path_key(file_path)
	if key in visited:
		logger.debug("Skipping already parsed library map %s", file_path)
		return
	visited.add(key)

	if not os.path.isfile(file_path):
		if soft:
			logger.debug("SOFTINCLUDE target %s does not exist", file_path)
		else:
			warnings.append(f"cds.lib include '{file_path}' does not exist.")
		return

	directory = os.path.dirname(file_path)
	try:
		with open(file_path, "r", encoding="utf-8", errors="replace") as fh:
			lines = fh.readlines()
	except OSError as e:
		warnings.append(f"Failed to read '{file_path}': {e}")
		return

	for raw_line in lines:
		line = raw_line.strip()
		if not line or line.startswith(COMMENT_PREFIXES):
			continue

		tokens = line.split()
		keyword = _keyword(tokens)
		if keyword == "DEFINE":
			path = normalize_workspace_path(tokens[2], workspace_root, directory) if len(tokens) >= 3 else None
			if path is None:
				warnings.append(f"Malformed DEFINE in '{file_path}': '{line}'.")
				continue
			libraries.append(WorkspaceLibrary(name=tokens[1], path=path))
		elif keyword in ("INCLUDE", "SOFTINCLUDE"):
			target = normalize_workspace_path(tokens[1], workspace_root, directory) if len(tokens) >= 2 else None
			if target is None:
				warnings.append(f"Unable to parse include in '{file_path}': '{line}'.")
				continue
			_parse_file(target, workspace_root, libraries, visited, warnings, soft=keyword == "SOFTINCLUDE")


def parse_cds_lib(workspace_root: str, warnings: Optional[List[str]] = None) -> List[WorkspaceLibrary]:
	"""Return the libraries declared by ``<workspace_root>/cds.lib`` and its includes."""
	if warnings is None:
		warnings = []
	libraries: List[WorkspaceLibrary] = []

	root = os.path.abspath(workspace_root)
	cds_lib = os.path.join(root, CDS_LIB_NAME)
	if not os.path.isfile(cds_lib):
		warnings.append(f"cds.lib not found under '{root}'.")
		return libraries

	_parse_file(cds_lib, root, libraries, set(), warnings)
	logger.debug("Parsed %d libraries from %s", len(libraries), cds_lib)
	return libraries
