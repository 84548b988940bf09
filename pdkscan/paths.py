from __future__ import annotations

import os
from typing import Optional


WORK_DIR_TOKEN = "$WORK_DIR"
WORK_DIR_TOKEN_BRACED = "${WORK_DIR}"


def trim_quotes(value: str) -> str:
	trimmed = value.strip()
	if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in "\"'":
		return trimmed[1:-1]
	return trimmed.strip("\"'")


def _substitute_work_dir(value: str, workspace_root: str) -> str:
	upper = value.upper()
	for token in (WORK_DIR_TOKEN_BRACED, WORK_DIR_TOKEN):
		if upper.startswith(token):
			remainder = value[len(token):].lstrip("/\\")
			return os.path.join(workspace_root, remainder)
	return value


def _expand_home(value: str) -> str:
	if not value.startswith("~"):
		return value
	home = os.path.expanduser("~")
	if not home or home == "~":
		return value
	remainder = value[1:].lstrip("/\\")
	return os.path.join(home, remainder) if remainder else home


def normalize_workspace_path(
	raw_path: Optional[str],
	workspace_root: str,
	relative_base: Optional[str] = None,
) -> Optional[str]:
	"""Resolve a raw path token from a workspace file into an absolute path.

	Handles quoting, the ``$WORK_DIR`` placeholder, environment variables and a
	leading ``~``. Relative paths are joined to ``relative_base`` (or the
	workspace root). Returns None only when the token is empty.
	"""
	if raw_path is None or not raw_path.strip():
		return None

	trimmed = trim_quotes(raw_path)
	if not trimmed:
		return None

	expanded = _substitute_work_dir(trimmed, workspace_root)
	expanded = os.path.expandvars(expanded)
	expanded = _expand_home(expanded)

	if os.path.isabs(expanded):
		return os.path.abspath(expanded)

	base = relative_base if relative_base and relative_base.strip() else workspace_root
	return os.path.abspath(os.path.join(base, expanded))


def path_key(path: str) -> str:
	# Comparison key following the host's filename case rules
	return os.path.normcase(os.path.abspath(path))
