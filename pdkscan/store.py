from __future__ import annotations

import json
import logging
import os
import tempfile

from pydantic import ValidationError

from .errors import ScanStoreError
from .model import WorkspaceScanResult


logger = logging.getLogger(__name__)


def dump_scan(result: WorkspaceScanResult) -> str:
	data = result.model_dump(mode="json", by_alias=True, exclude_none=True)
	return json.dumps(data, indent=2, sort_keys=True) + "\n"


def save_scan(result: WorkspaceScanResult, output_path: str) -> None:
	"""Write ``result`` as JSON, replacing ``output_path`` atomically."""
	directory = os.path.dirname(os.path.abspath(output_path))
	os.makedirs(directory, exist_ok=True)

	fd, tmp_path = tempfile.mkstemp(prefix=".workspace-scan-", suffix=".tmp", dir=directory)
	try:
		with os.fdopen(fd, "w", encoding="utf-8") as fh:
			fh.write(dump_scan(result))
		os.replace(tmp_path, output_path)
	except BaseException:
		if os.path.exists(tmp_path):
			os.unlink(tmp_path)
		raise
	logger.debug("Saved scan of %s to %s", result.workspace_root, output_path)


def load_scan(input_path: str) -> WorkspaceScanResult:
	if not os.path.isfile(input_path):
		raise ScanStoreError(f"Scan file not found: {input_path}")
	try:
		with open(input_path, "r", encoding="utf-8") as fh:
			return WorkspaceScanResult.model_validate_json(fh.read())
	except (OSError, UnicodeDecodeError, ValidationError) as e:
		raise ScanStoreError(f"Failed to load workspace scan data from {input_path}: {e}") from e
