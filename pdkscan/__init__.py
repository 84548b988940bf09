"""PDK workspace discovery and model cataloging.

Modules:
- paths.py: Workspace path token resolution.
- cds_lib.py: Library map (cds.lib) parsing.
- cds_init.py: Model deck discovery from bootstrap files.
- deck_inspect.py: Shallow section/include catalog of a deck.
- extract.py: Scope-aware model extraction across includes.
- aggregate.py: Merging of per-occurrence model records.
- scanner.py: Whole-workspace scan.
- store.py: JSON persistence of scan results.
- summarize.py: Deterministic textual summaries of scan results.
"""

from .errors import PdkScanError, ScanError, ScanStoreError
from .model import (
	DeckReference,
	DeviceClass,
	ModelDeckRecord,
	SpectreModel,
	WorkspaceLibrary,
	WorkspaceScanResult,
)
from .scanner import scan_workspace
from .store import load_scan, save_scan

__all__ = [
	"DeckReference",
	"DeviceClass",
	"ModelDeckRecord",
	"PdkScanError",
	"ScanError",
	"ScanStoreError",
	"SpectreModel",
	"WorkspaceLibrary",
	"WorkspaceScanResult",
	"load_scan",
	"save_scan",
	"scan_workspace",
]
