from __future__ import annotations


class PdkScanError(Exception):
	"""Base class for hard failures raised by pdkscan."""


class ScanError(PdkScanError, ValueError):
	"""A scan or extraction was requested with unusable input."""


class ScanStoreError(PdkScanError):
	"""A persisted scan could not be read back."""
