"""Logging configuration for the pdkscan CLI and server."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "pdkscan"


def setup_logging(
	log_file: Optional[Path] = None,
	console_level: int = logging.WARNING,
	file_level: int = logging.DEBUG,
) -> logging.Logger:
	"""
	Configure the ``pdkscan`` logger.

	Sets up:
	- Console handler on stderr (WARNING by default)
	- File handler for the interaction log (DEBUG by default), if a path is given

	Returns:
		logging.Logger: the configured package logger
	"""
	logger = logging.getLogger(LOGGER_NAME)
	logger.setLevel(logging.DEBUG)

	for handler in list(logger.handlers):
		logger.removeHandler(handler)
		handler.close()

	console_handler = logging.StreamHandler(sys.stderr)
	console_handler.setLevel(console_level)
	console_handler.setFormatter(
		logging.Formatter("%(asctime)s | %(levelname)-8s | %(message)s", datefmt="%H:%M:%S")
	)
	logger.addHandler(console_handler)

	if log_file:
		log_file.parent.mkdir(parents=True, exist_ok=True)
		file_handler = logging.FileHandler(log_file, encoding="utf-8")
		file_handler.setLevel(file_level)
		file_handler.setFormatter(
			logging.Formatter(
				"%(asctime)s | %(name)s | %(levelname)-8s | %(message)s",
				datefmt="%Y-%m-%d %H:%M:%S",
			)
		)
		logger.addHandler(file_handler)

	logger.propagate = False
	return logger
