from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

import uvicorn

from pdkscan.classify import parse_device_class
from pdkscan.config import (
	load_config,
	log_path,
	resolve_workspace_root,
	save_config,
	scan_cache_path,
)
from pdkscan.errors import PdkScanError
from pdkscan.logging_config import setup_logging
from pdkscan.model import CliConfig, WorkspaceScanResult
from pdkscan.scanner import scan_workspace
from pdkscan.store import load_scan, save_scan
from pdkscan.summarize import (
	class_summary,
	deck_rows,
	find_by_index_or_name,
	format_table,
	model_rows,
	summarize_deck,
	summarize_model,
	summarize_scan,
)


logger = logging.getLogger("pdkscan.cli")

SUCCESS = 0
FAILURE = 1


def _say(message: str) -> None:
	# Printed for the user and appended to the interaction log
	print(message)
	logger.info(message)


def _root(args: argparse.Namespace) -> str:
	return resolve_workspace_root(getattr(args, "root", None), load_config())


def _load_cached(root: str) -> Optional[WorkspaceScanResult]:
	path = scan_cache_path(root)
	if not os.path.isfile(path):
		_say(f"No scan found for {root}. Run pdkscan scan.")
		return None
	try:
		return load_scan(path)
	except PdkScanError as e:
		_say(f"Failed to load cached scan: {e}. Run pdkscan scan.")
		return None


def cmd_scan(args: argparse.Namespace) -> int:
	root = resolve_workspace_root(args.path or args.root, load_config())
	_say(f"Scanning workspace {root}")
	result = scan_workspace(root)
	save_scan(result, scan_cache_path(root))

	_say(f"Found {len(result.libraries)} libraries, {len(result.model_decks)} model decks, {len(result.models)} models.")
	for warning in result.warnings:
		_say(f"Warning: {warning}")
	return SUCCESS


def cmd_decks(args: argparse.Namespace) -> int:
	scan = _load_cached(_root(args))
	if scan is None:
		return FAILURE
	if not scan.model_decks:
		_say("No model decks discovered. Run pdkscan scan.")
		return SUCCESS
	_say(format_table(("#", "Deck", "Sections", "Includes", "Models"), deck_rows(scan.model_decks)))
	return SUCCESS


def cmd_deck(args: argparse.Namespace) -> int:
	scan = _load_cached(_root(args))
	if scan is None:
		return FAILURE
	deck = find_by_index_or_name(scan.model_decks, args.deck, lambda d: os.path.basename(d.deck_path))
	if deck is None:
		_say("Deck not found.")
		return FAILURE
	_say(summarize_deck(deck))
	return SUCCESS


def cmd_models(args: argparse.Namespace) -> int:
	scan = _load_cached(_root(args))
	if scan is None:
		return FAILURE
	if not scan.models:
		_say("No models discovered. Run pdkscan scan.")
		return SUCCESS

	filters = []
	for token in args.device_class or []:
		device_class = parse_device_class(token)
		if device_class is None:
			_say(f"Unknown device class '{token}'.")
			return FAILURE
		filters.append(device_class)

	if not filters:
		rows = class_summary(scan.models)
		if args.limit:
			rows = rows[:args.limit]
		_say(summarize_scan(scan))
		_say(format_table(("Class", "Models", "Examples"), rows))
		return SUCCESS

	matching = [m for m in scan.models if m.device_class in filters]
	if args.limit:
		matching = matching[:args.limit]
	_say(f"{len(matching)} models in {', '.join(c.value for c in filters)}")
	_say(format_table(("#", "Name", "Class", "Voltage", "Threshold", "Corners"), model_rows(matching)))
	return SUCCESS


def cmd_model(args: argparse.Namespace) -> int:
	scan = _load_cached(_root(args))
	if scan is None:
		return FAILURE
	model = find_by_index_or_name(scan.models, args.model, lambda m: m.name)
	if model is None:
		_say("Model not found.")
		return FAILURE
	_say(summarize_model(model))
	return SUCCESS


def cmd_set_dir(args: argparse.Namespace) -> int:
	config = load_config()
	if args.clear:
		save_config(CliConfig())
		_say("Cleared default PDK workspace preference.")
		return SUCCESS

	if not args.path:
		_say(f"Default PDK workspace: {config.pdk_root or '(not set)'}")
		return SUCCESS

	resolved = os.path.abspath(os.path.expanduser(args.path))
	if not os.path.isdir(resolved):
		_say(f"Directory '{resolved}' not found.")
		return FAILURE
	save_config(CliConfig(pdk_root=resolved))
	_say(f"PDK workspace set to {resolved}")
	return SUCCESS


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return SUCCESS


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="pdkscan")
	parser.add_argument("--root", help="PDK workspace root (defaults to set-dir value or cwd)")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
	sub = parser.add_subparsers(dest="cmd", required=True)

	ps = sub.add_parser("scan", help="Scan a workspace for libraries, decks and models")
	ps.add_argument("path", nargs="?", help="Workspace root to scan")
	ps.set_defaults(func=cmd_scan)

	pds = sub.add_parser("decks", help="List discovered model decks")
	pds.set_defaults(func=cmd_decks)

	pd = sub.add_parser("deck", help="Inspect one model deck")
	pd.add_argument("deck", help="Deck index or file name")
	pd.set_defaults(func=cmd_deck)

	pms = sub.add_parser("models", help="Summarize discovered models")
	pms.add_argument("--class", dest="device_class", action="append", help="Filter by device class (repeatable)")
	pms.add_argument("--limit", type=int, default=0)
	pms.set_defaults(func=cmd_models)

	pm = sub.add_parser("model", help="Inspect one model")
	pm.add_argument("model", help="Model index or name")
	pm.set_defaults(func=cmd_model)

	pdir = sub.add_parser("set-dir", help="Set or clear the default PDK workspace")
	pdir.add_argument("path", nargs="?")
	pdir.add_argument("--clear", action="store_true")
	pdir.set_defaults(func=cmd_set_dir)

	pserve = sub.add_parser("serve", help="Run FastAPI server")
	pserve.add_argument("--host", default="127.0.0.1")
	pserve.add_argument("--port", type=int, default=8000)
	pserve.add_argument("--reload", action="store_true")
	pserve.set_defaults(func=cmd_serve)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	setup_logging(
		log_file=Path(log_path()),
		console_level=logging.DEBUG if args.verbose else logging.WARNING,
	)
	try:
		return args.func(args)
	except PdkScanError as e:
		_say(f"Error: {e}")
		return FAILURE


if __name__ == "__main__":
	raise SystemExit(main())
