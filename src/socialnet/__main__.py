# src/socialnet/__main__.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from socialnet.config import LedgerConfig, load_ledger_config
from socialnet.env import load_dotenv_if_present
from socialnet.runtime import metrics
from socialnet.runtime.ledger import SocialLedger
from socialnet.runtime.ledger_logging import configure_structured_logging, log_event
from socialnet.schemas import TxLine

_log = logging.getLogger("socialnet.cli")


def _boot(config_path: Optional[str]) -> LedgerConfig:
    # Load .env early so SOCIALNET_* vars exist before anything reads them.
    load_dotenv_if_present()
    cfg = load_ledger_config(config_path=config_path)
    configure_structured_logging(cfg.log_level)
    return cfg


def cmd_deploy(args: argparse.Namespace) -> int:
    cfg = _boot(args.config)
    ledger = SocialLedger.from_config(cfg)
    view = ledger.view()

    log_event(_log, "ledger_deployed", ledger_id=view.ledger_id, mode=cfg.mode)

    print("=== Deployment Summary ===")
    print(f"Ledger: {view.ledger_id}")
    print(f"Mode: {cfg.mode}")
    print(f"Total users: {view.total_users}")
    print(f"Total posts: {view.total_posts}")
    print("==========================")
    return 0


def _read_tx_lines(path: Path) -> List[TxLine]:
    out: List[TxLine] = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            try:
                out.append(TxLine.model_validate(json.loads(line)))
            except (json.JSONDecodeError, ValidationError) as e:
                raise ValueError(f"{path}:{lineno}: {e}") from e
    return out


def cmd_replay(args: argparse.Namespace) -> int:
    cfg = _boot(args.config)
    if args.metrics:
        cfg = replace(cfg, metrics_enabled=True)
        metrics.reset()

    try:
        lines = _read_tx_lines(Path(args.file))
    except (OSError, ValueError) as e:
        print(f"replay: {e}", file=sys.stderr)
        return 2

    ledger = SocialLedger.from_config(cfg)
    ok = failed = 0
    for line in lines:
        receipt = ledger.submit(line.to_envelope())
        print(json.dumps(receipt.to_json(), sort_keys=True))
        if receipt.ok:
            ok += 1
            continue
        failed += 1
        if args.fail_fast:
            break

    summary = {**ledger.view().to_json(), "receipts_ok": ok, "receipts_failed": failed}
    log_event(_log, "replay_done", **summary)
    print(json.dumps(summary, sort_keys=True))

    if args.metrics:
        sys.stdout.write(metrics.format_prometheus())

    return 0 if failed == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="socialnet", description="Social ledger tooling")
    ap.add_argument("--config", default=None, help="Path to a JSON/YAML ledger config")
    sub = ap.add_subparsers(dest="command", required=True)

    p_deploy = sub.add_parser("deploy", help="Create a fresh ledger and print its summary")
    p_deploy.set_defaults(func=cmd_deploy)

    p_replay = sub.add_parser("replay", help="Apply a JSONL tx log to a fresh ledger")
    p_replay.add_argument("file", help="JSONL file, one envelope per line")
    p_replay.add_argument("--fail-fast", action="store_true", help="Stop at the first failed receipt")
    p_replay.add_argument("--metrics", action="store_true", help="Print Prometheus metrics at the end")
    p_replay.set_defaults(func=cmd_replay)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return int(args.func(args))
    except ValueError as e:
        # Config validation failures
        print(f"socialnet: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
