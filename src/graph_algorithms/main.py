from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from interaction_graph.wire_models import GraphSnapshotValue
from reporting.ranking import build_report_payload

from .config import load_analysis_config
from .engine import GraphAnalysisEngine

logger = logging.getLogger("graph-algorithms")


def load_rows(path: Path) -> list[dict[str, Any]]:
    """Read interaction rows from a JSON array or a JSON-lines file."""
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return []
    if text.startswith("["):
        return json.loads(text)
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interaction graph centrality and community analysis")
    parser.add_argument("input", type=Path, help="JSON or JSON-lines file of interaction rows")
    parser.add_argument("--output", type=Path, default=None, help="Write snapshot and report here instead of stdout")
    parser.add_argument("--top-k", type=int, default=None, help="Entries per ranked list (default: ALGO_TOP_K)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    args = parse_args(argv)
    config = load_analysis_config()
    top_k = args.top_k if args.top_k is not None else config.top_k

    engine = GraphAnalysisEngine(config)
    result = engine.run(load_rows(args.input))

    payload = {
        "snapshot": GraphSnapshotValue.from_domain(result).model_dump(mode="json"),
        "report": build_report_payload(result, k=top_k),
    }
    body = json.dumps(payload, indent=2)
    if args.output is None:
        print(body)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(body, encoding="utf-8")
        logger.info("wrote analysis to %s", args.output)


if __name__ == "__main__":
    main()
