"""Example showing how to optimise a request and compare selection modes."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from promptdial_optimizer import ParetoOptimizer, SelectionMode
from promptdial_optimizer.examples import sample_request
from promptdial_optimizer.exporters import markdown_exporter


def load_request(path: str | None) -> dict:
    """Return the request stored at ``path`` or the bundled sample."""

    if path is None:
        return sample_request()
    return json.loads(Path(path).read_text(encoding="utf8"))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(__doc__)
    parser.add_argument(
        "request_path",
        nargs="?",
        help="Path to a JSON request document (defaults to the bundled sample).",
    )
    parser.add_argument(
        "--emit-json",
        metavar="PATH",
        dest="emit_json",
        help="Write the balanced-mode result to PATH as a JSON file.",
    )
    return parser


def main(args: argparse.Namespace | None = None) -> None:
    if args is None:
        args = _build_parser().parse_args()

    document = load_request(args.request_path)
    optimizer = ParetoOptimizer()
    for mode in SelectionMode:
        request = dict(document, selection_mode=mode.value)
        if mode is SelectionMode.UTILITY and "preferences" not in request:
            request["preferences"] = {"quality": 0.6, "cost": 0.2, "latency": 0.2}
        result = optimizer.optimize(request)
        print(f"[{mode.value}] recommended {result.recommended.variant_id}")

    result = optimizer.optimize(document)
    print()
    print(markdown_exporter(result.as_dict()))

    if args.emit_json:
        destination = Path(args.emit_json)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(
            json.dumps(result.as_dict(), indent=2, sort_keys=True),
            encoding="utf8",
        )
        print(f"Result written to {destination}")


if __name__ == "__main__":
    main()
