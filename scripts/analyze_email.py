from __future__ import annotations

import argparse
import json
from email import policy
from email.parser import BytesParser
from pathlib import Path
from typing import List

from outlook_ai.ai.enhancer import build_enhancer
from outlook_ai.config.settings import load_settings
from outlook_ai.models import EmailText
from outlook_ai.parsing.adapters import email_text_from_message, email_text_from_request
from outlook_ai.pipeline.batch import analyze_batch


def load_emails(path: Path) -> List[EmailText]:
    """Read one .eml file, or a JSON object / list in the API request shape."""
    if path.suffix.lower() == ".eml":
        with path.open("rb") as fh:
            msg = BytesParser(policy=policy.default).parse(fh)
        return [email_text_from_message(msg)]

    data = json.loads(path.read_text(encoding="utf-8"))
    items = data if isinstance(data, list) else [data]
    emails: List[EmailText] = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"Expected JSON objects in {path}, got {type(item).__name__}")
        emails.append(email_text_from_request(item))
    return emails


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the heuristic email analyzer on local files.")
    parser.add_argument("paths", nargs="+", type=Path, help=".eml or .json files")
    parser.add_argument("--enhance", action="store_true", help="Use the configured OpenAI enhancer.")
    args = parser.parse_args()

    settings = load_settings()
    enhancer = build_enhancer(settings) if args.enhance else None
    if args.enhance and enhancer is None:
        print("[WARN] AI enhancement requested but not configured (ENABLE_AI_ANALYSIS / OPENAI_API_KEY).")

    emails: List[EmailText] = []
    for path in args.paths:
        if not path.exists():
            raise FileNotFoundError(f"Missing input: {path}")
        emails.extend(load_emails(path))

    results = analyze_batch(
        emails,
        enhancer,
        concurrency=settings.batch_concurrency,
        pause_seconds=settings.batch_pause_seconds,
    )
    print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
