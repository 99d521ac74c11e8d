"""Entry point — wires Config → CredentialStore → VisionClient."""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from turnover.config import Config
from turnover.constants import (
    MSG_HINT_RETRY,
    MSG_HINT_SETTINGS,
    MSG_KEY_CLEARED,
    MSG_KEY_SAVED,
    MSG_PHOTO_NOT_FOUND,
)
from turnover.credential_store import CredentialStore
from turnover.models import AnalysisResult
from turnover.vision.client import VisionClient
from turnover.vision.errors import AnalysisError
from turnover.vision.mock import MockVisionClient
from turnover.vision.openai import OpenAIVisionClient

console = Console()


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_client(config: Config, store: CredentialStore, use_mock: bool = False) -> VisionClient:
    match use_mock or config.use_mock:
        case True:
            return MockVisionClient()
        case False:
            client = OpenAIVisionClient.from_config(config, store=store)
            client.load_credential()
            return client


def render_result(result: AnalysisResult) -> Table:
    table = Table(title=result.name, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Category", result.category)
    table.add_row("Condition", result.condition.display_name)
    table.add_row("Estimated value", f"${result.estimated_value:,.2f}")
    table.add_row("Confidence", f"{result.confidence_score:.0%}")
    table.add_row("Description", result.description)
    table.add_row("Insights", result.insights)
    return table


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="turnover",
        description="Identify, grade and value an item from a photo.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Analyze a JPEG photo")
    analyze.add_argument("photo", type=Path)
    analyze.add_argument("--mock", action="store_true", help="Use the offline result")
    analyze.add_argument("--json", action="store_true", help="Print the result as JSON")

    set_key = commands.add_parser("set-key", help="Save the OpenAI API key")
    set_key.add_argument("key")

    commands.add_parser("clear-key", help="Remove the saved API key")
    return parser.parse_args(argv)


async def _analyze(client: VisionClient, photo: Path, as_json: bool) -> int:
    if not photo.is_file():
        console.print(MSG_PHOTO_NOT_FOUND % photo, style="red")
        return 1
    try:
        result = await client.analyze(photo.read_bytes())
    except AnalysisError as exc:
        hint = MSG_HINT_SETTINGS if exc.kind.needs_settings else MSG_HINT_RETRY
        console.print(exc.user_message, style="red")
        console.print(hint)
        return 1
    match as_json:
        case True:
            console.print_json(json.dumps(result.as_dict()))
        case False:
            console.print(render_result(result))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = Config.from_env()
    _setup_logging(config.log_level)
    store = CredentialStore(config.credential_path)

    match args.command:
        case "set-key":
            store.save(args.key)
            console.print(MSG_KEY_SAVED % store.path)
            return 0
        case "clear-key":
            store.clear()
            console.print(MSG_KEY_CLEARED % store.path)
            return 0
        case _:
            client = build_client(config, store, use_mock=args.mock)
            return asyncio.run(_analyze(client, args.photo, args.json))


if __name__ == "__main__":
    sys.exit(main())
