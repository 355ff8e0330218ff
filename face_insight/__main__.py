"""Command line entry point for the Face Insight project."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from . import FileImageSource, PipelineOrchestrator, SettingsStore
from .utils.logs import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Face Insight")
    parser.add_argument(
        "--image",
        "-i",
        type=Path,
        help="Photo to analyse in place of a camera capture.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file to load instead of the default location.",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level.",
    )
    parser.add_argument(
        "--imgur-client-id",
        help="Override the configured Imgur client ID.",
    )
    parser.add_argument(
        "--azure-key",
        help="Override the configured Azure Face API subscription key.",
    )
    parser.add_argument(
        "--azure-endpoint",
        help="Override the configured Azure Face API base URL.",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective configuration back to the settings file.",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )

    args = parser.parse_args(argv)

    store = SettingsStore(args.config)
    config = store.load()

    overrides = {
        "log_level": args.log_level,
        "imgur_client_id": args.imgur_client_id,
        "azure_api_key": args.azure_key,
        "azure_endpoint": args.azure_endpoint,
    }
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        try:
            config = config.model_validate({**config.as_dict(), **updates})
        except ValueError as exc:
            parser.error(str(exc))

    if args.save_config:
        store.save(config)

    if args.print_config:
        json.dump(config.as_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    if args.image is None:
        if args.save_config:
            return 0
        parser.error("--image is required unless --print-config or --save-config is given.")

    configure_logging(config.log_level)

    orchestrator = PipelineOrchestrator.from_config(config, FileImageSource(args.image))
    try:
        snapshot = asyncio.run(orchestrator.analyze())
    finally:
        orchestrator.close()

    json.dump(snapshot.as_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 1 if snapshot.error else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
