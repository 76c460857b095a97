"""Command line entry point."""
import sys
import asyncio
import argparse
from pathlib import Path
from typing import List, Optional

from statementlens.config.manager import Config, ConfigManager
from statementlens.config.settings import get_settings
from statementlens.export.csv_export import write_csv
from statementlens.export.report import render_ledger, render_summary
from statementlens.extraction.client import ExtractionClient
from statementlens.session.previews import TempFilePreviews
from statementlens.session.state import SessionPhase
from statementlens.session.store import SessionStore
from statementlens.utils.logger import configure_logging, get_logger
from statementlens.utils.exceptions import ConfigError

logger = get_logger()


def _load_and_validate_config(model_name: Optional[str] = None) -> Config:
    """Load the user configuration or raise ConfigError."""
    config_manager = ConfigManager()
    try:
        config = config_manager.load_config()
    except RuntimeError as e:
        raise ConfigError(str(e)) from e

    if not config:
        raise ConfigError(
            f"No configuration found. Set GEMINI_API_KEY or create {config_manager.config_file}"
        )

    if model_name:
        config.model_name = model_name

    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        raise ConfigError(f"Invalid configuration: {message}")

    return config


def check_config_command() -> int:
    try:
        config = _load_and_validate_config()
    except ConfigError as e:
        print(f"✗ {e}")
        return 1

    print("✓ Configuration is valid")
    print(f"  Model: {config.model_name}")
    print(f"  Max file size: {config.max_file_size_mb} MB")
    return 0


async def run_extraction(
    files: List[Path],
    config: Config,
    csv_path: Optional[Path] = None,
    extractor: Optional[ExtractionClient] = None,
) -> int:
    """Queue ``files``, submit once and print the outcome."""
    extractor = extractor or ExtractionClient(config)
    previews = TempFilePreviews(get_settings().previews_path)

    with SessionStore(
        extractor,
        previews=previews,
        max_size_bytes=config.max_file_size_mb * 1024 * 1024,
    ) as store:
        await store.add_files(files)
        if not store.state.queued_files:
            print(f"✗ {store.state.error or 'No files to process'}")
            return 1

        print(f"Processing {len(store.state.queued_files)} file(s)...")
        for queued in store.state.queued_files:
            kind = "image" if queued.is_image else "PDF"
            print(f"  {queued.display_name} ({kind}, {queued.size_bytes} bytes)")
        await store.submit()

        state = store.state
        if state.phase is SessionPhase.FAILED:
            print(f"✗ {state.error}")
            return 1

        print()
        print(render_summary(state.result.summary))
        print()
        print(render_ledger(state.result))

        if csv_path is not None:
            written = write_csv(state.result.transactions, csv_path)
            print(f"\n✓ CSV written to {written}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for StatementLens."""
    parser = argparse.ArgumentParser(description="StatementLens bank statement extraction")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser("extract", help="Extract transactions from statements")
    extract_parser.add_argument("files", nargs="+", type=Path, help="Statement images or PDFs")
    extract_parser.add_argument("--csv", type=Path, help="Write the ledger as CSV to this file or directory")
    extract_parser.add_argument("--model", help="Override the configured model name")

    subparsers.add_parser("check-config", help="Validate the saved configuration")

    args = parser.parse_args(argv)

    if args.command == "check-config":
        return check_config_command()

    try:
        config = _load_and_validate_config(args.model)
    except ConfigError as e:
        logger.critical(str(e))
        return 1

    configure_logging(config.log_level)

    try:
        return asyncio.run(run_extraction(args.files, config, args.csv))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        return 130


if __name__ == "__main__":
    sys.exit(main())
