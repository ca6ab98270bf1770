"""
CLI entrypoint for the audience picker.

This script performs the following steps:
- loads .env (if present) and configs/picker.yaml
- creates a per-session output folder under outputs/
- loads the catalog through the configured source (file, HTTP or mock)
- hydrates a saved selection (optional) and mounts the restricted view
- applies the toggle/expand actions given on the command line
- logs a human-readable summary and saves the selection JSON

With --onboarding the actions drive the four-step onboarding flow instead
(``next`` advances a step) and the combined payload is saved.
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from application import (
    AudiencePicker,
    OnboardingFlow,
    apply_actions,
    apply_onboarding_actions,
    log_selection_summary,
    parse_action,
    serialize_selection,
)
from application.constants import LOG_FILENAME, ONBOARDING_FILENAME, SELECTION_FILENAME
from infrastructure.catalog_sources import make_catalog_source
from infrastructure.config import load_picker_config
from infrastructure.constants import PICKER_CONFIG_FILE
from infrastructure.io import ensure_exists, read_selection, write_json
from infrastructure.observability import configure_logging, make_session_tag, set_log_context

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run the audience taxonomy picker")
    p.add_argument(
        "--config",
        type=str,
        default=str(PICKER_CONFIG_FILE),
        help="Path to picker.yaml (default: configs/picker.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file, loaded if it exists (default: .env)",
    )
    p.add_argument(
        "--mock",
        action="store_true",
        help="Use the built-in demo catalog instead of the configured source.",
    )
    p.add_argument(
        "--onboarding",
        action="store_true",
        help="Run the four-step onboarding flow; use -a next to move to the next step.",
    )
    p.add_argument(
        "--action",
        "-a",
        action="append",
        default=[],
        metavar="ACTION",
        help=(
            "Toggle LEVEL:ID, expand expand:LEVEL:SCOPE:ID (expand:identity:ID) or, with --onboarding, next. "
            "Repeatable; applied in order."
        ),
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    return p.parse_args()


def main() -> None:
    args = _parse_args()

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path = Path(args.config)
    ensure_exists(config_path, "picker.yaml")
    cfg = load_picker_config(config_path)

    # Parse actions before touching any source so typos fail fast
    actions = [parse_action(a) for a in args.action]

    # ---- Per-session output folder ----
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    source_name = "mock" if args.mock else cfg.source.value
    run_kind = "onboarding" if args.onboarding else cfg.rollup_mode.value
    session_id = f"{ts}_{source_name}_{cfg.node_mode.value}_{run_kind}"

    session_dir = cfg.output_dir / session_id
    session_dir.mkdir(parents=True, exist_ok=True)

    log_path = session_dir / LOG_FILENAME
    configure_logging(
        log_file=log_path,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )
    set_log_context(session_id_full=session_id, track="onboarding" if args.onboarding else "picker", source=source_name)

    logger.info("Starting session: session_id=%s (tag=%s)", session_id, make_session_tag(session_id))
    logger.info("Session output directory: %s", session_dir)

    source = make_catalog_source(cfg, use_mock=bool(args.mock))
    try:
        catalog = source.load()
    finally:
        source.close()

    if args.onboarding:
        flow = OnboardingFlow(catalog, cfg=cfg.onboarding)
        apply_onboarding_actions(flow, actions)
        payload_path = write_json(session_dir / ONBOARDING_FILENAME, flow.build_payload())

        logger.info("--- Artifacts ---")
        logger.info("Onboarding JSON: %s", payload_path)
        logger.info("Detailed log: %s", log_path)
        return

    initial = read_selection(cfg.selection_file) if cfg.selection_file is not None else None

    picker = AudiencePicker(
        catalog,
        policy=cfg.selection,
        view=cfg.view,
        rollup_mode=cfg.rollup_mode,
        initial=initial,
    )
    picker.mount()

    apply_actions(picker, actions)

    log_selection_summary(picker)
    selection_path = serialize_selection(picker, session_dir / SELECTION_FILENAME)

    logger.info("--- Artifacts ---")
    logger.info("Selection JSON: %s", selection_path)
    logger.info("Detailed log: %s", log_path)


if __name__ == "__main__":
    main()
