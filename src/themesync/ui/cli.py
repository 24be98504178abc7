from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from themesync.app import (
    format_theme,
    revoke_token,
    sync_theme,
    theme_attributes,
    token_info,
    update_style,
    update_theme,
)
from themesync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from themesync.domain.theme_sync import (
        StyleUpdateResult,
        ThemeAttributeView,
        ThemeColorways,
        ThemeUpdateResult,
    )

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid id: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"Id must be a positive integer: {value}")
    return parsed


def _non_blank(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("Value must not be blank")
    return value.strip()


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="themesync", description="Synchronise PLM theme attributes onto colorways"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    theme = subparsers.add_parser("theme", help="List a theme's colorways grouped by style")
    theme.add_argument("--theme-id", type=_positive_int, required=True, help="PLM theme id")

    attributes = subparsers.add_parser(
        "theme-attributes",
        help="Show the IDM attributes resolved for a theme",
    )
    attributes.add_argument("--theme-id", type=_positive_int, required=True, help="PLM theme id")

    theme_update = subparsers.add_parser(
        "theme-update",
        help="Write theme attributes to all colorways of a theme and reconcile styles",
    )
    theme_update.add_argument(
        "--theme-id", type=_positive_int, required=True, help="PLM theme id"
    )

    style_update = subparsers.add_parser(
        "style-update",
        help="Write theme attributes to all colorways of a style and reconcile it",
    )
    style_update.add_argument(
        "--style-id", type=_positive_int, required=True, help="PLM style id"
    )

    theme_format = subparsers.add_parser(
        "theme-format",
        help="Print the flat attribute report for a classification PID",
    )
    theme_format.add_argument(
        "--pid",
        type=_non_blank,
        required=True,
        help="IDM classification PID, e.g. Theme_Attributes-42-1-LATEST",
    )

    token = subparsers.add_parser("token", help="Acquire an access token and show its expiry")
    token.add_argument(
        "--revoke",
        action="store_true",
        help="Revoke the acquired token at the provider",
    )

    return parser.parse_args(list(argv))


def _theme_payload(collected: ThemeColorways) -> dict[str, Any]:
    return {
        "theme_id": collected.theme_id,
        "theme": asdict(collected.theme) if collected.theme is not None else None,
        "total_colorways": collected.total_colorways,
        "total_styles": collected.total_styles,
        "by_style": {
            str(style_id): [asdict(colorway) for colorway in colorways]
            for style_id, colorways in collected.by_style.items()
        },
    }


def _theme_attributes_payload(view: ThemeAttributeView) -> dict[str, Any]:
    attributes = view.attributes
    return {
        **_theme_payload(view.collected),
        "classification": (
            asdict(attributes.classification) if attributes.classification is not None else None
        ),
        "attribute_count": len(attributes.attributes),
        "value_list_count": len(attributes.value_lists),
        "mapped_count": sum(1 for attribute in attributes.mapped if attribute.mapped),
        "mapped": [asdict(attribute) for attribute in attributes.mapped],
        "error": attributes.error,
    }


def _theme_update_payload(result: ThemeUpdateResult) -> dict[str, Any]:
    return {
        "success": result.success,
        "theme_id": result.theme_id,
        "theme": asdict(result.theme) if result.theme is not None else None,
        "total_styles": result.total_styles,
        "successful_styles": result.successful_styles,
        "failed_styles": result.failed_styles,
        "total_updated_colorways": result.total_updated_colorways,
        "styles_updated": result.styles_updated,
        "patch_results": [asdict(item) for item in result.patch_results],
        "reconciliations": [asdict(item) for item in result.reconciliations],
    }


def _style_update_payload(result: StyleUpdateResult) -> dict[str, Any]:
    return {
        "style": asdict(result.style),
        "total_colorways": result.total_colorways,
        "updated_colorways": result.updated_colorways,
        "unique_themes": result.unique_themes,
        "skipped_colorway_ids": result.skipped_colorway_ids,
        "reconciliation": asdict(result.reconciliation),
    }


def _emit(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, default=str, ensure_ascii=False, indent=2))
    sys.stdout.write("\n")


def _error_payload(exc: BaseException) -> dict[str, Any]:
    kind = getattr(exc, "kind", None) or type(exc).__name__
    return {"success": False, "error": kind, "message": str(exc)}


def _dispatch(args: argparse.Namespace) -> tuple[dict[str, Any], int]:
    if args.command == "theme":
        return {"success": True, **_theme_payload(sync_theme(args.theme_id))}, 0
    if args.command == "theme-attributes":
        view = theme_attributes(args.theme_id)
        return {"success": view.attributes.ok, **_theme_attributes_payload(view)}, 0
    if args.command == "theme-update":
        result = update_theme(args.theme_id)
        return _theme_update_payload(result), 0 if result.success else 1
    if args.command == "style-update":
        style_result = update_style(args.style_id)
        if style_result is None:
            return {
                "success": False,
                "error": "not_found",
                "message": f"Style {args.style_id} not found",
            }, 1
        return {"success": True, **_style_update_payload(style_result)}, 0
    if args.command == "theme-format":
        return {"success": True, **asdict(format_theme(args.pid))}, 0
    if args.command == "token":
        info = revoke_token() if args.revoke else token_info()
        return {"success": True, **asdict(info)}, 0
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    signal(SIGINT, sigint_handler)

    try:
        payload, exit_code = _dispatch(parsed_args)
    except Exception as exc:
        log.exception("Command %s failed", parsed_args.command)
        _emit(_error_payload(exc))
        sys.exit(1)

    _emit(payload)
    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
