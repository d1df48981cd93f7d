"""Command-line entry point for sending content to a Quote/0 display."""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import DEVICE_ENV_VAR, TOKEN_ENV_VAR, AppConfig
from .logger import configure_logging
from .quote0 import (
    BorderColor,
    DitherKernel,
    DitherType,
    ImageRequest,
    Quote0Error,
    TextRequest,
    create_quote0_client,
)
from .quote0.utils import auto_signature, encode_base64, read_image_file


class CliError(Exception):
    """Invalid command-line usage."""
    pass


def _upper(value: str) -> str:
    return value.strip().upper()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with text and image subcommands."""
    parser = argparse.ArgumentParser(prog="quote0", description="Quote/0 SDK command-line tool")
    subparsers = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--token", help=f"API token (or set {TOKEN_ENV_VAR})")
    common.add_argument("--device", help=f"Device serial (or set {DEVICE_ENV_VAR})")
    common.add_argument("--link", help="Optional URL")
    common.add_argument("--refresh", action=argparse.BooleanOptionalAction, default=True,
                        help="Set refreshNow (default: true)")
    common.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    text = subparsers.add_parser("text", parents=[common], help="Send a text layout")
    text.add_argument("--title", help="Title (first line)")
    text.add_argument("--message", help="Message (next three lines)")
    text.add_argument("--signature", help="Signature (bottom-right corner)")
    text.add_argument("--auto-signature", action="store_true",
                      help="Use hostname@MM-DD HH:MM:SS if --signature is empty")
    icon = text.add_mutually_exclusive_group()
    icon.add_argument("--icon", help="Base64 40x40 PNG icon")
    icon.add_argument("--icon-file", help="Path to 40x40 PNG icon")

    image = subparsers.add_parser("image", parents=[common], help="Send a 296x152 image")
    source = image.add_mutually_exclusive_group(required=True)
    source.add_argument("--image", help="Base64 296x152 PNG")
    source.add_argument("--image-file", help="Path to 296x152 PNG (encoded internally)")
    image.add_argument("--border", type=int, choices=[c.value for c in BorderColor],
                       help="Screen edge color: 0=white, 1=black")
    image.add_argument("--dither-type", type=_upper, choices=[d.value for d in DitherType],
                       help="Dither type (default on server: DIFFUSION with FLOYD_STEINBERG)")
    image.add_argument("--dither-kernel", type=_upper, choices=[k.value for k in DitherKernel],
                       help="Dither kernel; only effective when dither type is DIFFUSION")

    return parser


def _load_config(args: argparse.Namespace) -> AppConfig:
    try:
        config = AppConfig.from_env(api_token=args.token, device_id=args.device, log_level=args.log_level)
    except ValidationError as e:
        raise CliError(e.errors()[0]["msg"]) from e
    if not config.quote0.device_id:
        raise CliError(f"missing device serial (use --device or {DEVICE_ENV_VAR})")
    return config


def run_text(args: argparse.Namespace, config: AppConfig) -> str:
    """Send a text request and return the summary line."""
    icon = args.icon
    if args.icon_file:
        icon = encode_base64(read_image_file(args.icon_file))

    signature = (args.signature or "").strip()
    if not signature and args.auto_signature:
        signature = auto_signature()

    client = create_quote0_client(config=config.quote0)
    response = client.send_text(TextRequest(
        refresh_now=args.refresh,
        title=args.title,
        message=args.message,
        signature=signature,
        icon=icon,
        link=args.link,
    ))
    return f"Text sent (code={response.code} message={response.message})"


def run_image(args: argparse.Namespace, config: AppConfig) -> str:
    """Send an image request and return the summary line."""
    request = ImageRequest(
        refresh_now=args.refresh,
        image=args.image or "",
        image_path=args.image_file,
        link=args.link,
        border=BorderColor(args.border) if args.border is not None else None,
        dither_type=DitherType(args.dither_type) if args.dither_type else None,
        dither_kernel=DitherKernel(args.dither_kernel) if args.dither_kernel else None,
    )

    client = create_quote0_client(config=config.quote0)
    response = client.send_image(request)
    return f"Image sent (code={response.code} message={response.message})"


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        return 1

    try:
        config = _load_config(args)
        configure_logging(config)
        logging.getLogger(__name__).debug(f"Running '{args.command}' command")

        if args.command == "text":
            summary = run_text(args, config)
        else:
            summary = run_image(args, config)
    except (CliError, Quote0Error) as e:
        message = str(e)
        if not message.startswith("quote0:"):
            message = f"quote0: {message}"
        print(message, file=sys.stderr)
        return 1

    print(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
