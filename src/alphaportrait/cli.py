"""
Headless front-end: enhance one portrait without opening the window.

Usage:
  alphaportrait --input portrait.jpg --output sony-alpha-portrait.png
  alphaportrait -i portrait.heic -o out.jpg --mime image/heic --model gemini-2.5-flash-image

Reads the API key from GEMINI_API_KEY (or API_KEY).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional

from alphaportrait.app.export import DEFAULT_EXPORT_NAME, save_data_uri
from alphaportrait.core.config import EnhancerConfig
from alphaportrait.core.data_uri import guess_mime_type, read_file_as_data_uri
from alphaportrait.core.errors import ConfigError, EnhancementError
from alphaportrait.core.logging_setup import configure_logging
from alphaportrait.enhance.client import EnhancementClient

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Re-render a portrait as if shot on a Sony A1 with an 85mm f1.4 lens.")
    p.add_argument("--input", "-i", required=True, help="Path to the source portrait")
    p.add_argument("--output", "-o", default=DEFAULT_EXPORT_NAME, help=f"Where to write the result (default: {DEFAULT_EXPORT_NAME})")
    p.add_argument("--mime", default=None, help="MIME type of the input (default: guessed from the extension)")
    p.add_argument("--model", default=None, help="Gemini image model to call")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return p


def main(argv: Optional[list[str]] = None, client: Optional[EnhancementClient] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    if client is None:
        try:
            config = EnhancerConfig.from_env()
        except ConfigError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2
        if args.model:
            config = replace(config, model_name=args.model)
        client = EnhancementClient(config)

    try:
        mime = args.mime or guess_mime_type(args.input)
        source = read_file_as_data_uri(args.input, mime)
        enhanced = client.enhance(source, mime)
        out = save_data_uri(enhanced, args.output)
    except (EnhancementError, OSError) as e:
        logger.debug("Enhancement failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Saved: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
