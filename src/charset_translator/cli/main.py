"""Main CLI entry point for the charset-translator command-line tool.

Translates one file from a source encoding to a target encoding, reporting
each failure category with its own message and exit code.
"""

import argparse
import logging
import os
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional

from charset_translator import __version__
from charset_translator.charset.lookup import available_encodings
from charset_translator.shared.config import (
    ConfigError,
    TranslationConfig,
    load_config_data,
)
from charset_translator.shared.errors import (
    MalformedInputError,
    ReadFailureError,
    TranslationError,
    UnmappableCharacterError,
    WriteFailureError,
)
from charset_translator.shared.logging import get_logger

STDIO_PATH = "-"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_MALFORMED_INPUT = 3
EXIT_UNMAPPABLE_CHARACTER = 4
EXIT_CANCELLED = 130  # Standard exit code for SIGINT

USAGE_ERROR_CATEGORIES = {
    "invalid_argument",
    "unknown_encoding",
    "invalid_encoding_name",
}

logger = get_logger(__name__, component="cli")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="charset-translator",
        description="Translate a file from one character encoding to another",
    )
    parser.add_argument("--version", action="version", version=__version__)

    parser.add_argument(
        "source",
        nargs="?",
        help=f"File to translate ('{STDIO_PATH}' for stdin)"
    )
    parser.add_argument(
        "source_encoding",
        nargs="?",
        help="Character encoding of the source file"
    )
    parser.add_argument(
        "target",
        nargs="?",
        help=f"File to write ('{STDIO_PATH}' for stdout)"
    )
    parser.add_argument(
        "target_encoding",
        nargs="?",
        help="Character encoding of the target file"
    )
    parser.add_argument(
        "--xmlcharref", "-x",
        action="store_true",
        help="Replace unrepresentable characters with &#N; references"
    )
    parser.add_argument(
        "--buffer-size", "-b",
        type=int,
        help="Characters decoded per chunk (default: 4096)"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON file with use_reference_substitution and buffer_size settings"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite the target file if it exists"
    )
    parser.add_argument(
        "--list-encodings",
        action="store_true",
        help="List the available encodings and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )
    return parser


def build_config(args: argparse.Namespace) -> TranslationConfig:
    """Merge the optional config file with command-line values.

    Command-line values take precedence over the file.
    """
    data: Dict[str, Any] = {}
    if args.config:
        data = load_config_data(args.config)

    data["source_encoding"] = args.source_encoding
    data["target_encoding"] = args.target_encoding
    if args.xmlcharref:
        data["use_reference_substitution"] = True
    if args.buffer_size is not None:
        data["buffer_size"] = args.buffer_size
    return TranslationConfig.from_dict(data)


def check_paths(source: str, target: str, force: bool) -> Optional[str]:
    """Return a reason to refuse the translation, or None if paths are fine."""
    if source != STDIO_PATH:
        source_path = Path(source)
        if not source_path.is_file() or not os.access(source_path, os.R_OK):
            return f"Cannot read source file: {source}"

    if target == STDIO_PATH:
        return None

    target_path = Path(target)
    if source != STDIO_PATH and target_path.exists():
        if target_path.resolve() == Path(source).resolve():
            return "Source and target must be different files"
    if target_path.exists() and not force:
        return f"Target file exists (use --force to overwrite): {target}"
    return None


def describe_failure(error: TranslationError) -> str:
    """Return a user-facing message for a failed translation."""
    if isinstance(error, (ReadFailureError, WriteFailureError)) and error.interrupted:
        return "Translation was canceled."
    if isinstance(error, MalformedInputError):
        return (
            f"The source contains bytes that are not valid {error.encoding}"
            f" (byte offset {error.position}). Check the source encoding."
        )
    if isinstance(error, UnmappableCharacterError):
        return (
            f"The source contains characters that cannot be represented in "
            f"{error.encoding} ({error}). Use --xmlcharref to substitute them."
        )
    return f"Translation failed: {error}"


def exit_code_for(error: TranslationError) -> int:
    """Map a failure category to the process exit code."""
    if isinstance(error, (ReadFailureError, WriteFailureError)) and error.interrupted:
        return EXIT_CANCELLED
    if isinstance(error, MalformedInputError):
        return EXIT_MALFORMED_INPUT
    if isinstance(error, UnmappableCharacterError):
        return EXIT_UNMAPPABLE_CHARACTER
    if error.category in USAGE_ERROR_CATEGORIES:
        return EXIT_USAGE
    return EXIT_FAILURE


def _open_source(stack: ExitStack, source: str) -> BinaryIO:
    if source == STDIO_PATH:
        return sys.stdin.buffer
    return stack.enter_context(open(source, "rb"))


def _open_target(stack: ExitStack, target: str) -> BinaryIO:
    if target == STDIO_PATH:
        return sys.stdout.buffer
    return stack.enter_context(open(target, "wb"))


def cmd_list_encodings() -> int:
    """Handle --list-encodings."""
    for name in available_encodings():
        print(name)
    return EXIT_OK


def cmd_translate(args: argparse.Namespace) -> int:
    """Translate args.source into args.target."""
    try:
        config = build_config(args)
        translator = config.create_translator()
    except (ConfigError, TranslationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    refusal = check_paths(args.source, args.target, args.force)
    if refusal:
        print(f"Error: {refusal}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        with ExitStack() as stack:
            source = _open_source(stack, args.source)
            sink = _open_target(stack, args.target)
            metrics = translator.translate(source, sink)
    except TranslationError as e:
        logger.debug("Translation failed", extra={"category": e.category})
        print(describe_failure(e), file=sys.stderr)
        return exit_code_for(e)
    except OSError as e:
        logger.exception("Could not open files")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if not args.quiet:
        print(
            f"Translated {metrics.characters_processed} characters "
            f"({translator}), {metrics.references_substituted} references substituted",
            file=sys.stderr,
        )
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    if args.list_encodings:
        return cmd_list_encodings()

    positionals = (args.source, args.source_encoding, args.target, args.target_encoding)
    if any(value is None for value in positionals):
        parser.print_usage(sys.stderr)
        print(
            "Error: source, source_encoding, target and target_encoding are required",
            file=sys.stderr,
        )
        return EXIT_USAGE

    try:
        return cmd_translate(args)
    except KeyboardInterrupt:
        print("\nTranslation was canceled.", file=sys.stderr)
        return EXIT_CANCELLED


if __name__ == "__main__":
    sys.exit(main())
