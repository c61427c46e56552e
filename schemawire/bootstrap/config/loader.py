import argparse
import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="schemawire",
        description=(
            "Frame JSON values for a message broker.\n\n"
            "Each line read from stdin is a JSON value. It is encoded, optionally\n"
            "validated against its schema, and written as a registry envelope\n"
            "(magic byte, schema id, document) printed in hexadecimal."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a schemawire configuration file"
    )

    parser.add_argument(
        "-t", "--topic",
        type=str,
        required=True,
        help="Topic the records are meant for. The registry subject derives from it."
    )

    parser.add_argument(
        "-s", "--schema",
        type=str,
        required=True,
        help="Path to the JSON schema file describing the records"
    )

    parser.add_argument(
        "-k", "--key",
        action="store_true",
        help="Frame the values as record keys ('<topic>-key' subject)"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "DEBUG    → registry calls and cache hits.\n"
            "WARNING  → compatibility issues tolerated by the configuration (default).\n"
        ),
    )

    return parser.parse_args()


@lru_cache
def get_configfile() -> Path | None:
    args = get_cli_args()

    # Priority: CLI > ENV > default file in current working directory
    raw = args.config or os.getenv("SCHEMAWIRECONFIG")

    if raw is None:
        file = Path.cwd() / "schemawire.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the SCHEMAWIRECONFIG environment variable\n"
            "  - Or place a 'schemawire.yaml' file in the current working directory."
        )

    return file
