"""Command line entry point: ``chipjax <rom>``."""

import argparse
import os
import sys
from typing import Optional, Sequence

import jax
from omegaconf.errors import OmegaConfBaseException

from chipjax.config import load_config
from chipjax.emulator import load_rom
from chipjax.errors import Chip8Error, RomLoadError
from chipjax.logging import ConsoleLogger
from chipjax.state import create_state

CONFIG_ENV_VAR = "CHIPJAX_CONFIG"


def read_rom(path: str) -> bytes:
    """Read a ROM image from disk; raises RomLoadError if unreadable or empty."""
    try:
        with open(path, "rb") as f:
            rom = f.read()
    except OSError as e:
        raise RomLoadError(f"Could not read ROM '{path}': {e.strerror or e}") from e
    if not rom:
        raise RomLoadError(f"ROM '{path}' is empty")
    return rom


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipjax",
        description="CHIP-8 interpreter. "
                    f"Set {CONFIG_ENV_VAR} to a YAML file to change speed, scale or colors.",
    )
    parser.add_argument("rom", nargs="?", help="path to a CHIP-8 ROM image")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.rom is None:
        parser.print_usage()
        return 0

    logger = ConsoleLogger()
    config_path = os.environ.get(CONFIG_ENV_VAR)
    try:
        config = load_config(config_path)
    except (OSError, ValueError, OmegaConfBaseException) as e:
        logger.error(f"Invalid configuration {config_path!r}: {e}")
        return 1
    logger.set_level(config.log_level)
    logger.log_config(config)

    logger.info(f"Reading ROM: {args.rom}")
    try:
        rom = read_rom(args.rom)
        state = load_rom(create_state(jax.random.PRNGKey(config.seed)), rom)
    except RomLoadError as e:
        logger.error(str(e))
        return 1
    logger.info(f"Loaded {len(rom)} bytes, starting emulator")

    # pygame is only needed once there is something to show
    from chipjax.frontend import run_emulator

    try:
        run_emulator(state, config, logger)
    except Chip8Error as e:
        logger.error(f"Emulation stopped: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
