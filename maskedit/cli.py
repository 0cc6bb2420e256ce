#!/usr/bin/env python3
"""
maskedit CLI entry point: type text through a mask and print the result
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from pathlib import Path

from evdev import ecodes

from maskedit.__version__ import __version__
from maskedit.config import DEFAULT_CONFIG, load_config, validate_config
from maskedit.errors import MaskError

# Global logger instance
logger = None

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def setup_logging(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Setup logging to stderr and, optionally, a rotating file

    Args:
        debug: Enable debug level logging
        log_file: Path to log file (no file logging when omitted)
    """
    global logger

    if logger is not None:
        return logger

    logger = logging.getLogger('maskedit')
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-8s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_file is not None:
        log_path = Path(os.path.expanduser(log_file))
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=1024 * 1024,  # 1 MB
                backupCount=3
            )
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(fmt)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    # Console handler (only warnings in production, all in debug)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='maskedit',
        description='Type text through an input mask and print the masked field',
    )
    parser.add_argument('keys', nargs='?', default='',
                        help='Characters to type, one key event each')
    parser.add_argument('--mask', default=None, help="Mask pattern, e.g. '(000) 000-0000'")
    parser.add_argument('--placeholder', default=None, help='Character shown for empty slots')
    parser.add_argument('--filter', dest='filter_category', default=None,
                        help='Filter category: any, digits, letters, alphanumeric, hexadecimal, custom')
    parser.add_argument('--filter-pattern', default=None, help='Regular expression for --filter custom')
    parser.add_argument('--set', dest='initial', default=None, help='Initial field text')
    parser.add_argument('--overtype', action='store_true', help='Start in overtype mode')
    parser.add_argument('--config', default=None, help='Path to config file')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--logfile', default=None, help='Path to log file')
    parser.add_argument('--version', action='version', version='%(prog)s ' + __version__)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict:
    """Merge file configuration with command-line overrides."""
    config = load_config(args.config) if args.config else dict(DEFAULT_CONFIG)
    overrides = {
        'mask': args.mask,
        'placeholder': args.placeholder,
        'filter': args.filter_category,
        'filter_pattern': args.filter_pattern,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})
    if args.overtype:
        config['overtype'] = True
    if args.debug:
        config['debug'] = True
    return validate_config(config)


def key_events(text: str) -> list:
    """Synthesize evdev press/release events that type *text*."""
    from evdev import InputEvent

    from maskedit.input.key_mapper import char_to_keycode

    events = []
    for ch in text:
        mapped = char_to_keycode(ch)
        if mapped is None:
            logging.getLogger(__name__).warning("No key types %r, skipped", ch)
            continue
        code, shifted = mapped
        if shifted:
            events.append(InputEvent(0, 0, ecodes.EV_KEY, ecodes.KEY_LEFTSHIFT, 1))
        events.append(InputEvent(0, 0, ecodes.EV_KEY, code, 1))
        events.append(InputEvent(0, 0, ecodes.EV_KEY, code, 0))
        if shifted:
            events.append(InputEvent(0, 0, ecodes.EV_KEY, ecodes.KEY_LEFTSHIFT, 0))
    return events


def main(argv: list[str] | None = None) -> int:
    """Main entry point for maskedit"""
    args = parse_args(argv)
    log = setup_logging(debug=args.debug, log_file=args.logfile)

    # Import after args parsing to avoid import-time side effects
    from maskedit.handlers.edit_controller import EditController
    from maskedit.input.keyboard_host import KeyboardFieldHost

    try:
        config = build_config(args)
        controller = EditController.from_config(config)
    except (MaskError, ValueError) as e:
        log.error("Invalid configuration: %s", e)
        return EXIT_CONFIG_ERROR

    log.debug("Config: %s", config)

    if args.initial is not None:
        controller.set_text(args.initial)

    host = KeyboardFieldHost(controller, overtype=config['overtype'], debug=config['debug'])
    engine = controller.engine
    if engine is not None:
        host.cursor = engine.find_edit_position_from(0) or 0
    else:
        host.cursor = len(controller.text)
    host.feed(key_events(args.keys))

    print(f"display:   {controller.text}")
    print(f"cursor:    {host.cursor}")
    print(f"plain:     {controller.plain_text}")
    print(f"completed: {'yes' if controller.completed else 'no'}")
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
