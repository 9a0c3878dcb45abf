"""
Command line interface for the swipe listener.
"""

import argparse
import sys
import time

import yaml
from evdev.uinput import UInputError

from .config.settings import ConfigError, SwipeConfig, load_config
from .core.libinput import LibinputParser
from .core.listener import SwipeListener
from .device.device_manager import DeviceManager
from .utils.logger import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='swipe-listener',
        description='Map three and four finger touchpad swipes to keyboard shortcuts.',
    )
    parser.add_argument('command', nargs='?', default='start',
                        choices=['start', 'config', 'devices', 'debug'],
                        help='what to do (default: start)')
    parser.add_argument('-c', '--config', help='path to a YAML config file')
    parser.add_argument('-t', '--threshold', type=float, help='swipe distance threshold')
    parser.add_argument('--dispatcher', choices=SwipeConfig.DISPATCHERS,
                        help='how key sequences are sent')
    parser.add_argument('--source', choices=SwipeConfig.SOURCES,
                        help='where swipe events are read from')
    parser.add_argument('--device', help='input device path, e.g. /dev/input/event7')
    parser.add_argument('--dry-run', action='store_true',
                        help='log actions instead of sending keys')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    return parser


def resolve_config(args) -> SwipeConfig:
    """Load the config file and apply command line overrides."""
    config = load_config(args.config)
    if args.threshold is not None:
        if args.threshold < 0:
            raise ConfigError(f"'threshold' must not be negative, got {args.threshold}")
        config.threshold = args.threshold
    if args.dispatcher:
        config.dispatcher = args.dispatcher
    if args.dry_run:
        config.dispatcher = 'log'
    if args.source:
        config.source = args.source
    if args.device:
        config.device = args.device
    return config


def run_listener(config: SwipeConfig) -> int:
    """Run until interrupted."""
    try:
        listener = SwipeListener(config)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    except (OSError, UInputError) as e:
        print(f"❌ Cannot create {config.dispatcher} dispatcher: {e}", file=sys.stderr)
        return 1
    
    if not listener.start():
        return 1
    
    try:
        while listener.running:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
        return 0
    finally:
        listener.stop()
    
    print("❌ Input stream ended unexpectedly", file=sys.stderr)
    return 1


def show_config(config: SwipeConfig) -> int:
    print(f"# {config.path or 'built-in defaults'}")
    print(yaml.safe_dump(config.to_dict(), sort_keys=False), end='')
    return 0


def show_devices() -> int:
    touchpads = DeviceManager().list_touchpads()
    if not touchpads:
        print("❌ No touchpad found")
        return 1
    for device in touchpads:
        print(f"{device.path}\t{device.name}")
        device.close()
    return 0


def debug_events(config: SwipeConfig, stream=None) -> int:
    """Print parsed swipe events from libinput output (stdin by default)."""
    parser = LibinputParser(unaccelerated=config.unaccelerated)
    try:
        for event in parser.parse(stream or sys.stdin):
            print(event)
    except KeyboardInterrupt:
        pass
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    
    try:
        config = resolve_config(args)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    
    if args.command == 'config':
        return show_config(config)
    if args.command == 'devices':
        return show_devices()
    if args.command == 'debug':
        return debug_events(config)
    return run_listener(config)
