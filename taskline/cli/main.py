"""CLI entry for taskline with subcommands.

Subcommands:
  run     Run a command under a spinner and report its outcome
  demo    Show a nested build with subtasks
  config  View or update configuration
"""
from __future__ import annotations
import argparse
import logging
import subprocess
import sys
import time
from typing import List, Optional, Tuple

from taskline import __version__
from taskline.core.engine import ProgressEngine, configure_engine
from taskline.core.errors import ConfigError, ProtocolViolation
from taskline.utils.config import config
from taskline.utils.constants import SUPPORTED_STREAMS
from taskline.utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


# --- Helpers shared across subcommands ---

def _engine(args: argparse.Namespace) -> ProgressEngine:
    if getattr(args, 'stream', None):
        config.set('stream', args.stream)
    return configure_engine()


def _split_command(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Separate our own arguments from the wrapped command at the first ``--``."""
    if '--' not in argv:
        return argv, []
    i = argv.index('--')
    return argv[:i], argv[i + 1:]


def _convert_value(value: str):
    lower = value.lower()
    if lower == 'true':
        return True
    if lower == 'false':
        return False
    if lower in ('none', 'null'):
        return None
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def _echo_output(proc: subprocess.CompletedProcess) -> None:
    if proc.stdout:
        sys.stdout.write(proc.stdout)
        sys.stdout.flush()
    if proc.stderr:
        sys.stderr.write(proc.stderr)
        sys.stderr.flush()


# --- Subcommand handlers ---

def cmd_run(args: argparse.Namespace) -> int:
    cmd = list(args.cmd or [])
    if not cmd:
        print("No command given (usage: taskline run MESSAGE [options] -- CMD ...)", file=sys.stderr)
        return 2
    engine = _engine(args)
    # an interrupt or other escaping error fails the task on the way out
    with engine.begin(args.message) as handle:
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            handle.fail(f"{args.message} (command not found: {cmd[0]})")
            return 127
        except OSError as e:
            handle.fail(f"{args.message} ({e.strerror or e})")
            return 126

        code = proc.returncode
        if code == 0:
            handle.pass_(args.done or args.message)
        elif code in args.warn_exit:
            handle.warn(f"{args.message} (exit {code})")
        else:
            handle.fail(f"{args.message} (exit {code})")
    logger.info("Command %s exited with %d", cmd, code)
    if code != 0 or args.show_output:
        _echo_output(proc)
    return code


def cmd_demo(args: argparse.Namespace) -> int:
    engine = _engine(args)
    delay = args.delay
    build = engine.begin("Building")
    time.sleep(delay)
    for name in ("foo.c", "bar.c"):
        step = engine.begin(f"Compiling {name}")
        time.sleep(delay)
        step.pass_(f"Compiled {name}")
    link = engine.begin("Linking")
    time.sleep(delay)
    engine.begin("Linking (resolving symbols)", link)
    time.sleep(delay)
    link.warn("Linked with 1 warning")
    build.pass_("Build complete")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Handle configuration commands."""
    if args.list:
        for key, value in config.settings.items():
            print(f"{key} = {value}")
    elif args.get:
        value = config.get(args.get)
        print(f"{args.get} = {value}")
    elif args.set and args.value is not None:
        value = _convert_value(args.value)
        config.validated(**{args.set: value})
        config.set(args.set, value)
        config.save()
        print(f"Set {args.set} = {value}")
    else:
        print(f"Configuration file: {config.config_file}")
    return 0

# --- Parser construction ---

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='taskline', description='Nested task progress for the terminal')
    p.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    p.add_argument('--log-level', default='WARNING', choices=LOG_LEVELS)
    p.add_argument('--log-file', help='Also write log records to this file')
    p.add_argument('--stream', choices=SUPPORTED_STREAMS, help='Stream the spinner draws on')
    sub = p.add_subparsers(dest='command', required=True)

    # run
    run_p = sub.add_parser('run', help='Run a command under a spinner')
    run_p.add_argument('message', help='Text shown beside the spinner')
    run_p.add_argument('cmd', nargs='*', help='Command to run (after --)')
    run_p.add_argument('--done', help='Final text on success (defaults to MESSAGE)')
    run_p.add_argument('--warn-exit', action='append', type=int, default=[], metavar='CODE',
                       help='Exit code reported as a warning instead of a failure (repeatable)')
    run_p.add_argument('--show-output', action='store_true', help='Echo captured output even on success')

    # demo
    demo_p = sub.add_parser('demo', help='Show a nested build with subtasks')
    demo_p.add_argument('--delay', type=float, default=0.6, help='Seconds each step takes')

    # config management
    config_p = sub.add_parser('config', help='View or update configuration')
    config_p.add_argument('--list', action='store_true', help='List all configuration values')
    config_p.add_argument('--get', metavar='KEY', help='Get specific configuration value')
    config_p.add_argument('--set', metavar='KEY', help='Set configuration value')
    config_p.add_argument('--value', help='Value to set (used with --set)')

    return p

# --- Main entry ---

def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    own_args, wrapped = _split_command(list(sys.argv[1:] if argv is None else argv))
    args = parser.parse_args(own_args)
    if args.command == 'run':
        args.cmd = list(args.cmd or []) + wrapped

    configure_logging(args.log_level, log_file=args.log_file)

    handlers = {
        'run': cmd_run,
        'demo': cmd_demo,
        'config': cmd_config,
    }
    try:
        handler = handlers.get(args.command)
        if handler is None:
            parser.error('Unknown command')
            return
        sys.exit(handler(args))
    except (ProtocolViolation, ConfigError) as e:
        logging.error(f"{e.category.name.lower()} error: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logging.warning("Operation interrupted by user")
        sys.exit(130)
    except Exception as e:
        logging.error(f"Unhandled error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
