# src/primefrac/cli.py

"""
primefrac - prime factorization and decimal-to-fraction reduction

Description:
    Factorizes an integer into primes (1234 -> 2 × 617) or reduces a decimal
    value to a fraction in lowest terms (12.25 -> 49/4 ==> 12 1/4), using a
    table of primes generated once at startup with the Sieve of Eratosthenes.
    The numeric engine checks itself against known answers before any input
    is handled.

usage: see primefrac -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback
from collections.abc import Sequence

from colorama import Fore, Style
from colorama import init as colorama_init

from primefrac import __version__ as _ver
from primefrac.config import load_settings
from primefrac.context import EngineConfig
from primefrac.factorize import factorize_number
from primefrac.fraction import SENTINEL, decimal_to_fraction
from primefrac.output_manager import OutputManager
from primefrac.runtime import APPLY, ensure_runtime_deps
from primefrac.runtime import current as _rt_current
from primefrac.sieve import generate_primes
from primefrac.utility import (
    UserInputError,
    flatten_dotted,
    get_terminal_width,
    report_error,
    typename,
)
from primefrac.verify import verify

# smallest bound whose table still holds every prime the self checks need
VERIFY_MIN_BOUND = 1232

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_VERIFY = 3


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    examples:
      primefrac 1234          2 × 617 (prime factors)
      primefrac 12.25         49/4 ==> 12 1/4 (fraction)
      primefrac 0.12 -t       3/25, with a step-by-step trace

    Without a number an interactive prompt is started.
    """)

    p = argparse.ArgumentParser(
        prog="primefrac",
        description="Prime factorization and decimal-to-fraction reduction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="n|x.y",
                   help="integer != 0 to factorize, or decimal x.y != 0.0 to reduce")
    p.add_argument("-t", "--trace", action="store_true", default=None,
                   help="Trace each step of the calculation on stderr")
    p.add_argument("-v", "--verbose", dest="trace", action="store_true", default=None,
                   help="Same as --trace")
    p.add_argument("--profile", default=None, help="Settings profile to load (default: 'default')")
    p.add_argument("--bound", type=int, default=None, help="Sieve bound; primes below it are generated")
    p.add_argument("--strict", action="store_true", default=None,
                   help="Treat a factor beyond the prime table as an error")
    p.add_argument("--quiet", action="store_true", help="Suppress result output (exit status only)")
    p.add_argument("--debug", action="store_true", help="Show settings and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        report_error(str(e))
        return EXIT_USAGE
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = ("--debug" in (argv or sys.argv)) or _rt_current().debug
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return EXIT_ERROR


def _debug_dump(config: EngineConfig) -> None:
    rt = _rt_current()
    print(f"[debug] active profile: {rt.profile_name}", file=sys.stderr)
    flat = flatten_dotted(rt.settings)
    for k in sorted(flat.keys(), key=str.lower):
        v = flat[k]
        print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)
    print(f"[debug] engine: bound={config.bound} trace={config.trace} strict={config.strict}", file=sys.stderr)


def run_item(item: str, primes: Sequence[int], config: EngineConfig, om: OutputManager) -> int:
    """
    Dispatch one input: a decimal point selects fraction reduction,
    anything else is factorized. Bad input is reported and skipped.
    Returns an exit status.
    """
    if "." in item:
        result = decimal_to_fraction(item, primes, config, om)
        return EXIT_USAGE if result == SENTINEL else EXIT_OK
    try:
        factorize_number(item, primes, config, om)
    except UserInputError as e:
        report_error(str(e))
        return EXIT_USAGE
    return EXIT_OK


def _show_help(om: OutputManager) -> None:
    rule = "-" * min(get_terminal_width(), 60)
    om.write_screen(rule)
    om.write_screen("  n          factorize an integer, e.g. 1234 -> 2 × 617")
    om.write_screen("  x.y        reduce a decimal, e.g. 12.25 -> 49/4 ==> 12 1/4")
    om.write_screen("  trace on|off|status")
    om.write_screen("  h          this help")
    om.write_screen("  q          quit")
    om.write_screen(rule)


def _repl(primes: Sequence[int], config: EngineConfig, om: OutputManager) -> int:
    print(f"{Fore.YELLOW}{Style.BRIGHT}primefrac v{_ver}{Style.RESET_ALL} "
          f"({len(primes)} primes below {config.bound})")
    while True:
        try:
            user_input = input("\nEnter an integer to factorize or a decimal to reduce (h=Help, q=Quit): ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        low = user_input.lower()
        if low in {"", "q", "quit"}:
            break

        if low in {"h", "help"}:
            _show_help(om)
            continue

        if low.startswith("trace"):
            parts = low.split()
            if len(parts) == 1 or parts[1] == "status":
                print(f"Trace is currently {'ON' if config.trace else 'OFF'}.")
            elif parts[1] in {"on", "off"}:
                config = EngineConfig(bound=config.bound, trace=(parts[1] == "on"), strict=config.strict)
                print(f"Trace {'enabled' if config.trace else 'disabled'} for this session.")
            else:
                print("Usage: TRACE [on|off|status]")
            continue

        run_item(user_input, primes, config, om)
    return EXIT_OK


def _main_impl(argv=None) -> int:

    colorama_init()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()

    if not ensure_runtime_deps(strict=True):
        return EXIT_ERROR

    APPLY(load_settings(args.profile))
    if args.debug:
        rt.debug = True
    _install_loud_error_handlers(rt.debug)

    if args.bound is not None and args.bound < VERIFY_MIN_BOUND:
        raise UserInputError(f"--bound must be at least {VERIFY_MIN_BOUND} for the self checks to pass.")
    try:
        config = rt.engine_config(bound=args.bound, trace=args.trace, strict=args.strict)
    except ValueError as e:
        raise UserInputError(str(e)) from None

    if rt.debug:
        _debug_dump(config)

    # generate some primes using Eratosthenes method
    primes = generate_primes(config)

    if not verify(config, primes):
        print(f"{Fore.RED}{Style.BRIGHT}Self-verification failed;{Style.RESET_ALL} refusing to continue.",
              file=sys.stderr)
        return EXIT_VERIFY

    om = OutputManager(quiet=args.quiet)
    try:
        if not args.items:
            return _repl(primes, config, om)

        status = EXIT_OK
        for item in args.items:
            status = max(status, run_item(item, primes, config, om))
        return status
    finally:
        om.close()


if __name__ == "__main__":
    raise SystemExit(main())
