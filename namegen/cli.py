#!/usr/bin/env python3
"""
Namegen CLI
===========
Command-line interface for pattern-based name generation.

Usage:
    namegen generate "!ssV'!i" -n 10
    namegen generate --preset mushy --seed 42
    namegen validate "<c|v|>"
    namegen tokens --key s
    namegen presets
    namegen demo
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from namegen import __version__

# =============================================================================
# Constants
# =============================================================================

RNG_CHOICES = ['xorshift', 'mersenne']

EXIT_CODES = {
    'SUCCESS': 0,
    'INVALID': 1,
    'TOO_DEEP': 1,
}

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def result(self, text: str):
        """Print primary output, shown even in quiet mode."""
        print(text)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a rich table; in quiet mode, one tab-separated line per row."""
        if self.quiet:
            for row in rows:
                self.result('\t'.join(str(c) for c in row))
            return
        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(Text(str(c)) for c in row))
        self.console.print(table)


def build_generator(args):
    """Create a NameGen honoring --tokens/--extend/--rng."""
    from namegen import NameGen

    gen = NameGen(rng=getattr(args, 'rng', None))
    if getattr(args, 'tokens', None):
        gen.load_tokens(args.tokens, extend=getattr(args, 'extend', False))
    return gen


def resolve_pattern(args) -> str:
    """Pick the pattern argument or the --preset pattern, never both."""
    from namegen import get_preset

    if args.preset is not None:
        if args.pattern is not None:
            raise ValueError("Give either a pattern or --preset, not both")
        return get_preset(args.preset)
    if args.pattern is None:
        raise ValueError("A pattern or --preset is required")
    return args.pattern


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names."""
    gen = build_generator(args)
    pattern = resolve_pattern(args)
    results = gen.generate(pattern, count=args.count, seed=args.seed)

    failed = results[-1]
    if not failed.ok:
        out.error(f"{failed.code.name}: cannot expand pattern {pattern!r}")
        return EXIT_CODES[failed.code.name]

    if args.json:
        payload = [{'name': r.name, 'seed': r.seed} for r in results]
        out.result(json.dumps({'pattern': pattern, 'names': payload}, indent=2))
        return 0

    if args.table:
        rows = [[i, r.name, r.seed] for i, r in enumerate(results, 1)]
        out.table(['#', 'Name', 'Seed'], rows, title=pattern)
        return 0

    for r in results:
        out.result(r.name)
    return 0


def cmd_validate(args, out: Output):
    """Validate a pattern's structure."""
    from namegen import NameGen

    pattern = resolve_pattern(args)
    code = NameGen().validate(pattern)
    out.result(f"{pattern}: {code.name}")
    return EXIT_CODES[code.name]


def cmd_tokens(args, out: Output):
    """List token categories."""
    gen = build_generator(args)
    tokens = gen.tokens

    if args.key:
        values = tokens.lookup(args.key)
        if not values:
            out.error(f"No category for key {args.key!r}")
            return 1
        out.result(' '.join(values))
        return 0

    rows = [[key, desc or '-', count] for key, desc, count in tokens.categories()]
    out.table(['Key', 'Category', 'Tokens'], rows, title="Token categories")
    return 0


def cmd_presets(args, out: Output):
    """List pattern presets."""
    from namegen import list_presets

    rows = [[name, p['pattern'], p['description']] for name, p in list_presets().items()]
    out.table(['Preset', 'Pattern', 'Description'], rows, title="Pattern presets")
    return 0


def cmd_demo(args, out: Output):
    """Generate one name per demo pattern."""
    from namegen.config import DEMO_PATTERNS

    gen = build_generator(args)
    rows = []
    for pattern in DEMO_PATTERNS:
        result = gen.generate(pattern, seed=args.seed)[0]
        rows.append([pattern, result.name])
    out.table(['Pattern', 'Name'], rows, title="Demo")
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='namegen',
        description='Namegen - Pattern-Driven Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Pattern language:
  s v V c B C i m M D d   token categories (see 'tokens')
  (abc)                   literal text
  <...>                   nested pattern
  a|b                     random alternative inside a group
  !                       capitalize the next component

Examples:
  %(prog)s generate "!ssV'!i" -n 10
  %(prog)s generate "<C!i|v!M|>" --seed 42 --table
  %(prog)s generate --preset mushy --tokens my_tokens.yaml --extend
  %(prog)s generate mushy          (the pattern "mushy", not the preset)
  %(prog)s validate "<a)"
  %(prog)s demo
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('pattern', nargs='?', help='Pattern (default: cli.pattern setting)')
    p.add_argument('--preset', '-p', help='Use a named preset instead of a pattern')
    p.add_argument('-n', '--count', type=int, default=None, help='Number of names')
    p.add_argument('--seed', type=lambda v: int(v, 0), help='Seed (default: clock)')
    p.add_argument('--tokens', '-t', help='JSON/YAML token file')
    p.add_argument('--extend', '-e', action='store_true', help='Layer token file over built-ins')
    p.add_argument('--rng', choices=RNG_CHOICES, help='Random source')
    p.add_argument('--table', action='store_true', help='Show names in a table')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- validate ---
    p = subparsers.add_parser('validate', aliases=['v'], help='Check pattern structure')
    p.add_argument('pattern', nargs='?', help='Pattern')
    p.add_argument('--preset', '-p', help='Check a named preset instead of a pattern')

    # --- tokens ---
    p = subparsers.add_parser('tokens', help='List token categories')
    p.add_argument('--tokens', '-t', help='JSON/YAML token file')
    p.add_argument('--extend', '-e', action='store_true', help='Layer token file over built-ins')
    p.add_argument('--key', '-k', help='Show the tokens of one category')

    # --- presets ---
    subparsers.add_parser('presets', help='List pattern presets')

    # --- demo ---
    p = subparsers.add_parser('demo', help='Generate a name for each demo pattern')
    p.add_argument('--seed', type=lambda v: int(v, 0), help='Seed (default: clock)')
    p.add_argument('--tokens', '-t', help='JSON/YAML token file')
    p.add_argument('--extend', '-e', action='store_true', help='Layer token file over built-ins')

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'v': 'validate',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    if command == 'generate':
        from namegen.settings import get_setting
        if args.count is None:
            args.count = int(get_setting('cli.count', 10))
        if args.pattern is None and args.preset is None:
            args.pattern = get_setting('cli.pattern', "!ssV'!i")

    commands = {
        'generate': cmd_generate,
        'validate': cmd_validate,
        'tokens': cmd_tokens,
        'presets': cmd_presets,
        'demo': cmd_demo,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (ValueError, OSError) as e:
            out.error(str(e))
            if args.debug:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
