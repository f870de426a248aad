"""
Command-line interface for Sententia.

- Analyzing a sentence from dictionary lookup results
- Showing a saved analysis
- Listing the heuristic passes
"""
import sys
import argparse
import json
import logging

from sententia.config import EngineConfig
from sententia.errors import SententiaError
from sententia.logging_config import setup_logging
from sententia.morphology import sort_readings


def format_report(analyzer):
    """Readable one-block-per-word report of an analysis."""
    lines = [analyzer.text, ""]
    for word in analyzer.words:
        if not word.clean:
            continue
        if word.is_resolved:
            status = "guess" if word.guessed else "manual"
            lines.append(f"[{word.index}] {word.original}: {word.selected_reading} ({status})")
            if word.heuristic:
                lines.append(f"      why: {word.heuristic}")
        else:
            readings = [r for c in word.candidates for r in c.readings]
            if readings:
                lines.append(f"[{word.index}] {word.original}: unresolved")
                for reading in sort_readings(readings):
                    lines.append(f"      - {reading}")
            else:
                lines.append(f"[{word.index}] {word.original}: no lookup results")
        if word.has_et_prefix:
            lines.append("      enclitic -que: read as 'et' before this word")
        for annotation in word.annotations:
            target = annotation.related_index
            other = analyzer.words[target].original if target is not None else "?"
            origin = "guess" if annotation.guessed else "manual"
            lines.append(f"      {annotation.kind.value} -> [{target}] {other} ({origin})")
    return "\n".join(lines)


def _emit(analyzer, fmt):
    if fmt == 'json':
        print(json.dumps(analyzer.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_report(analyzer))


def cmd_analyze(args):
    """Run the heuristic passes over a lookup document."""
    from sententia.analyzer import SentenceAnalyzer

    config = EngineConfig.from_env()
    try:
        analyzer = SentenceAnalyzer.from_lookup_file(args.lookup, text=args.text, config=config)
        if args.only:
            trace = analyzer.orchestrator.run_one(analyzer.words, args.only)
        elif args.range:
            trace = analyzer.run_range(*args.range)
        else:
            trace = analyzer.run_all()
        if args.save:
            analyzer.save(args.save)
    except (SententiaError, KeyError, IndexError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    _emit(analyzer, args.format)
    if args.trace and trace is not None:
        print(trace.to_json(), file=sys.stderr)


def cmd_show(args):
    """Display a saved analysis."""
    from sententia.analyzer import SentenceAnalyzer

    try:
        analyzer = SentenceAnalyzer.load(args.state)
    except SententiaError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    _emit(analyzer, args.format)


def cmd_passes(args):
    """List the pass table in run order."""
    from sententia.orchestrator import PASSES, TIER_NAMES

    for spec in PASSES:
        marker = "*" if spec.incremental else " "
        print(f"{spec.tier} {TIER_NAMES[spec.tier]:<14} {marker} {spec.name}")
    print("\n* also runs incrementally after a manual change")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='sententia',
        description='Sententia: heuristic disambiguation of Latin sentences',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a sentence from lookup results
  sententia analyze lookup.json
  sententia analyze lookup.json --format json --save state.json

  # Run a single pass, or only part of the sentence
  sententia analyze lookup.json --only genitive
  sententia analyze lookup.json --range 2 5

  # Show a saved analysis
  sententia show state.json
        """
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-file', help='Also write log output to this file')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # --- analyze command ---
    parser_analyze = subparsers.add_parser('analyze', help='Analyze a sentence from lookup results')
    parser_analyze.add_argument('lookup', help='Lookup results JSON file')
    parser_analyze.add_argument('--text', help='Sentence text (default: the document\'s input field)')
    parser_analyze.add_argument('--format', choices=['text', 'json'], default='text',
                                help='Output format (default: text)')
    parser_analyze.add_argument('--save', help='Write the resulting state to this file')
    parser_analyze.add_argument('--trace', action='store_true', help='Print the run trace to stderr')
    mode = parser_analyze.add_mutually_exclusive_group()
    mode.add_argument('--only', metavar='PASS', help='Run a single named pass')
    mode.add_argument('--range', nargs=2, type=int, metavar=('START', 'END'),
                      help='Re-run words START through END')
    parser_analyze.set_defaults(func=cmd_analyze)

    # --- show command ---
    parser_show = subparsers.add_parser('show', help='Display a saved analysis')
    parser_show.add_argument('state', help='Saved state JSON file')
    parser_show.add_argument('--format', choices=['text', 'json'], default='text',
                             help='Output format (default: text)')
    parser_show.set_defaults(func=cmd_show)

    # --- passes command ---
    parser_passes = subparsers.add_parser('passes', help='List the heuristic passes')
    parser_passes.set_defaults(func=cmd_passes)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = EngineConfig.from_env()
    level = logging.INFO if config.log_progress else logging.WARNING
    setup_logging(log_file=args.log_file or config.log_file, level=level,
                  debug=args.debug or config.debug)
    args.func(args)


if __name__ == '__main__':
    main()
