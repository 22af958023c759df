"""
Command-line interface: WN-LMF to WNDB grinding.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from wordnet_grinder import __version__
from wordnet_grinder.config import GrindConfig, load_config
from wordnet_grinder.encoder import RelationPolicy
from wordnet_grinder.exceptions import GrinderError, ParseError
from wordnet_grinder.exporter import export_offsets, export_wndb, produce_line
from wordnet_grinder.formatter import HEADERS, header_named
from wordnet_grinder.importer import load_lmf
from wordnet_grinder.ordering import BaselineIndex, BaselineMode, SenseOrder

logger = logging.getLogger("wordnet_grinder")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the wndb-grind CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else
        logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname).1s] %(message)s",
    )

    try:
        return args.func(args)
    except ParseError as e:
        print(f"\n  [PARSE ERROR] {e}")
        if e.line:
            print(f"               Line: {e.line}")
        return 1
    except (GrinderError, FileNotFoundError) as e:
        print(f"\n  [ERROR] {e}")
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wndb-grind",
        description="Grind a WN-LMF lexical database into WNDB files",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # options shared by all commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        help="YAML file with grind settings (options override it)",
    )
    common.add_argument(
        "--lexid-compat",
        action="store_true",
        default=None,
        help="Reduce lex ids to a single hex digit",
    )
    common.add_argument(
        "--pointer-compat",
        action="store_true",
        default=None,
        help="Drop relations the Princeton release does not define",
    )
    common.add_argument(
        "--verbframe-compat",
        action="store_true",
        default=None,
        help="Drop verb frames the Princeton release does not define",
    )
    common.add_argument(
        "--compat",
        action="store_true",
        help="Same as the three compat switches together",
    )
    common.add_argument(
        "--no-reindex",
        action="store_true",
        default=None,
        help="Number senses by lex index instead of sense order",
    )
    common.add_argument(
        "--header",
        choices=sorted(HEADERS),
        help="Legal header heading data and index files (default: oewn)",
    )
    common.add_argument(
        "--best-effort",
        action="store_true",
        default=None,
        help="Drop unknown relations and frames instead of failing",
    )
    common.add_argument(
        "--lexicon",
        action="append",
        dest="lexicons",
        help="Lexicon id to grind (repeatable; default: all)",
    )
    common.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-vv for debug output)",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # grind command
    grind_parser = subparsers.add_parser(
        "grind",
        parents=[common],
        help="Write a WNDB directory",
    )
    grind_parser.add_argument("source", type=Path, help="WN-LMF XML file")
    grind_parser.add_argument(
        "outdir", type=Path, nargs="?", help="Output directory",
    )
    grind_parser.add_argument(
        "--baseline",
        type=Path,
        help="Historical sense index used to order senses",
    )
    grind_parser.add_argument(
        "--baseline-mode",
        choices=[m.value for m in BaselineMode],
        help="How senses missing from the baseline are ordered",
    )
    grind_parser.add_argument(
        "--parallel",
        action="store_true",
        default=None,
        help="Compute offsets with one worker per part of speech",
    )
    grind_parser.add_argument(
        "--only",
        action="append",
        dest="outputs",
        help="Output group to write (repeatable; default: all)",
    )
    grind_parser.set_defaults(func=cmd_grind)

    # offsets command
    offsets_parser = subparsers.add_parser(
        "offsets",
        parents=[common],
        help="Write the synset offset map",
    )
    offsets_parser.add_argument("source", type=Path, help="WN-LMF XML file")
    offsets_parser.add_argument(
        "destination", type=Path, help="Output file or directory",
    )
    offsets_parser.add_argument(
        "--serialized",
        action="store_true",
        help="Write the opaque binary form instead of text",
    )
    offsets_parser.set_defaults(func=cmd_offsets)

    # line command
    line_parser = subparsers.add_parser(
        "line",
        parents=[common],
        help="Print the data record of one synset",
    )
    line_parser.add_argument("source", type=Path, help="WN-LMF XML file")
    line_parser.add_argument("synset_id", help="Synset id")
    line_parser.set_defaults(func=cmd_line)

    return parser


def resolve_config(args: argparse.Namespace) -> GrindConfig:
    """Merge the configuration file, if any, with command-line options."""
    config = load_config(args.config) if args.config else GrindConfig()

    flags = config.flags
    if args.compat:
        flags = dataclasses.replace(
            flags, lex_id_compat=True, pointer_compat=True, verb_frame_compat=True,
        )
    overrides = {
        "lex_id_compat": args.lexid_compat,
        "pointer_compat": args.pointer_compat,
        "verb_frame_compat": args.verbframe_compat,
        "no_reindex": args.no_reindex,
    }
    flags = dataclasses.replace(
        flags, **{k: v for k, v in overrides.items() if v is not None}
    )
    config.flags = flags

    if args.header:
        config.header = args.header
    if args.best_effort:
        config.policy = RelationPolicy.BEST_EFFORT
    if args.lexicons:
        config.lexicons = tuple(args.lexicons)
    if getattr(args, "baseline", None):
        config.baseline = args.baseline
    if getattr(args, "baseline_mode", None):
        config.baseline_mode = BaselineMode(args.baseline_mode)
    if getattr(args, "parallel", None):
        config.parallel = True
    if getattr(args, "outputs", None):
        config.outputs = tuple(args.outputs)
    if getattr(args, "outdir", None):
        config.output = args.outdir
    return config


def cmd_grind(args: argparse.Namespace) -> int:
    """Handle grind command."""
    config = resolve_config(args)
    if config.output is None:
        print("\n  [ERROR] No output directory (argument or 'output' setting)")
        return 1

    model = load_lmf(args.source, lexicon_ids=config.lexicons)
    baseline = None
    if config.baseline is not None:
        baseline = BaselineIndex.from_file(config.baseline)

    try:
        summary = export_wndb(
            model,
            config.output,
            flags=config.flags,
            header=header_named(config.header),
            baseline=SenseOrder(baseline, config.baseline_mode),
            policy=config.policy,
            parallel=config.parallel,
            outputs=config.outputs,
        )
    except ValueError as e:
        print(f"\n  [ERROR] {e}")
        return 1

    print(f"\nWrote {len(summary.files)} file(s) to {summary.destination}")
    print(f"  Synsets: {summary.synset_count}")
    print(f"  Index entries: {summary.index_count}")
    print(f"  Senses: {summary.senses}")
    for cause, count in sorted(summary.incompatibilities.items()):
        print(f"  Dropped '{cause}': {count}")
    return 0


def cmd_offsets(args: argparse.Namespace) -> int:
    """Handle offsets command."""
    config = resolve_config(args)
    model = load_lmf(args.source, lexicon_ids=config.lexicons)
    path = export_offsets(
        model,
        args.destination,
        flags=config.flags,
        header=header_named(config.header),
        policy=config.policy,
        serialized=args.serialized,
    )
    print(f"\nWrote offsets of {len(model.synsets_by_id)} synset(s) to {path}")
    return 0


def cmd_line(args: argparse.Namespace) -> int:
    """Handle line command."""
    config = resolve_config(args)
    model = load_lmf(args.source, lexicon_ids=config.lexicons)
    line = produce_line(
        model,
        args.synset_id,
        config.flags,
        header=header_named(config.header),
        policy=config.policy,
    )
    print(line, end="")
    return 0
