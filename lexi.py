#!/usr/bin/env python3

import argparse
import json
import logging
import sys
import time
from typing import Dict, List

from lexindex.lexicon import Lexicon, LexiconSettings, RawEntryProcessor

__version__ = "0.1.0"


def show_lexicon_statistics(lexicon: Lexicon, start_time: float, added: Dict[str, int]):
    """Display lexicon statistics."""
    total_time = time.time() - start_time

    sys.stderr.write("=== Lexicon Statistics ===\n")
    sys.stderr.write(f"Total processing time: {total_time:.2f} seconds\n")
    sys.stderr.write(f"Names: {lexicon.name_count()}\n")
    sys.stderr.write(f"Classes: {lexicon.class_count()}\n")
    sys.stderr.write(f"Entries: {lexicon.size()}\n")

    languages = sorted(lexicon.get_languages())
    if languages:
        sys.stderr.write("\nEntries by language:\n")
        for language in languages:
            sys.stderr.write(f"  {language}: {lexicon.get_language_count(language)}\n")

    if added:
        sys.stderr.write("\nSynonym entries added:\n")
        for generator, count in added.items():
            sys.stderr.write(f"  {generator}: {count}\n")

    sys.stderr.write("==========================\n\n")


def lookup(lexicon: Lexicon, name: str, internal: bool) -> Dict:
    """Resolve a raw name against the lexicon."""
    key = lexicon.name_key(name)
    best_class = lexicon.get_best_class(key, internal)
    return {
        "name": name,
        "key": key,
        "class": best_class,
        "weight": lexicon.get_weight(key, best_class) if best_class is not None else 0.0,
        "classes": sorted(lexicon.get_classes(key)),
    }


def main(argv: List[str] = None):
    parser = argparse.ArgumentParser(
        description="Build, enrich, save and query a lexicon of class names."
    )
    parser.add_argument(
        "entries_file",
        nargs="?",
        help="Tab-separated entries: id, name, type, source, weight[, language]",
    )
    parser.add_argument(
        "--saved",
        action="store_true",
        help="Treat the input as a lexicon file written with -o (id, name, type)",
    )
    parser.add_argument(
        "--synonyms",
        choices=["parenthesis", "stop-words", "all"],
        default=None,
        help="Generate internal synonyms before saving and lookups",
    )
    parser.add_argument(
        "--stop-words",
        type=str,
        default=None,
        help="Stop-word file used by --synonyms (default: packaged English list)",
    )
    parser.add_argument(
        "--label-language",
        type=str,
        default="en",
        help="Primary label language",
    )
    parser.add_argument(
        "--lookup",
        action="append",
        default=[],
        metavar="NAME",
        help="Resolve NAME to its best class (may be repeated)",
    )
    parser.add_argument(
        "--internal",
        action="store_true",
        help="Only resolve lookups against non-external entries",
    )
    parser.add_argument(
        "--pretty-print",
        action="store_true",
        help="Emit all lookup results in a single pretty-printed JSON array",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Save the lexicon to this file (UTF-8, LF line endings)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument(
        "--show-stats",
        action="store_true",
        help="Show lexicon statistics",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress messages",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    args = parser.parse_args(argv)

    if args.version:
        print(f"lexi: {__version__}")
        sys.exit(0)

    if not args.entries_file:
        parser.error("the following arguments are required: entries_file")

    start_time = time.time()

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )
    logger = logging.getLogger("lexi")

    settings = LexiconSettings(
        label_language=args.label_language, stop_words_path=args.stop_words
    )

    if args.saved:
        logger.info("Loading saved lexicon from %s", args.entries_file)
        lexicon = Lexicon.load(args.entries_file, settings)
    else:
        logger.info("Building lexicon from %s", args.entries_file)
        raw_entries = RawEntryProcessor.read_entries_file(args.entries_file)
        validated = RawEntryProcessor.load_and_validate_entries(raw_entries)
        lexicon = Lexicon(settings)
        lexicon.add_entries(RawEntryProcessor.convert_to_entries(validated))

    added: Dict[str, int] = {}
    if args.synonyms in ("parenthesis", "all"):
        added["parenthesis"] = lexicon.generate_parenthesis_synonyms()
    if args.synonyms in ("stop-words", "all"):
        added["stop-words"] = lexicon.generate_stop_word_synonyms()

    if not args.quiet:
        sys.stderr.write(
            f"Lexicon has {lexicon.name_count()} names for {lexicon.class_count()} classes\n"
        )

    if args.output:
        lexicon.save(args.output)
        if not args.quiet:
            sys.stderr.write(f"Saved lexicon to {args.output}\n")

    if args.show_stats:
        show_lexicon_statistics(lexicon, start_time, added)

    results = [lookup(lexicon, name, args.internal) for name in args.lookup]
    if results:
        if args.pretty_print:
            json.dump(results, sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")
        else:
            for item in results:
                sys.stdout.write(json.dumps(item, ensure_ascii=False))
                sys.stdout.write("\n")


if __name__ == "__main__":
    main()
