"""
histree.commands.counter_cmd - Drive the counter demo from the command line.

Each token becomes one intent. After every step the model, cursor and
available undo/redo kinds are printed; the final history can be dumped
as JSON, markdown or CSV.
"""

import argparse

from histree.commands.config_cmd import load_configuration
from histree.demos.counter import parse_intent
from histree.history import History, init, kind_label, options, step
from histree.history.serialize import to_csv, to_json, to_markdown

FORMATS = ("text", "json", "markdown", "csv")


def run(args: argparse.Namespace) -> int:
    """Run the counter command."""
    config = load_configuration(args)

    start = args.start if args.start is not None else config["counter"]["start"]
    dedup = args.dedup or config["history"]["dedup"]
    output_format = args.format or config["output"]["format"]
    if output_format not in FORMATS:
        raise ValueError(f"Unknown output format '{output_format}'")

    h = init(int(start), dedup=dedup)
    if not args.quiet:
        print(format_state("start", h))

    for token in args.steps:
        h = step(h, parse_intent(token, h.model))
        if not args.quiet:
            print(format_state(token, h))

    if output_format == "json":
        print(to_json(h))
    elif output_format == "markdown":
        print(to_markdown(h), end="")
    elif output_format == "csv":
        print(to_csv(h), end="")
    elif args.quiet:
        print(h.model)

    return 0


def format_state(label: str, h: History) -> str:
    """One status line: model, cursor, undo kind and redo kinds."""
    opts = options(h)
    undo_text = kind_label(opts.undo) or "-"
    redo_text = ",".join(kind_label(k) or "" for k in opts.redo) or "-"
    return f"{label:<10} model={h.model} cursor=#{h.cursor} undo={undo_text} redo={redo_text}"
