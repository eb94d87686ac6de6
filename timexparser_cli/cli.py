import argparse
import json
import logging
import sys

import timexparser
from timexparser.errors import InvalidAnchorError
from timexparser.languages import available_languages
from timexparser.settings import preference_policies


def build_parser():
    timexparser_argparse = argparse.ArgumentParser(
        prog="timexparser",
        description="Recognize and resolve date and time expressions in text.",
    )
    timexparser_argparse.add_argument(
        "text",
        nargs="+",
        help="Text to analyze; several arguments are joined with spaces",
    )
    timexparser_argparse.add_argument(
        "--lang",
        "--language",
        default="en",
        choices=available_languages(),
        help="Language of the text (default: en)",
    )
    timexparser_argparse.add_argument(
        "--anchor",
        help="ISO-8601 reference moment for relative expressions (default: now)",
    )
    timexparser_argparse.add_argument(
        "--prefer-dates-from",
        choices=preference_policies,
        help="Policy for dates missing a month or year",
    )
    timexparser_argparse.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per expression",
    )
    timexparser_argparse.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log candidate spans and merge decisions",
    )
    return timexparser_argparse


def entrance(argv=None):
    timexparser_argparse = build_parser()
    args = timexparser_argparse.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = None
    if args.prefer_dates_from:
        settings = {"PREFER_DATES_FROM": args.prefer_dates_from}

    text = " ".join(args.text)
    try:
        results = timexparser.recognize(
            text, language=args.lang, anchor=args.anchor, settings=settings
        )
    except InvalidAnchorError as e:
        timexparser_argparse.error(str(e))

    for result in results:
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False))
        else:
            print("{}-{}\t{}\t{}\t{}".format(
                result.start, result.end, result.kind.value, result.timex, result.text
            ))
    return 0


if __name__ == "__main__":
    sys.exit(entrance())
