"""Command line front end: sample one workbook into a destination folder."""

import argparse
import random
import sys
from pathlib import Path

from spreadsheet_sampler.config import SUPPORTED_REPORT_LANGUAGES, settings
from spreadsheet_sampler.messages import describe_failure
from spreadsheet_sampler.sample_spec import SampleMode, parse_sample_spec
from spreadsheet_sampler.services.sampling_processor import process_file
from spreadsheet_sampler.utils.exceptions import SamplerError, ValidationError
from spreadsheet_sampler.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spreadsheet-sampler",
        description=(
            "Randomly select data rows of the table on the first sheet of an "
            "Excel workbook and save them, with an explanation, in a folder."
        ),
    )
    parser.add_argument("input", help="Excel workbook to sample (.xlsx, .xlsm, .xls).")
    parser.add_argument("destination", help="Folder to save the results in.")
    amount = parser.add_mutually_exclusive_group(required=True)
    amount.add_argument(
        "--percent",
        metavar="P",
        help="Percentage of the data rows to select (0-100).",
    )
    amount.add_argument(
        "--count",
        metavar="N",
        help="Number of data rows to select.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible sampling (default: SAMPLER_RANDOM_SEED).",
    )
    parser.add_argument(
        "--language",
        choices=SUPPORTED_REPORT_LANGUAGES,
        default=None,
        help="Language of the explanation and messages (default: SAMPLER_REPORT_LANGUAGE).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: SAMPLER_LOG_LEVEL).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides: dict[str, object] = {}
    if args.language is not None:
        overrides["report_language"] = args.language
    if args.log_level is not None:
        overrides["log_level"] = args.log_level.upper()
    try:
        run_settings = settings.model_validate(
            {**settings.model_dump(), **overrides}
        )
    except ValueError as e:
        print(f"[error] {e}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(level=run_settings.log_level_int, use_structured_formatter=True)
    language = run_settings.report_language

    try:
        if args.percent is not None:
            spec = parse_sample_spec(SampleMode.PERCENTAGE, args.percent)
        else:
            spec = parse_sample_spec(SampleMode.COUNT, args.count)
    except ValidationError as e:
        print(describe_failure(e, language), file=sys.stderr)
        return EXIT_USAGE

    seed = args.seed if args.seed is not None else run_settings.random_seed
    rng = random.Random(seed) if seed is not None else None

    try:
        outcome = process_file(
            Path(args.input).expanduser(),
            Path(args.destination).expanduser(),
            spec,
            settings=run_settings,
            rng=rng,
        )
    except SamplerError as e:
        logger.error("Sampling failed", error_code=e.error_code.value)
        print(describe_failure(e, language), file=sys.stderr)
        return EXIT_FAILURE

    print(outcome.message)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
