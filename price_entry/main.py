"""
Command-line entrypoint.

This script:
- Reads free-text entry lines ("tea 75+25") from a text file or archive
- Parses every line into a product name and a price using worker processes
- Writes one result line per entry next to the input file

Exit status is 1 when at least one entry failed to parse.
"""

import argparse
from pathlib import Path
import sys
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError

from price_entry.batch.reader import EntryFileReader
from price_entry.batch.runner import BatchRunner
from price_entry.common.logger import logger


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the file containing entry lines.
    workers : int, optional
        Maximum number of worker processes; defaults to the CPU count.
    language : str
        Language of error messages in the results file.
    """

    file_path: FilePath
    workers: Optional[int] = Field(default=None, ge=1)
    language: Literal["ru", "en"] = "ru"


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Parse free-text product entries into names and prices"
    )

    parser.add_argument(
        "file_path",
        help="Path to the file containing entry lines (.txt, .zip, .tar.xz or .7z)",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Maximum number of worker processes",
    )
    parser.add_argument(
        "-l",
        "--language",
        default="ru",
        help="Language of error messages (ru or en)",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(file_path=args.file_path, workers=args.workers, language=args.language)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the output file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: data/entries.7z
    output: data/entries_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    stem = input_path.name
    for suffix in input_path.suffixes:
        stem = stem[: -len(suffix)]
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the batch parser and return the process exit code.
    """
    cli_args = parse_args(argv)
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)

    lines = EntryFileReader().read_lines(input_path)
    if not lines:
        logger.warning(f"📄 No entries found in {input_path}")

    runner_kwargs = {"output_file": output_path, "language": cli_args.language}
    if cli_args.workers is not None:
        runner_kwargs["max_workers"] = cli_args.workers
    failures = BatchRunner(**runner_kwargs).run(lines)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
