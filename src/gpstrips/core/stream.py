import csv
import logging
import os
from pathlib import Path
from typing import Iterator, List

from gpstrips.exceptions import InputUnavailableError

logger = logging.getLogger(__name__)


class CsvRowStream:
    """
    Reads a delimited text file and yields each data row as a list of raw
    string fields. No validation happens here; short or malformed rows are
    passed through so the validator can reject them.
    """

    def __init__(self, filepath: str | Path, sep: str = ",", has_header: bool = True):
        self.filepath = Path(filepath)
        self.sep = sep
        self.has_header = has_header

    def check_available(self) -> None:
        """
        Raises InputUnavailableError if the file is missing or unreadable.
        """
        if not self.filepath.is_file():
            raise InputUnavailableError(f"Input file not found: {self.filepath}")
        if not os.access(self.filepath, os.R_OK):
            raise InputUnavailableError(f"Input file is not readable: {self.filepath}")

    def stream(self) -> Iterator[List[str]]:
        """
        Yields rows one by one, skipping the header row.
        Bytes that are not valid UTF-8 are replaced, and a line the csv
        parser cannot split is yielded as a single field so it still
        reaches the validator as a row.
        """
        self.check_available()
        try:
            with open(self.filepath, mode="r", newline="", encoding="utf-8", errors="replace") as f:
                last_line = [""]

                def lines():
                    for line in f:
                        last_line[0] = line
                        yield line

                reader = csv.reader(lines(), delimiter=self.sep)
                header_pending = self.has_header
                while True:
                    try:
                        row = next(reader)
                    except StopIteration:
                        break
                    except csv.Error as e:
                        logger.debug("Unparseable line %d: %s", reader.line_num, e)
                        row = [last_line[0].rstrip("\r\n")]
                    if header_pending:
                        header_pending = False
                        logger.debug("Skipping header row: %s", row)
                        continue
                    yield row
        except OSError as e:
            raise InputUnavailableError(f"Cannot read input file {self.filepath}: {e}") from e

    def __iter__(self) -> Iterator[List[str]]:
        return self.stream()
