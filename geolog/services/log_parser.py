"""
Connection log parser.

Reads the monthly per-user hit report:

    2015/03
      alice@example.com
           112 203.0.113.7
             3 198.51.100.23

A month header sets the current month, a line indented by two spaces
sets the current user, and each indented "<hits> <ip>" line under them
is one entry. Other lines are ignored.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Union

logger = logging.getLogger(__name__)

MONTH_RE = re.compile(r"^(\d{4}/[01]\d)$")
USER_RE = re.compile(r"^  ([0-9a-zA-Z].+)$")
HITS_RE = re.compile(r"^\s+([0-9]{1,10})\s(\S+)$")


@dataclass(frozen=True)
class LogEntry:
    """One (month, user, ip, hits) record from the log."""
    month: str
    user: str
    ip: str
    hits: float
    line_no: int = 0


def parse_log(lines: Iterable[str]) -> Iterator[LogEntry]:
    """
    Parse log lines into entries.

    Hit lines seen before any month or user header are still yielded,
    with an empty month or user, so ingestion can reject them.

    Args:
        lines: Log lines, with or without trailing newlines

    Yields:
        LogEntry per hit line, in input order
    """
    month = ""
    user = ""

    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")

        m = MONTH_RE.match(line)
        if m:
            month = m.group(1)
            continue

        m = USER_RE.match(line)
        if m:
            user = m.group(1).strip()
            continue

        m = HITS_RE.match(line)
        if m:
            yield LogEntry(
                month=month,
                user=user,
                ip=m.group(2),
                hits=float(m.group(1)),
                line_no=line_no,
            )
        elif line.strip():
            logger.debug(f"Ignoring unrecognized line {line_no}: {line!r}")


def parse_log_file(path: Union[str, Path]) -> list[LogEntry]:
    """
    Parse a log file from disk.

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, "r", encoding="utf-8") as fd:
        entries = list(parse_log(fd))

    logger.info(f"Parsed {len(entries)} entries from {path}")
    return entries
