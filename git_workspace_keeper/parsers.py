"""Parsers turning git's line-oriented output into structured values.

Every parser works on literal text, so it can be tested without a repository.
The commit parser expects the output of::

    git log --format=%an%n%ae%n%s%n%at%n%H

i.e. five lines per commit: author, email, subject, unix timestamp, hash.
"""

from datetime import datetime, timezone
from typing import List

from git_workspace_keeper.models.commit import Commit

COMMIT_LOG_FORMAT = "%an%n%ae%n%s%n%at%n%H"
LINES_PER_COMMIT = 5


def parse_single_line(text: str) -> str:
    """Return the only non-blank line of ``text``.

    Raises:
        ValueError: if there is no non-blank line or more than one
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if len(lines) != 1:
        raise ValueError(f"Expected exactly one line of output, got {len(lines)}: {text!r}")
    return lines[0]


def parse_commits(text: str) -> List[Commit]:
    """Parse five-line commit records, newest first. A trailing partial record is ignored."""
    lines = text.split("\n")
    commits = []
    for i in range(0, len(lines) - (LINES_PER_COMMIT - 1), LINES_PER_COMMIT):
        author, email, message, timestamp, commit_hash = lines[i:i + LINES_PER_COMMIT]
        commits.append(Commit(
            author=author,
            email=email,
            message=message,
            time=datetime.fromtimestamp(int(timestamp.strip()), tz=timezone.utc),
            hash=commit_hash.strip(),
        ))
    return commits


def parse_commit_times(text: str) -> List[datetime]:
    """Parse one unix timestamp per line, skipping anything that is not an integer."""
    times = []
    for line in text.split("\n"):
        try:
            times.append(datetime.fromtimestamp(int(line.strip()), tz=timezone.utc))
        except ValueError:
            continue
    return times


def parse_local_branches(text: str) -> List[str]:
    """Parse ``git branch --format=%(refname:short)`` output.

    Quotes are tolerated and detached-HEAD entries such as
    ``(HEAD detached at 1a2b3c)`` are dropped.
    """
    branches = []
    for line in text.split("\n"):
        name = line.strip().strip('"').strip()
        if name and not name.startswith("("):
            branches.append(name)
    return branches


def parse_remote_branches(text: str, remote: str) -> List[str]:
    """Parse ``git branch -r`` output into bare branch names of ``remote``.

    Symbolic entries such as ``origin/HEAD -> origin/main`` are excluded.
    """
    prefix = f"{remote}/"
    branches = []
    for line in text.split("\n"):
        line = line.strip()
        if line.startswith(prefix) and "->" not in line:
            branches.append(line[len(prefix):])
    return branches


def parse_lines(text: str) -> List[str]:
    """Non-blank, stripped lines of ``text``."""
    return [line.strip() for line in text.split("\n") if line.strip()]
