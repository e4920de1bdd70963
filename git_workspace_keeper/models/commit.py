"""Commit model"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Commit:
    """A read-only snapshot of one commit as reported by ``git log``."""
    author: str
    email: str
    message: str
    time: datetime  # UTC
    hash: str
