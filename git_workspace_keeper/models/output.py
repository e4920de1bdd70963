"""Result of running one git command."""
from dataclasses import dataclass


@dataclass(frozen=True)
class GitOutput:
    """Captured output of a git command that did not fail."""
    output: str
    error: str = ""
    status: int = 0

    @property
    def combined(self) -> str:
        """Error text followed by output text, the way git interleaves progress and results."""
        if self.error and self.output:
            return f"{self.error}\n{self.output}"
        return self.error or self.output
