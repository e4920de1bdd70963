"""Remote model"""
from dataclasses import dataclass

from git_workspace_keeper.utils.urls import strip_credentials


@dataclass(frozen=True)
class Remote:
    """A named remote configured in a workspace. Names are case-sensitive."""
    name: str
    url: str

    @property
    def url_without_credentials(self) -> str:
        return strip_credentials(self.url)

    def points_to(self, endpoint: str) -> bool:
        """True if this remote tracks ``endpoint``, ignoring credentials and case."""
        return self.url_without_credentials.lower() == endpoint.lower()
