"""Client side: poll a latestview server and follow its newest file."""

from latestview.follow.client import FilesClient, FilesClientError
from latestview.follow.controller import FollowController
from latestview.follow.session import Session

__all__ = ["FilesClient", "FilesClientError", "FollowController", "Session"]
