"""Board API client package."""

from .client import Comment, CommunityBoardClient, Post, RequestFailed

__all__ = ["Comment", "CommunityBoardClient", "Post", "RequestFailed"]
