"""
Application layer - Services that turn CLI intent into tracker calls.

- QueryEngine: issue reads (direct fetch or sprint resolution)
- SprintResolver: project -> board -> active sprint -> issues chain
- CommentGateway: comment reads and writes
- TransitionService: workflow transitions
"""

from .comment_gateway import CommentGateway
from .query_engine import QueryEngine
from .sprint_resolver import BoardSelection, SprintResolver
from .transitions import TransitionService

__all__ = [
    "BoardSelection",
    "CommentGateway",
    "QueryEngine",
    "SprintResolver",
    "TransitionService",
]
