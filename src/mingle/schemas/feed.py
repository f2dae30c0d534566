"""Feed and explore Pydantic schemas."""

from pydantic import BaseModel

from .common import ListResponse
from .post import PostResponse


class Pagination(BaseModel):
    """Offset pagination block returned by the explore feed."""

    total_posts: int
    total_pages: int
    current_page: int
    has_next_page: bool


class ExploreResponse(ListResponse[PostResponse]):
    """A page of explore posts."""

    pagination: Pagination
