"""Pull request discussion comment."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Comment(BaseModel):
    """PR-level discussion comment (not a line comment)."""

    model_config = ConfigDict(frozen=True)

    created_at: datetime
    author: str
    body: str = ""
