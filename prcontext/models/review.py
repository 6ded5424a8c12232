"""Code review submitted on a pull request."""

from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field


class ReviewState(str, Enum):
    """Current state of a review record. Values are the wire tokens."""

    APPROVED = "approved"
    CHANGES_REQUESTED = "changes_requested"
    COMMENTED = "commented"
    DISMISSED = "dismissed"
    PENDING = "pending"


class Review(BaseModel):
    """Formal review submission.

    ``id`` is assigned by the host and links a later dismissal back to the
    review it dismisses: a dismissal is the same ``id`` with a new state.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    state: ReviewState
    created_at: datetime
    author: str
    body: str = ""


def latest_reviews(reviews: Iterable[Review]) -> Dict[str, Review]:
    """Map each review id to its latest record.

    Records are ranked by ``created_at``; on equal timestamps the record seen
    last wins.
    """
    latest: Dict[str, Review] = {}
    for review in reviews:
        current = latest.get(review.id)
        if current is None or review.created_at >= current.created_at:
            latest[review.id] = review
    return latest


def active_approvals(reviews: Iterable[Review]) -> List[Review]:
    """Return reviews whose current state is an approval."""
    return [r for r in latest_reviews(reviews).values() if r.state is ReviewState.APPROVED]
