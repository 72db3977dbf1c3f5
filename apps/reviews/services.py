"""Review services.

Every write locks the target row before touching ``Review`` and
recomputes the target's rating in the same transaction.
"""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Count  # type: ignore

from shared.application.uow import DjangoUnitOfWork
from shared.domain.actors import Actor, Administrator
from shared.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

from .events import ReviewPosted
from .models import Review
from .rating import RatingSummary, as_target_id, lock_target, recompute_average, summarize, target_model

logger = logging.getLogger(__name__)

DUPLICATE_REVIEW_MESSAGE = (
    "You have already reviewed this item. You can update your existing review instead."
)


def _validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be an integer between 1 and 5")
    if rating < 1 or rating > 5:
        raise ValidationError("Rating must be between 1 and 5")
    return rating


def _validate_comment(comment) -> str:
    comment = comment or ""
    limit = getattr(settings, "REVIEW_COMMENT_MAX_LENGTH", 1000)
    if len(comment) > limit:
        raise ValidationError(f"Comment cannot be longer than {limit} characters")
    return comment


def _get_review(review_id) -> Review:
    review = Review.objects.filter(pk=review_id).first()
    if review is None:
        raise NotFoundError("Review not found")
    return review


def create_review(
    author_id: int,
    target_id,
    target_kind: str,
    rating,
    comment: str = "",
) -> tuple[Review, RatingSummary]:
    """Store a review and refresh the target's rating.

    Events: ReviewPosted (after commit)
    """
    if not target_id or not target_kind or rating is None:
        raise ValidationError("Target ID, target model, and rating are required")
    target_model(target_kind)
    target_id = as_target_id(target_id)
    rating = _validate_rating(rating)
    comment = _validate_comment(comment)

    with DjangoUnitOfWork() as uow:
        target = lock_target(target_id, target_kind)

        if Review.objects.filter(author_id=author_id, target_id=target_id).exists():
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE)

        try:
            with transaction.atomic():
                review = Review.objects.create(
                    author_id=author_id,
                    target_id=target_id,
                    target_kind=target_kind,
                    rating=rating,
                    comment=comment,
                )
        except IntegrityError as exc:
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE) from exc

        summary = recompute_average(target_id, target_kind)

        uow.record_event(ReviewPosted(
            aggregate_id=review.id,
            review_id=review.id,
            author_id=author_id,
            target_id=target_id,
            target_kind=target_kind,
            target_name=target.name,
            rating=rating,
            comment=comment,
            service_owner_id=getattr(target, "owner_id", None),
        ))

    logger.info(f"Review {review.id} by user {author_id} on {target_kind} {target_id}: {rating} stars")
    return review, summary


def update_review(
    review_id,
    author_id: int,
    rating=None,
    comment: str | None = None,
) -> tuple[Review, RatingSummary]:
    """Edit rating and/or comment of the caller's own review."""
    if rating is not None:
        rating = _validate_rating(rating)
    if comment is not None:
        comment = _validate_comment(comment)

    with transaction.atomic():
        review = _get_review(review_id)
        if review.author_id != author_id:
            raise AuthorizationError("Not authorized to edit this review")

        lock_target(review.target_id, review.target_kind)

        update_fields = ["updated_at"]
        if rating is not None:
            review.rating = rating
            update_fields.append("rating")
        if comment is not None:
            review.comment = comment
            update_fields.append("comment")
        review.save(update_fields=update_fields)

        summary = recompute_average(review.target_id, review.target_kind)

    logger.info(f"Review {review.id} updated by user {author_id}")
    return review, summary


def delete_review(review_id, actor: Actor) -> RatingSummary:
    """Delete a review (author or administrator) and refresh the target's rating."""
    with transaction.atomic():
        review = _get_review(review_id)
        if review.author_id != actor.user_id and not isinstance(actor, Administrator):
            raise AuthorizationError("Not authorized to delete this review")

        target_id, target_kind = review.target_id, review.target_kind
        lock_target(target_id, target_kind)
        review.delete()

        summary = recompute_average(target_id, target_kind)

    logger.info(f"Review {review_id} deleted by user {actor.user_id}")
    return summary


def has_reviewed(author_id: int, target_id) -> bool:
    return Review.objects.filter(author_id=author_id, target_id=as_target_id(target_id)).exists()


def target_rating_stats(target_id) -> dict:
    """Average, count and per-star distribution of a target's reviews."""
    target_id = as_target_id(target_id)
    rows = (
        Review.objects.filter(target_id=target_id)
        .values("rating")
        .annotate(count=Count("id"))
        .order_by()
    )
    distribution = {star: 0 for star in range(1, 6)}
    for row in rows:
        distribution[row["rating"]] = row["count"]

    total = sum(star * count for star, count in distribution.items())
    count = sum(distribution.values())
    summary = summarize(total, count)
    return {
        "average_rating": summary.average,
        "total_reviews": summary.count,
        "distribution": distribution,
    }
