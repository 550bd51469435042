"""
Engagement Recorder
Performs a hero engagement and appends its activity entry as one unit
"""
import logging
from dataclasses import dataclass, field
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional, Tuple, Union

from herohub.core.exceptions import (
    BadRequestError,
    DuplicateEngagementError,
    InconsistencyError,
    NotFoundError,
)
from herohub.models.comment import Comment, CommentLike
from herohub.models.follow import Follow
from herohub.models.image import Image, ImageLike
from herohub.models.like import Like
from herohub.schemas.engagement import EngagementAction, EngagementPayload
from herohub.services.activity_ledger import ActivityLedger

logger = logging.getLogger(__name__)


# Which payload attribute feeds each event-table column
PAYLOAD_SOURCES = {
    "comments": "text",
    "comment_id": "comment_id",
    "image_url": "image_url",
}


@dataclass(frozen=True)
class EngagementSpec:
    """
    How one engagement action touches the event store
    
    Attributes:
        model: Event table
        verb: Activity description
        returning: Column returned as the event id
        columns: Columns written on insert / matched on delete (besides user_id)
        unique: Whether (user_id, *columns) is constrained unique
        removes: Delete the matching row instead of inserting
        defaults: Extra column values on insert
    """
    model: Any
    verb: str
    returning: str
    columns: Tuple[str, ...]
    unique: bool = True
    removes: bool = False
    defaults: Dict[str, Any] = field(default_factory=dict)


ENGAGEMENTS = {
    EngagementAction.FOLLOW: EngagementSpec(
        Follow, "followed", "follow_id", ("superhero_id",), defaults={"active": True}
    ),
    EngagementAction.UNFOLLOW: EngagementSpec(
        Follow, "unfollowed", "follow_id", ("superhero_id",), removes=True
    ),
    EngagementAction.LIKE: EngagementSpec(
        Like, "liked", "like_id", ("superhero_id",), defaults={"active": True}
    ),
    EngagementAction.UNLIKE: EngagementSpec(
        Like, "unliked", "like_id", ("superhero_id",), removes=True
    ),
    EngagementAction.COMMENT: EngagementSpec(
        Comment, "commented on", "comment_id", ("superhero_id", "comments"),
        unique=False, defaults={"active": True}
    ),
    EngagementAction.UPLOAD_IMAGE: EngagementSpec(
        Image, "uploaded an image for", "image_url", ("superhero_id", "image_url"),
        unique=False, defaults={"active": True}
    ),
    EngagementAction.COMMENT_LIKE: EngagementSpec(
        CommentLike, "liked a comment on", "comment_like_id", ("comment_id",)
    ),
    EngagementAction.COMMENT_UNLIKE: EngagementSpec(
        CommentLike, "unliked a comment on", "comment_like_id", ("comment_id",), removes=True
    ),
    EngagementAction.IMAGE_LIKE: EngagementSpec(
        ImageLike, "liked an image for", "image_like_id", ("image_url",)
    ),
    EngagementAction.IMAGE_UNLIKE: EngagementSpec(
        ImageLike, "unliked an image for", "image_like_id", ("image_url",), removes=True
    ),
}


class EngagementRecorder:
    """Single entry point for every hero engagement action"""
    
    @staticmethod
    def record(
        db: Session,
        action: Union[EngagementAction, str],
        actor_id: int,
        actor_name: str,
        hero_id: int,
        hero_name: str,
        payload: Optional[EngagementPayload] = None
    ) -> Union[int, str]:
        """
        Record an engagement and its activity entry in one transaction
        
        Args:
            db: Database session
            action: Engagement action
            actor_id: Acting user
            actor_name: Username snapshot for the activity feed
            hero_id: Target hero
            hero_name: Hero name snapshot for the activity feed
            payload: text for comment, image_url for upload/image likes,
                comment_id for comment likes
            
        Returns:
            Identifier of the inserted or deleted event row
            (image_url for uploads)
            
        Raises:
            BadRequestError: Required payload field missing
            NotFoundError: Nothing to remove
            DuplicateEngagementError: Pair already holds this engagement
            InconsistencyError: Activity append failed; the engagement was rolled back
        """
        try:
            action = EngagementAction(action)
        except ValueError:
            raise BadRequestError(f"Unknown engagement action: {action}")
        
        spec = ENGAGEMENTS[action]
        values = EngagementRecorder._column_values(spec, hero_id, payload or EngagementPayload())
        # Pair key for follows/likes; the hero for comments and uploads
        target = values[spec.columns[-1]] if spec.unique else hero_id
        
        try:
            if spec.removes:
                event_id = EngagementRecorder._remove(db, spec, actor_id, values, action)
            else:
                event_id = EngagementRecorder._insert(db, spec, actor_id, values, action)
        except IntegrityError:
            db.rollback()
            if spec.unique and EngagementRecorder._find(db, spec, actor_id, values) is not None:
                logger.warning(f"Duplicate {action.value} by user {actor_id} on {target}")
                raise DuplicateEngagementError(
                    f"Already recorded {action.value}: {target}",
                    detail=f"user_id={actor_id}"
                )
            raise
        except NotFoundError:
            db.rollback()
            raise
        
        try:
            ActivityLedger.append(db, actor_id, actor_name, hero_id, hero_name, spec.verb)
        except (SQLAlchemyError, NotFoundError) as e:
            db.rollback()
            logger.error(
                f"Activity append failed after {action.value}: "
                f"actor={actor_id} hero={hero_id} target={target} step=ledger_append "
                f"event_id={event_id} rolled_back=True",
                exc_info=True
            )
            raise InconsistencyError(
                f"Could not record activity for {action.value}: {target}",
                action=action.value,
                actor_id=actor_id,
                target=target,
                step="ledger_append",
                rolled_back=True,
                detail=str(e)
            ) from e
        
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.error(f"Commit failed for {action.value}: actor={actor_id} target={target}")
            raise
        
        logger.info(f"User {actor_id} {spec.verb} {hero_id} ({action.value}, event {event_id})")
        return event_id
    
    @staticmethod
    def _column_values(
        spec: EngagementSpec,
        hero_id: int,
        payload: EngagementPayload
    ) -> Dict[str, Any]:
        """Resolve the action's columns from the hero id and payload"""
        values = {}
        for column in spec.columns:
            if column == "superhero_id":
                values[column] = hero_id
                continue
            
            source = PAYLOAD_SOURCES[column]
            value = getattr(payload, source)
            # Stored as given; blank strings count as missing
            if value is None or (isinstance(value, str) and not value.strip()):
                raise BadRequestError(f"Missing required field: {source}")
            values[column] = value
        
        return values
    
    @staticmethod
    def _find(
        db: Session,
        spec: EngagementSpec,
        actor_id: int,
        values: Dict[str, Any],
        lock: bool = False
    ):
        query = db.query(spec.model).filter(spec.model.user_id == actor_id)
        for column, value in values.items():
            query = query.filter(getattr(spec.model, column) == value)
        if lock:
            query = query.with_for_update()
        return query.first()
    
    @staticmethod
    def _insert(
        db: Session,
        spec: EngagementSpec,
        actor_id: int,
        values: Dict[str, Any],
        action: EngagementAction
    ) -> Union[int, str]:
        row = spec.model(user_id=actor_id, **values, **spec.defaults)
        db.add(row)
        db.flush()
        
        event_id = getattr(row, spec.returning)
        if event_id is None:
            raise NotFoundError(f"No {action.value}: {values}")
        return event_id
    
    @staticmethod
    def _remove(
        db: Session,
        spec: EngagementSpec,
        actor_id: int,
        values: Dict[str, Any],
        action: EngagementAction
    ) -> Union[int, str]:
        row = EngagementRecorder._find(db, spec, actor_id, values, lock=True)
        if row is None:
            raise NotFoundError(
                f"No {action.value}: {', '.join(str(v) for v in values.values())}",
                detail=f"user_id={actor_id}"
            )
        
        event_id = getattr(row, spec.returning)
        db.delete(row)
        db.flush()
        return event_id
