"""
Domain error taxonomy

Every error the core raises on purpose derives from HeroHubError and
carries the HTTP status the API layer renders it with.
"""
from typing import Any, Optional

from fastapi import status


class HeroHubError(Exception):
    """Base class for domain errors"""
    
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    
    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(HeroHubError):
    """A referenced row does not exist, or a mutation affected zero rows"""
    
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateEngagementError(NotFoundError):
    """The (actor, target) pair already holds this engagement"""
    
    status_code = status.HTTP_409_CONFLICT


class BadRequestError(HeroHubError):
    """Malformed payload"""
    
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(HeroHubError):
    """Actor lacks permission for the target operation"""
    
    status_code = status.HTTP_401_UNAUTHORIZED


class InconsistencyError(HeroHubError):
    """
    Primary mutation succeeded but the activity ledger append did not
    
    Attributes:
        action: Engagement action being recorded
        actor_id: Acting user
        target: Hero id (or payload key) the action was aimed at
        step: Which step failed ("ledger_append")
        rolled_back: True when the primary mutation was rolled back
    """
    
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    
    def __init__(
        self,
        message: str,
        action: str,
        actor_id: int,
        target: Any,
        step: str,
        rolled_back: bool,
        detail: Optional[str] = None
    ):
        super().__init__(message, detail)
        self.action = action
        self.actor_id = actor_id
        self.target = target
        self.step = step
        self.rolled_back = rolled_back
