"""
Connection State Machine
Peer follow requests: pending -> approved, or removed
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional

from herohub.core.exceptions import (
    BadRequestError,
    DuplicateEngagementError,
    NotFoundError,
    UnauthorizedError,
)
from herohub.models.connection import CONNECTION_STATUS_REQUESTED, UserConnection

logger = logging.getLogger(__name__)


class ConnectionService:
    """
    Transitions for the ordered (requester -> target) connection row
    
    request:  (none)   -> pending   creates the row
    approve:  pending  -> approved  target only
    reject:   pending  -> (none)    target only, deletes the row
    remove:   approved/pending -> (none)  requester only, deletes the row
    
    The reverse pair is an independent row. No activity entry is written.
    When acting_user_id is omitted the caller has already checked who may act.
    """
    
    @staticmethod
    def request(
        db: Session,
        requester_id: int,
        target_id: int
    ) -> int:
        """
        Create a pending connection request
        
        Returns:
            connection_id of the new row
            
        Raises:
            BadRequestError: Requesting a connection to oneself
            DuplicateEngagementError: A row for the ordered pair already exists
        """
        if requester_id == target_id:
            raise BadRequestError("Cannot connect to yourself")
        
        connection = UserConnection(
            connector_user_id=requester_id,
            connectee_user_id=target_id,
            status=CONNECTION_STATUS_REQUESTED,
            active=False
        )
        db.add(connection)
        
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            if ConnectionService._find(db, requester_id, target_id) is not None:
                logger.warning(f"Duplicate connection request {requester_id} -> {target_id}")
                raise DuplicateEngagementError(
                    f"Connection already requested: {target_id}",
                    detail=f"user_id={requester_id}"
                )
            raise
        
        connection_id = connection.connection_id
        if connection_id is None:
            db.rollback()
            raise NotFoundError(f"No user: {target_id}")
        
        db.commit()
        logger.info(f"User {requester_id} requested connection to {target_id}")
        return connection_id
    
    @staticmethod
    def approve(
        db: Session,
        requester_id: int,
        target_id: int,
        acting_user_id: Optional[int] = None
    ) -> None:
        """Approve a pending request; only the target may approve"""
        ConnectionService._check_actor(acting_user_id, target_id)
        
        connection = ConnectionService._find(db, requester_id, target_id, active=False, lock=True)
        if connection is None:
            raise NotFoundError(f"No pending request from user: {requester_id}")
        
        connection.active = True
        db.commit()
        logger.info(f"User {target_id} approved connection from {requester_id}")
    
    @staticmethod
    def reject(
        db: Session,
        requester_id: int,
        target_id: int,
        acting_user_id: Optional[int] = None
    ) -> None:
        """Reject a pending request; only the target may reject"""
        ConnectionService._check_actor(acting_user_id, target_id)
        
        connection = ConnectionService._find(db, requester_id, target_id, active=False, lock=True)
        if connection is None:
            raise NotFoundError(f"No pending request from user: {requester_id}")
        
        db.delete(connection)
        db.commit()
        logger.info(f"User {target_id} rejected connection from {requester_id}")
    
    @staticmethod
    def remove(
        db: Session,
        requester_id: int,
        target_id: int,
        acting_user_id: Optional[int] = None
    ) -> None:
        """Tear down a connection (or withdraw a pending request); only the requester may remove"""
        ConnectionService._check_actor(acting_user_id, requester_id)
        
        connection = ConnectionService._find(db, requester_id, target_id, lock=True)
        if connection is None:
            raise NotFoundError(f"No connection to user: {target_id}")
        
        db.delete(connection)
        db.commit()
        logger.info(f"User {requester_id} removed connection to {target_id}")
    
    @staticmethod
    def _check_actor(acting_user_id: Optional[int], allowed_user_id: int) -> None:
        if acting_user_id is not None and acting_user_id != allowed_user_id:
            raise UnauthorizedError(
                "Not allowed to change this connection",
                detail=f"user_id={acting_user_id}"
            )
    
    @staticmethod
    def _find(
        db: Session,
        requester_id: int,
        target_id: int,
        active: Optional[bool] = None,
        lock: bool = False
    ) -> Optional[UserConnection]:
        query = db.query(UserConnection).filter(
            UserConnection.connector_user_id == requester_id,
            UserConnection.connectee_user_id == target_id
        )
        if active is not None:
            query = query.filter(UserConnection.active.is_(active))
        if lock:
            query = query.with_for_update()
        return query.first()
