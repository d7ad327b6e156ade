"""
Entity lookup helpers shared by the services.

``find_*`` methods return None for unknown ids; ``validate_*`` methods raise
the matching not-found AppException instead.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models import Item, Member
from app.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


class EntityValidationService:
    """Looks up members and items by identifier."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_member(self, member_id: int) -> Optional[Member]:
        return self._db.query(Member).filter(Member.id == member_id).first()

    def find_member_by_email(self, email: str) -> Optional[Member]:
        return self._db.query(Member).filter(
            func.lower(Member.email) == email.lower().strip()
        ).first()

    def find_item(self, item_id: int) -> Optional[Item]:
        return self._db.query(Item).filter(Item.id == item_id).first()

    def validate_member(self, member_id: int) -> Member:
        """
        Load a member or fail.

        Raises:
            AppException: MEMBER_NOT_FOUND if no such member exists
        """
        member = self.find_member(member_id)
        if member is None:
            logger.warning(f"Member not found: {member_id}")
            raise exceptions.member_not_found(member_id)
        return member
