"""
Club Model
Clubs and their membership records
"""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship
from clubhub.database import Base


class JoinState(str, enum.Enum):
    """Membership state of a user in a club"""
    PENDING = "PENDING"
    JOINED = "JOINED"


class Club(Base):
    __tablename__ = "clubs"
    __table_args__ = (
        CheckConstraint("max_capacity >= 1", name="ck_clubs_max_capacity_positive"),
    )
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    max_capacity = Column(Integer, nullable=False)
    
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    
    # Relationships
    owner = relationship("User", backref="owned_clubs")


class ClubJoin(Base):
    __tablename__ = "club_joins"
    
    club_id = Column(Integer, ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    join_state = Column(String(20), nullable=False, server_default=JoinState.PENDING.value)
    
    created_at = Column(DateTime, server_default=func.now())
    
    # Relationships
    club = relationship("Club", backref="club_joins")
    user = relationship("User", backref="club_joins")
