"""
Event Models
Owned by the event subsystem; clubs only delete or archive them
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, false
from sqlalchemy.orm import relationship
from clubhub.database import Base


class Event(Base):
    __tablename__ = "events"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    club_id = Column(Integer, ForeignKey("clubs.id", ondelete="SET NULL"), nullable=True, index=True)
    host_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    start_time = Column(DateTime, nullable=False)
    
    # Set when the owning club was deleted after the event started
    is_archived = Column(Boolean, nullable=False, default=False, server_default=false())
    
    # Relationships
    club = relationship("Club", backref="events")
    host = relationship("User", backref="hosted_events")


class EventJoin(Base):
    __tablename__ = "event_joins"
    
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    
    # Relationships
    event = relationship("Event", backref="participants")
    user = relationship("User", backref="event_joins")
