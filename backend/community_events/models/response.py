"""EventResponse ORM model — one like/dislike per (event, participant)."""
import enum
from sqlalchemy import Column, String, DateTime, UniqueConstraint
from community_events.database import Base


class ResponseType(str, enum.Enum):
    like = "like"
    dislike = "dislike"


class EventResponse(Base):
    __tablename__ = "event_responses"
    __table_args__ = (UniqueConstraint("event_id", "participant_id", name="uq_event_participant"),)

    id = Column(String(512), primary_key=True)  # f"{event_id}_{participant_id}"
    event_id = Column(String(255), nullable=False, index=True)
    participant_id = Column(String(255), nullable=False)
    response_type = Column(String(20), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
