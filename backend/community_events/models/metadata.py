"""EventMetadata ORM model — supplementary data owned by this service."""
from sqlalchemy import Column, String, Text, DateTime
from community_events.database import Base


class EventMetadata(Base):
    __tablename__ = "event_metadata"

    event_id = Column(String(255), primary_key=True)
    image_path = Column(Text, nullable=True)
    image_category = Column(String(50), nullable=True)
    additional_info = Column(Text, nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=False)
