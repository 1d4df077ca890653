# backend/moodae/models/journal.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, JSON
from sqlalchemy.sql import func
from moodae.core.database import Base


class JournalEntry(Base):
    """Stored mood journal entry. The insights engine only ever reads these."""
    __tablename__ = "journal_entries"

    id = Column(String(36), primary_key=True)                # UUID string
    owner_id = Column(Integer, nullable=False, index=True)
    recorded_at = Column(DateTime(timezone=True), nullable=False, index=True)  # may be backdated
    mood = Column(String(20), nullable=False)                # 'amazing' ... 'overwhelming'
    text_entry = Column(Text, nullable=True)
    categories = Column(JSON, nullable=True)                 # [{"category": "People", "options": ["friends"]}]
    has_photo = Column(Boolean, default=False)
    has_audio = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    revision = Column(Integer, nullable=False)              # bumped by the ORM on every update

    __mapper_args__ = {"version_id_col": revision}

    def __repr__(self):
        return f"<JournalEntry(owner_id={self.owner_id}, mood={self.mood}, recorded_at={self.recorded_at})>"
