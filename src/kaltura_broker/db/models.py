"""SQLAlchemy ORM models for database persistence."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from kaltura_broker.db.base import Base


class KalturaInstanceModel(Base):
    """ORM model for provisioned Kaltura service instances."""

    __tablename__ = "kaltura_instances"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    partner_id: Mapped[int] = mapped_column(Integer, nullable=False)
    admin_secret: Mapped[str] = mapped_column(String(255), nullable=False)
