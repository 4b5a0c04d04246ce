from sqlalchemy import Column, String

from core.models import Base, TimestampMixin


class Setting(Base, TimestampMixin):
    __tablename__ = "business_settings"

    key = Column(String(64), primary_key=True)
    value = Column(String(255), nullable=False)
