"""
Base model for all SQLAlchemy models
"""
import secrets
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_id() -> str:
    """Opaque 24-hex-character record id (used in public short links)."""
    return secrets.token_hex(12)


class BaseModel(DeclarativeBase):
    """Base model with common fields for all models"""

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=generate_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        server_default=func.now(),
        nullable=False
    )
