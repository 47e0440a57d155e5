"""Location model.

One row per discovered store of the chain. Rows are reference data: they are
written once by store discovery and never expire.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from spread_api.stores.postgres import Base


class Location(Base):
    """A chain store location keyed by the chain-assigned store code."""

    __tablename__ = "store_locations"

    # Chain-assigned code (6-7 alphanumerics)
    store_id: Mapped[str] = mapped_column(String(7), primary_key=True)

    # Display
    name: Mapped[str] = mapped_column(String(200))
    address: Mapped[str] = mapped_column(String(500), default="")

    # Coordinates (bounding-box range queries)
    latitude: Mapped[float] = mapped_column(index=True)
    longitude: Mapped[float] = mapped_column(index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Location {self.store_id} ({self.latitude:.4f}, {self.longitude:.4f})>"
