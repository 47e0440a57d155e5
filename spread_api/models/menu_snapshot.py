"""MenuSnapshot model.

Latest priced menu per store. Freshness is decided by readers from
`updated_at`; rows are overwritten in place, never deleted.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from spread_api.stores.postgres import Base


class MenuSnapshot(Base):
    """Cached menu for one store."""

    __tablename__ = "menu_cache"

    store_id: Mapped[str] = mapped_column(String(7), primary_key=True)

    # JSON array of {"name": str, "price": float}
    items_json: Mapped[str] = mapped_column(Text, default="[]")

    # Set by the writer (not server_default) so the TTL check uses capture time
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    def __repr__(self) -> str:
        return f"<MenuSnapshot {self.store_id} @ {self.updated_at.isoformat()}>"
