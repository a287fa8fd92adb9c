from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import Column, DateTime, String, Text, create_engine, func, select
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import declarative_base, sessionmaker
from gallery.settings import settings
import logging

log = logging.getLogger(__name__)

Base = declarative_base()

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class UTCDateTime(TypeDecorator):
    """Stores UTC and hands back aware datetimes, also on backends without zones (SQLite)."""
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

class ImageRow(Base):
    __tablename__ = "images"

    id = Column(String(36), primary_key=True)
    tag = Column(Text, nullable=False, index=True)
    # Microsecond resolution keeps the newest-first order stable for rapid uploads
    created_at = Column(UTCDateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), index=True)

# -------------------------
# Metadata Store
# -------------------------
class MetadataStore:
    def __init__(self, database_url: Optional[str] = None):
        url = database_url or settings.database_url
        kwargs = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}

        self.engine = create_engine(url, **kwargs)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        log.info("Initialized metadata store %s", self.engine.url.render_as_string(hide_password=True))

        # Ensure table exists at initialization
        self.ensure_table()

    def ensure_table(self):
        Base.metadata.create_all(bind=self.engine)
        log.debug("Table %s is ready", ImageRow.__tablename__)

    def put_metadata(self, image_id: str, tag: str) -> ImageRow:
        with self.session_factory() as session:
            row = ImageRow(id=image_id, tag=tag)
            session.add(row)
            session.commit()
        log.debug("Inserted metadata %s", image_id)
        return row

    def list_metadata(self) -> List[ImageRow]:
        stmt = select(ImageRow).order_by(ImageRow.created_at.desc())
        with self.session_factory() as session:
            return list(session.scalars(stmt))

    def random_metadata(self, tag: str) -> List[ImageRow]:
        stmt = select(ImageRow).where(ImageRow.tag == tag).order_by(func.random()).limit(1)
        with self.session_factory() as session:
            return list(session.scalars(stmt))

    def close(self):
        self.engine.dispose()
        log.info("Closed metadata store")
