from sqlalchemy import Column, DateTime, Index, Integer, String, create_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    # Surrogate key: insertion order, used as the stable tie-break when sorting
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    name_normalized = Column(String(255), nullable=False)  # utils.text.normalize(name)
    email = Column(String(255), nullable=False)  # unique among active rows only
    password = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # NULL = active

    __table_args__ = (
        Index("idx_users_email_deleted", "email", "deleted_at"),
        Index("idx_users_name_normalized", "name_normalized"),
        Index("idx_users_deleted_created", "deleted_at", "created_at"),
    )


def create_all(engine_url: str) -> None:
    engine = create_engine(engine_url)
    Base.metadata.create_all(engine)
