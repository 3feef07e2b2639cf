from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from bingekaro.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Stored lowercase so uniqueness is case-insensitive
    username = Column(String(30), unique=True, index=True, nullable=False)

    email = Column(String(255), unique=True, index=True, nullable=False)

    display_name = Column(String(50), nullable=False)

    hashed_password = Column(String(255), nullable=False)

    bio = Column(Text, default="", nullable=False)

    avatar_filename = Column(String(255), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    last_login_at = Column(DateTime, nullable=True)

    favorites = relationship(
        "FavoriteMedia",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="FavoriteMedia.id",
    )
    lists = relationship("RecommendationList", back_populates="creator", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"


class FavoriteMedia(Base):
    __tablename__ = "user_favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "category", "catalog_id", name="uix_user_category_catalog"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # One of movies / series / anime
    category = Column(String(10), nullable=False)

    catalog_id = Column(String(20), nullable=False, index=True)

    title = Column(String(255), nullable=False)

    year = Column(String(20), nullable=True)

    poster = Column(String(500), nullable=True)

    genre = Column(String(255), nullable=True)

    imdb_rating = Column(Float, nullable=True)

    added_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="favorites")

    def __repr__(self):
        return f"<FavoriteMedia(user_id={self.user_id}, category={self.category}, catalog_id={self.catalog_id})>"


class RecommendationList(Base):
    __tablename__ = "recommendation_lists"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(100), nullable=False)

    description = Column(String(500), default="", nullable=False)

    creator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    is_private = Column(Boolean, default=False, nullable=False, index=True)

    # Set if and only if is_private
    secret_hash = Column(String(255), nullable=True)

    view_count = Column(Integer, default=0, nullable=False)

    like_count = Column(Integer, default=0, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    creator = relationship("User", back_populates="lists")
    items = relationship(
        "ListItem",
        back_populates="list",
        cascade="all, delete-orphan",
        order_by="ListItem.id",
    )
    tags = relationship(
        "ListTag",
        back_populates="list",
        cascade="all, delete-orphan",
        order_by="ListTag.id",
    )

    def __repr__(self):
        return f"<RecommendationList(id={self.id}, creator_id={self.creator_id}, private={self.is_private})>"


class ListItem(Base):
    __tablename__ = "list_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    list_id = Column(Integer, ForeignKey("recommendation_lists.id", ondelete="CASCADE"), nullable=False, index=True)

    catalog_id = Column(String(20), nullable=False, index=True)

    title = Column(String(255), nullable=False)

    media_type = Column(String(10), nullable=False)

    year = Column(String(20), nullable=True)

    poster = Column(String(500), nullable=True)

    genre = Column(String(255), nullable=True)

    plot = Column(Text, nullable=True)

    imdb_rating = Column(Float, nullable=True)

    notes = Column(String(200), nullable=True)

    # Attribution only; the item outlives its contributor
    added_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    added_at = Column(DateTime, default=utcnow, nullable=False)

    list = relationship("RecommendationList", back_populates="items")
    added_by = relationship("User")

    def __repr__(self):
        return f"<ListItem(list_id={self.list_id}, catalog_id={self.catalog_id})>"


class ListTag(Base):
    __tablename__ = "list_tags"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    list_id = Column(Integer, ForeignKey("recommendation_lists.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(20), nullable=False, index=True)

    list = relationship("RecommendationList", back_populates="tags")

    def __repr__(self):
        return f"<ListTag(list_id={self.list_id}, name={self.name})>"
