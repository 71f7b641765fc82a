"""
==============================================================================
데이터베이스 모델 정의 (models.py)
==============================================================================

이 파일은 DB 테이블의 구조를 정의합니다.

현재 사용하는 테이블:
    1. users - 회원 (닉네임, 비밀번호 해시)
    2. posts - 게시글
    3. comments - 댓글

테이블 관계:
    posts.user_id    -> users.user_id (FK, N:1)
    comments.user_id -> users.user_id (FK, N:1)
    comments.post_id -> posts.post_id (FK, N:1, 게시글 삭제 시 함께 삭제)

==============================================================================
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


def utcnow() -> datetime:
    # 목록 정렬에 쓰이므로 DB 기본값(초 단위) 대신 마이크로초까지 기록
    return datetime.now(timezone.utc)


class User(Base):
    """
    유저 테이블

    비밀번호는 원문이 아닌 솔트가 포함된 해시로만 저장합니다.
    """

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nickname = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    posts = relationship("Post", back_populates="user")
    comments = relationship("Comment", back_populates="user")

    def __repr__(self):
        return f"<User(user_id={self.user_id}, nickname={self.nickname})>"


class Post(Base):
    """
    게시글 테이블

    작성자(user_id)만 수정/삭제할 수 있습니다.
    """

    __tablename__ = "posts"

    post_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Post(post_id={self.post_id}, title={self.title[:30] if self.title else 'None'}...)>"


class Comment(Base):
    """
    댓글 테이블

    작성자(user_id)만 수정/삭제할 수 있습니다.
    """

    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.post_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)

    comment = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    post = relationship("Post", back_populates="comments")
    user = relationship("User", back_populates="comments")

    def __repr__(self):
        return f"<Comment(comment_id={self.comment_id}, post_id={self.post_id}, user_id={self.user_id})>"
