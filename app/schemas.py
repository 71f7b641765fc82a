"""
==============================================================================
API 스키마 정의 (schemas.py)
==============================================================================

이 파일은 API에서 주고받는 데이터의 형식을 정의합니다.

필드 이름은 프론트엔드와 맞추기 위해 camelCase를 사용합니다.
(예: confirmPassword, postId, createdAt)

요청 스키마의 본문 필드(title, content, comment)는 빈 문자열을 허용합니다.
수정 API는 "존재 여부 -> 권한 -> 내용" 순서로 검사해야 하므로,
빈 내용 검사는 스키마가 아닌 라우터에서 합니다.

==============================================================================
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class MessageResponse(BaseModel):
    """공통 메시지 응답 (성공/실패 모두 message 필드 사용)"""
    message: str


# =============================================================================
# 유저 API 스키마
# =============================================================================

class SignupRequest(BaseModel):
    """
    회원가입 요청 스키마

    요청 예시:
    {
        "nickname": "jongjong",
        "password": "1234qwer",
        "confirmPassword": "1234qwer"
    }
    """
    nickname: str
    password: str
    confirmPassword: str


class LoginRequest(BaseModel):
    nickname: str
    password: str


# =============================================================================
# 게시글 API 스키마
# =============================================================================

class PostWriteRequest(BaseModel):
    """게시글 작성/수정 요청 스키마"""
    title: str = ""
    content: str = ""


class PostSummary(BaseModel):
    """
    게시글 목록 항목

    API 응답 예시:
    {
        "postId": 1,
        "userId": 3,
        "nickname": "jongjong",
        "title": "제목",
        "createdAt": "2023-11-06T11:41:33",
        "updatedAt": "2023-11-06T11:41:33"
    }
    """
    postId: int
    userId: int
    nickname: Optional[str] = None
    title: str
    createdAt: datetime
    updatedAt: datetime


class PostDetail(PostSummary):
    """게시글 상세 (목록 항목 + 본문)"""
    content: str


class PostListResponse(BaseModel):
    data: list[PostSummary]


class PostDetailResponse(BaseModel):
    data: PostDetail


class PostMutationResponse(BaseModel):
    """게시글 수정/삭제 결과"""
    message: str
    postId: int


# =============================================================================
# 댓글 API 스키마
# =============================================================================

class CommentWriteRequest(BaseModel):
    """댓글 작성/수정 요청 스키마"""
    comment: str = ""


class CommentItem(BaseModel):
    commentId: int
    postId: int
    userId: int
    nickname: Optional[str] = None
    comment: str
    createdAt: datetime
    updatedAt: datetime


class CommentListResponse(BaseModel):
    data: list[CommentItem]


class CommentDetailResponse(BaseModel):
    data: CommentItem


class CommentMutationResponse(BaseModel):
    """댓글 수정/삭제 결과"""
    message: str
    commentId: int
