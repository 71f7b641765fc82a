"""
==============================================================================
라우터 패키지 (routers/)
==============================================================================

이 폴더는 API 엔드포인트들을 담고 있습니다.
관련된 API 엔드포인트들을 그룹으로 묶어 main.py에서 등록합니다.

    ├── users.py     -> 회원가입/로그인 API (/api/users, /api/login)
    ├── posts.py     -> 게시글 API (/api/posts/...)
    └── comments.py  -> 댓글 API (/api/posts/{post_id}/comments/...)

로그인이 필요한 API는 app.dependencies.get_current_user_id 의존성을 사용하고,
작성자만 수정/삭제할 수 있는 API는 app.services.ownership을 사용합니다.

==============================================================================
"""
