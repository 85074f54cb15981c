"""roster — 회원/팀 데이터 접근 계층 (Member/team data-access layer)."""
