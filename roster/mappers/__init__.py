"""엔티티 매퍼 패키지.

Entity mapper package.

Modules:
    auditing: 쓰기 직전 감사 컬럼 기록 (Pre-write audit stamping)
    member_mapper: 엔티티 ↔ 스키마/프로젝션 변환 (Entity to schema/projection conversion)
"""
