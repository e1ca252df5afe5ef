# scenic_recommendation/__init__.py

"""
경관(관광지) 추천 패키지 루트.

- cf: 하이브리드 협업 필터링 (user-based 피어슨 + item-based 코사인)
- data: 평점 / 즐겨찾기 / 주문 로그 로드 (PostgreSQL, MongoDB, in-memory)
- service: 요청 단위 추천 파이프라인
- interface: 서비스 계층에서 호출하는 추천 함수
"""
