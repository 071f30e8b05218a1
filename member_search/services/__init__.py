"""서비스 패키지 — 검색 오케스트레이션 계층.

Service package — Search orchestration layer.
Services validate requests, call repositories for DB operations and
assemble pages from the results.
"""
