"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Contains the predicate composer and repository classes that handle pure
database operations. Repositories never catch collaborator failures.
"""
