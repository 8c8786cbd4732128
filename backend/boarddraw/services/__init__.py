"""
Services Layer

Pure draw and scoring engines plus the DB-facing services that feed them:
- Engines accept plain dataclasses and an injected random.Random
- DB services accept a Session and IDs, and return summaries
- Neither depends on HTTP request/response objects
"""
