"""
Services Package

Business logic kept apart from HTTP handling (routers), so it can be reused
and tested in isolation. Every function takes the database Session
explicitly.

Current services:
- authors.py: Author normalizer (split and upsert author names)
- catalog.py: Catalog reads and multi-step writes
- credentials.py: Username/password verification for login
- pagination.py: Offset pagination defaults and next-page cursor
- queries.py: Every SQL statement the catalog runs
- rate_limiter.py: Rate limiting with slowapi
- ratings.py: Rating aggregate validation
- security.py: Password hashing and JWT utilities
- validation.py: Request checks run before any storage call
"""
