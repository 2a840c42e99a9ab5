"""SQLAlchemy repository implementations.

Import concrete repositories from their modules; services wire them through
``with_session``.
"""
