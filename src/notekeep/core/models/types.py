"""Column types shared by the models."""

import uuid

from sqlalchemy import TypeDecorator, Uuid


class GUID(TypeDecorator):
    """UUID column: native ``uuid`` on PostgreSQL, 32-char hex elsewhere (SQLite).

    Bind values may be ``uuid.UUID`` objects or their string form; rows always
    come back as ``uuid.UUID``.
    """

    impl = Uuid
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))
