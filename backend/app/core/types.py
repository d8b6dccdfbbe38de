"""Column types and defaults shared by the models"""
from datetime import datetime, timezone
from typing import List, Optional
import json
import uuid

from sqlalchemy import TypeDecorator, String, Text


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GUID(TypeDecorator):
    """UUIDs stored as VARCHAR(36) on every backend"""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return str(value)
        return value


class StringList(TypeDecorator):
    """Ordered list of strings serialized as a JSON array in a TEXT column"""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[List[str]], dialect):
        if value is None:
            return None
        return json.dumps([str(item) for item in value])

    def process_result_value(self, value, dialect) -> Optional[List[str]]:
        if value is None:
            return None
        return list(json.loads(value))
