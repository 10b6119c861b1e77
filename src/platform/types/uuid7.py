"""
UUID7 identifiers

Primary keys are time-ordered UUID7 values generated by ``uuid_utils`` and
converted to the stdlib ``uuid.UUID`` so SQLAlchemy's ``Uuid`` column type and
pydantic handle them natively.
"""

import uuid

import uuid_utils


def new_uuid7() -> uuid.UUID:
    return uuid.UUID(str(uuid_utils.uuid7()))
