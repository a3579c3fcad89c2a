"""
Unit tests for the ORM mappings.
"""

import warnings

from sqlalchemy import inspect
from sqlalchemy.orm import configure_mappers

from carbon_tracker.models import Base, SubmissionORM, UserORM


def test_mappers_configure_without_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        configure_mappers()


def test_submissions_reference_users_by_key_only():
    assert not inspect(UserORM).relationships
    assert not inspect(SubmissionORM).relationships
    (foreign_key,) = Base.metadata.tables["submissions"].c.user_id.foreign_keys
    assert foreign_key.target_fullname == "users.id"
    assert foreign_key.ondelete == "CASCADE"
