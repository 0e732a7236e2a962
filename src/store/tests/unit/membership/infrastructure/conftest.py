"""Fixtures shared by the membership infrastructure tests."""

import pytest
from sqlalchemy import Column, MetaData, String, Table

from membership.domain.entities import User
from membership.infrastructure.mappings import EntityMapping


@pytest.fixture
def renamed_user_mapping() -> EntityMapping[User]:
    """A user mapping whose column names differ from the entity field names."""
    table = Table(
        "person",
        MetaData(),
        Column("person_id", String, primary_key=True),
        Column("auth_ref", String),
        Column("email_address", String),
        Column("given_name", String),
        Column("family_name", String),
    )
    return EntityMapping(
        name="user",
        entity=User,
        table=table,
        columns={
            "id": "person_id",
            "auth_id": "auth_ref",
            "email": "email_address",
            "first_name": "given_name",
            "last_name": "family_name",
        },
        insert_fields=("id", "auth_id", "email", "first_name", "last_name"),
    )
