from sqlalchemy import DateTime, Text

from leettrack.auth.model import User
from leettrack.problem.model import Problem
from leettrack.tag.model import Language, Topic


def test_new_entities_get_timezone_aware_timestamps():
    topic = Topic(name="Graph")

    assert topic.created_at.tzinfo is not None
    assert topic.updated_at.tzinfo is not None


def test_timestamp_columns_store_timezone():
    for model in (User, Problem, Topic, Language):
        for column in ("created_at", "updated_at"):
            column_type = model.__table__.c[column].type
            assert isinstance(column_type, DateTime)
            assert column_type.timezone is True


def test_name_columns_have_no_length_limit():
    assert isinstance(Problem.__table__.c.name.type, Text)
    assert isinstance(Problem.__table__.c.leetcode_link.type, Text)
    assert isinstance(Topic.__table__.c.name.type, Text)
    assert isinstance(Language.__table__.c.name.type, Text)
