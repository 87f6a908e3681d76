import pytest

from leettrack.tag.model import Language, Topic
from leettrack.tag.service import TagService


@pytest.mark.asyncio
async def test_normalize_creates_missing_tags(test_db):
    ids = await TagService.normalize(test_db, Topic, ["Array", "Hash Table"])
    test_db.commit()

    assert len(ids) == 2
    names = {topic.id: topic.name for topic in test_db.query(Topic).all()}
    assert [names[topic_id] for topic_id in ids] == ["Array", "Hash Table"]


@pytest.mark.asyncio
async def test_normalize_is_idempotent_across_calls(test_db):
    first = await TagService.normalize(test_db, Topic, ["Graph"])
    test_db.commit()
    second = await TagService.normalize(test_db, Topic, ["Graph"])
    test_db.commit()

    assert first == second
    assert test_db.query(Topic).filter(Topic.name == "Graph").count() == 1


@pytest.mark.asyncio
async def test_normalize_repeated_name_in_one_call(test_db):
    ids = await TagService.normalize(test_db, Language, ["Go", "Rust", "Go"])

    assert ids[0] == ids[2]
    assert ids[0] != ids[1]
    assert test_db.query(Language).count() == 2


@pytest.mark.asyncio
async def test_normalize_matches_names_exactly(test_db):
    ids = await TagService.normalize(test_db, Topic, ["DP", "dp", " DP"])

    assert len(set(ids)) == 3
    assert test_db.query(Topic).count() == 3


@pytest.mark.asyncio
async def test_normalize_empty_input(test_db):
    assert await TagService.normalize(test_db, Topic, []) == []
    assert await TagService.normalize(test_db, Topic, None) == []
    assert test_db.query(Topic).count() == 0


@pytest.mark.asyncio
async def test_topics_and_languages_are_separate(test_db):
    await TagService.normalize(test_db, Topic, ["Python"])
    await TagService.normalize(test_db, Language, ["Python"])

    assert test_db.query(Topic).count() == 1
    assert test_db.query(Language).count() == 1


@pytest.mark.asyncio
async def test_list_tags_sorted_by_name(test_db):
    await TagService.normalize(test_db, Topic, ["Tree", "Array", "Math"])
    test_db.commit()

    tags = await TagService.list_tags(test_db, Topic)

    assert [tag.name for tag in tags] == ["Array", "Math", "Tree"]
