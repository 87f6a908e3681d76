import uuid
from typing import Dict, Iterable, List, Optional, Type, Union

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select

from leettrack.config import logger
from leettrack.db.main import execute
from leettrack.db.model import utc_now

from .model import Language, Topic

TagModel = Type[Union[Topic, Language]]

tag_logger = logger.getChild("tag")

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class TagService:
    @staticmethod
    async def normalize(
        session, model: TagModel, names: Optional[Iterable[str]]
    ) -> List[uuid.UUID]:
        """
        Resolve tag names to ids, creating the missing rows.

        Names match exactly (case-sensitive, untrimmed). The result follows the
        input order, so repeated names resolve to the same id. Rows are
        created with a conflict-ignoring insert against the unique ``name``
        constraint, which keeps concurrent first uses from producing
        duplicates. Nothing is committed here.
        """
        names = list(names or [])
        if not names:
            return []

        unique_names = list(dict.fromkeys(names))
        dialect = session.get_bind().dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise ValueError(f"Tag upsert is not supported on dialect {dialect!r}")

        now = utc_now()
        statement = (
            insert(model)
            .values(
                [
                    {"id": uuid.uuid4(), "name": name, "created_at": now, "updated_at": now}
                    for name in unique_names
                ]
            )
            .on_conflict_do_nothing(index_elements=["name"])
        )
        await execute(session, statement)

        result = await execute(
            session, select(model.id, model.name).where(model.name.in_(unique_names))
        )
        ids_by_name: Dict[str, uuid.UUID] = {name: id_ for id_, name in result.all()}

        tag_logger.debug(
            f"Resolved {len(unique_names)} {model.__tablename__} names to ids"
        )
        return [ids_by_name[name] for name in names]

    @staticmethod
    async def list_tags(session, model: TagModel) -> List[Union[Topic, Language]]:
        result = await execute(session, select(model).order_by(model.name.asc()))
        return list(result.scalars().all())
