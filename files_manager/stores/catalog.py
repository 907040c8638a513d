"""
Document-style access to the ``files`` and ``users`` tables.

Records go in and come out as plain dicts keyed by column name, so the
services never hold on to ORM instances or a session.
"""
from sqlalchemy.orm import Session

from files_manager.models.file import FileRecord
from files_manager.models.user import User

# stages have to come in this order, each at most once
PIPELINE_STAGES = ("$match", "$skip", "$limit")


def _to_document(row, columns) -> dict:
    return {column: getattr(row, column) for column in columns}


class FileCatalog:
    columns = ("id", "user_id", "name", "type", "parent_id", "is_public", "local_path")

    def __init__(self, db: Session):
        self.db = db

    def find_one(self, criteria: dict) -> dict | None:
        row = self.db.query(FileRecord).filter_by(**criteria).first()
        return _to_document(row, self.columns) if row else None

    def insert_one(self, document: dict) -> int:
        row = FileRecord(**document)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row.id

    def find_one_and_update(self, criteria: dict, values: dict) -> dict | None:
        row = self.db.query(FileRecord).filter_by(**criteria).first()
        if row is None:
            return None
        for column, value in values.items():
            setattr(row, column, value)
        self.db.commit()
        self.db.refresh(row)
        return _to_document(row, self.columns)

    def aggregate(self, pipeline: list[dict]) -> list[dict]:
        """Run a ``$match`` / ``$skip`` / ``$limit`` pipeline in insertion order."""
        query = self.db.query(FileRecord)
        match, skip, limit = {}, 0, None
        last = -1
        for stage in pipeline:
            if len(stage) != 1:
                raise ValueError(f"Pipeline stage must have exactly one operator: {stage!r}")
            (operator, argument), = stage.items()
            if operator not in PIPELINE_STAGES:
                raise ValueError(f"Unsupported pipeline stage: {operator}")
            position = PIPELINE_STAGES.index(operator)
            if position <= last:
                raise ValueError(f"Pipeline stage out of order: {operator}")
            last = position
            if operator == "$match":
                match = argument
            elif operator == "$skip":
                skip = argument
            else:
                limit = argument

        query = query.filter_by(**match).order_by(FileRecord.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [_to_document(row, self.columns) for row in query.all()]


class UserDirectory:
    columns = ("id", "email", "password")

    def __init__(self, db: Session):
        self.db = db

    def find_one(self, criteria: dict) -> dict | None:
        row = self.db.query(User).filter_by(**criteria).first()
        return _to_document(row, self.columns) if row else None

    def insert_one(self, document: dict) -> int:
        row = User(**document)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row.id
