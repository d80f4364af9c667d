import uuid
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    email = db.Column(db.String(320), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)


class Todo(db.Model):
    __tablename__ = "todos"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    task = db.Column(db.Text, nullable=False)
    is_complete = db.Column(db.Boolean, default=False, nullable=False)
    translation = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False, index=True)
    user_id = db.Column(
        db.String(36), db.ForeignKey("user.id"), nullable=True, index=True
    )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "task": self.task,
            "is_complete": self.is_complete,
            "translation": self.translation,
            "created_at": self.created_at,
            "user_id": self.user_id,
        }
