"""User model - the demo table served by the users endpoint."""
from quasar_table.extensions import db


class User(db.Model):
    """User account listed in the users data table."""

    __tablename__ = "qt_users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False, unique=True, index=True)

    group_id = db.Column(db.Integer, db.ForeignKey("qt_groups.id"), nullable=True)
    group = db.relationship("Group", back_populates="users")

    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    def __repr__(self):
        return f"<User {self.email}>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "group_id": self.group_id,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
