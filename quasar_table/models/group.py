"""Group model - user groups shown alongside users in tables."""
from quasar_table.extensions import db


class Group(db.Model):
    """Named group of users."""
    
    __tablename__ = "qt_groups"
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    
    users = db.relationship("User", back_populates="group", lazy="dynamic")
    
    def __repr__(self):
        return f"<Group {self.name}>"
    
    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
        }
