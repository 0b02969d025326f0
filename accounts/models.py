from extensions import db
from datetime import datetime
from flask_login import UserMixin

# =========================
# USER / AUTH MODEL
# =========================
class User(db.Model, UserMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    is_active = db.Column(db.Boolean, default=True)
    created_on = db.Column(db.DateTime, default=datetime.utcnow)

    # Events the user tracks without owning them
    starred_events = db.relationship(
        "Event",
        secondary="starred_events",
        backref=db.backref("starred_by", lazy="dynamic"),
    )

    def __repr__(self):
        return f"<User {self.email}>"
