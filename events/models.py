from extensions import db
from helpers import format_timestamp
from datetime import datetime

starred_events = db.Table(
    "starred_events",
    db.Column("user_id", db.Integer, db.ForeignKey("users.id"), primary_key=True),
    db.Column("event_id", db.Integer, db.ForeignKey("events.id"), primary_key=True),
)


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    venue = db.Column(db.String(200))
    topic_name = db.Column(db.String(100))
    start_date = db.Column(db.DateTime, nullable=False, index=True)
    end_date = db.Column(db.DateTime, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        # Listing projection only; the rest of the event stays server side
        return {
            "id": self.id,
            "name": self.name,
            "startDate": format_timestamp(self.start_date),
            "endDate": format_timestamp(self.end_date),
            "topicName": self.topic_name,
        }

    def __repr__(self):
        return f"<Event {self.name}>"
