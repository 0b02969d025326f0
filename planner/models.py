from extensions import db
from helpers import format_timestamp, parse_timestamp
from datetime import datetime

# camelCase wire name -> column attribute
REMINDER_FIELDS = {
    "title": "title",
    "startTime": "start_time",
    "endTime": "end_time",
    "venue": "venue",
    "color": "color",
    "repeat": "repeat",
    "description": "description",
    "reminder": "reminder",
}
TIME_FIELDS = {"startTime", "endTime"}


class Reminder(db.Model):
    __tablename__ = 'reminders'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime, nullable=False)
    venue = db.Column(db.String(200))
    color = db.Column(db.String(30))
    repeat = db.Column(db.String(50))
    description = db.Column(db.Text)
    reminder = db.Column(db.String(50))
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def apply(self, payload):
        """Copy known wire fields from payload onto the row. Unknown keys are ignored."""
        for key, attr in REMINDER_FIELDS.items():
            if key not in payload:
                continue
            value = payload[key]
            if key in TIME_FIELDS:
                value = parse_timestamp(value, key)
            setattr(self, attr, value)
        return self

    def to_dict(self, fields=None):
        data = {
            "id": self.id,
            "title": self.title,
            "startTime": format_timestamp(self.start_time),
            "endTime": format_timestamp(self.end_time),
            "venue": self.venue,
            "color": self.color,
            "repeat": self.repeat,
            "description": self.description,
            "reminder": self.reminder,
            "createdBy": self.created_by,
            "createdAt": format_timestamp(self.created_at),
        }
        if fields is None:
            return data
        return {key: data[key] for key in fields}

    def __repr__(self):
        return f"<Reminder {self.id} {self.title}>"
