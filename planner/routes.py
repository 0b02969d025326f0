from flask import Blueprint, request, current_app
from flask_login import current_user
from sqlalchemy import and_, or_
from planner.models import Reminder
from events.models import Event
from extensions import db
from accounts.decorators import login_required
from helpers import create_error, create_response, json_body, parse_timestamp

planner_bp = Blueprint('planner', __name__, url_prefix='/calendar')

ALLOWED_UPDATES = ['title', 'startTime', 'endTime', 'venue']
RANGE_REMINDER_FIELDS = [
    'id', 'title', 'endTime', 'startTime', 'venue',
    'color', 'repeat', 'description', 'reminder',
]


def _owned_reminder(reminder_id):
    return Reminder.query.filter_by(id=reminder_id, created_by=current_user.id).first()


def _window():
    # POST carries the bounds in the body, GET in the query string
    source = json_body() if request.method == 'POST' else request.args
    start, end = source.get('startTime'), source.get('endTime')
    if start is None or end is None:
        raise create_error(400, "ValidationError", "startTime and endTime are required")
    if request.method == 'GET':
        start, end = _numeric(start), _numeric(end)
    return parse_timestamp(start, 'startTime'), parse_timestamp(end, 'endTime')


def _numeric(value):
    # Query strings carry epoch milliseconds as text
    try:
        return int(value)
    except ValueError:
        return value


def _in_window(start_col, end_col, start, end):
    if current_app.config['CALENDAR_STRICT_OVERLAP']:
        return and_(start_col <= end, end_col >= start)
    return or_(
        and_(start_col >= start, start_col <= end),
        and_(end_col >= start, end_col <= end),
    )


def _reminder_in_window(start, end):
    if current_app.config['CALENDAR_STRICT_OVERLAP']:
        return and_(Reminder.start_time <= end, Reminder.end_time >= start)
    # Legacy bound check: matches anything starting after the window opens
    # or ending before it closes, not just overlapping reminders
    return or_(Reminder.start_time >= start, Reminder.end_time <= end)


# ================= REMINDERS =================

@planner_bp.route('/reminders', methods=['POST'])
@login_required
def set_reminder():
    data = json_body()
    reminder = Reminder().apply(data)
    reminder.created_by = current_user.id
    db.session.add(reminder)
    db.session.commit()
    current_app.logger.info("Reminder %s created by user %s", reminder.id, current_user.id)
    return create_response('Reminder Added Succesfully', reminder.to_dict())


@planner_bp.route('/reminders', methods=['GET'])
@login_required
def get_reminder():
    reminders = Reminder.query.filter_by(created_by=current_user.id).order_by(Reminder.id).all()
    return create_response('Successful', [r.to_dict() for r in reminders])


@planner_bp.route('/reminders/<int:id>', methods=['PATCH', 'PUT'])
@login_required
def update_reminder(id):
    data = json_body()

    # Ownership first: a foreign reminder answers Failure whatever the body holds
    reminder = _owned_reminder(id)
    if not reminder:
        raise create_error(401, "Failure", "Reminder with given id donot exists")

    # Only these fields may change; anything else fails the whole request
    invalid = [key for key in data if key not in ALLOWED_UPDATES]
    if invalid:
        current_app.logger.warning("Rejected update of %s on reminder %s", invalid, id)
        raise create_error(
            400,
            "ValidationError",
            "Update fields donot match. Following can only be updated",
            ALLOWED_UPDATES,
        )

    reminder.apply({key: data[key] for key in ALLOWED_UPDATES if key in data})
    db.session.commit()
    current_app.logger.info("Reminder %s updated by user %s", reminder.id, current_user.id)
    return create_response('Update Successfull', reminder.to_dict())


@planner_bp.route('/reminders/<int:id>', methods=['DELETE'])
@login_required
def delete_reminder(id):
    reminder = _owned_reminder(id)
    if not reminder:
        raise create_error(401, "Failure", "Either id or the token is wrong")

    db.session.delete(reminder)
    db.session.commit()
    current_app.logger.info("Reminder %s deleted by user %s", id, current_user.id)
    return create_response('Reminder deleted Successfully', {})


# ================= EVENTS + REMINDERS =================

@planner_bp.route('/events', methods=['GET', 'POST'])
@login_required
def get_all_events_and_reminder():
    start, end = _window()

    reminders = Reminder.query.filter(
        Reminder.created_by == current_user.id,
        _reminder_in_window(start, end),
    ).order_by(Reminder.id).all()

    event = Event.query.filter(
        _in_window(Event.start_date, Event.end_date, start, end)
    ).order_by(Event.start_date).all()

    starred = Event.query.filter(
        Event.starred_by.any(id=current_user.id),
        _in_window(Event.start_date, Event.end_date, start, end),
    ).order_by(Event.start_date).all()

    return create_response('SuccesFull', {
        "reminders": [r.to_dict(RANGE_REMINDER_FIELDS) for r in reminders],
        "staredEvents": [e.to_dict() for e in starred],
        "event": [e.to_dict() for e in event],
    })
