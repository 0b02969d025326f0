from datetime import datetime

import pytest
from sqlalchemy import inspect

from extensions import db
from helpers import ApiError, create_error, log_level, parse_timestamp


def test_parse_epoch_milliseconds():
    assert parse_timestamp(1714521600000) == datetime(2024, 5, 1)


def test_parse_naive_iso_is_kept():
    assert parse_timestamp("2024-05-01T09:30:00") == datetime(2024, 5, 1, 9, 30)


def test_parse_offset_iso_is_converted_to_utc():
    assert parse_timestamp("2024-05-01T00:30:00+05:30") == datetime(2024, 4, 30, 19, 0)


@pytest.mark.parametrize("value", [None, True, "", "tomorrow", {"at": 1}, [1]])
def test_parse_rejects_garbage(value):
    with pytest.raises(ApiError) as exc:
        parse_timestamp(value, "startTime")
    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid startTime"


def test_error_body_includes_data_only_when_set():
    assert create_error(401, "Failure", "nope").to_dict() == {
        "statusCode": 401,
        "name": "Failure",
        "message": "nope",
    }
    assert create_error(400, "ValidationError", "bad", ["title"]).to_dict()["data"] == ["title"]


def test_unknown_route_is_json(client):
    res = client.get("/calendar/nowhere")
    assert res.status_code == 404
    assert res.get_json()["statusCode"] == 404
    assert res.get_json()["name"] == "Not Found"


def test_wrong_method_is_json(client, user_id, auth):
    res = client.put("/calendar/reminders", headers=auth(user_id))
    assert res.status_code == 405
    assert res.get_json()["name"] == "Method Not Allowed"


def test_init_db_command(app):
    with app.app_context():
        db.drop_all()
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "Database tables created" in result.output
    with app.app_context():
        assert "reminders" in inspect(db.engine).get_table_names()


@pytest.mark.parametrize("name,expected", [("debug", "DEBUG"), (" warning ", "WARNING"), (None, "INFO"), ("", "INFO"), ("chatty", "INFO")])
def test_log_level_falls_back_for_unknown_names(name, expected):
    assert log_level(name) == expected
