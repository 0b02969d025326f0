from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException
from extensions import db, login_manager
from accounts.models import User
from accounts.tokens import bearer_token, load_payload
from helpers import ApiError, log_level
import os
import click
from dotenv import load_dotenv

# Blueprint Imports
from planner.routes import planner_bp

load_dotenv()

app = Flask(__name__)

# --- DATABASE CONFIGURATION ---
uri = os.getenv("DB_URL", "sqlite:///calendar.db")
if uri.startswith("postgres://"):
    uri = uri.replace("postgres://", "postgresql://", 1)

app.config["SQLALCHEMY_DATABASE_URI"] = uri
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-secret-key')

# --- API CONFIGURATION ---
app.config['TOKEN_MAX_AGE'] = int(os.getenv('TOKEN_MAX_AGE', 86400))
# True switches range listings from the legacy bound check to interval overlap
app.config['CALENDAR_STRICT_OVERLAP'] = os.getenv('CALENDAR_STRICT_OVERLAP', 'False') == 'True'

app.logger.setLevel(log_level(os.getenv('LOG_LEVEL')))

# Initialize Extensions
db.init_app(app)
login_manager.init_app(app)

# --- REGISTER ALL BLUEPRINTS ---
app.register_blueprint(planner_bp)

@login_manager.request_loader
def load_user_from_request(req):
    token = bearer_token(req)
    if not token:
        return None
    payload = load_payload(token)
    if payload is None:
        return None
    return db.session.get(User, payload["id"])

# ================= ERROR REPORTING =================

@app.errorhandler(ApiError)
def handle_api_error(err):
    app.logger.warning("%s %s -> %s %s: %s", request.method, request.path, err.status_code, err.name, err.message)
    return jsonify(err.to_dict()), err.status_code

@app.errorhandler(HTTPException)
def handle_http_error(err):
    body = {"statusCode": err.code, "name": err.name, "message": err.description}
    return jsonify(body), err.code

@app.errorhandler(Exception)
def handle_unexpected_error(err):
    db.session.rollback()
    app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    body = {"statusCode": 500, "name": "InternalServerError", "message": "Something went wrong"}
    return jsonify(body), 500

# ================= CLI =================

@app.cli.command("init-db")
def init_db():
    """Create every table the API needs."""
    db.create_all()
    click.echo("Database tables created ✅")

if __name__ == "__main__":
    # Ensure debug is off for production stability
    app.run(debug=False)
