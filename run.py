"""Application entry point.

Starts the Flask development server or is used by gunicorn in production.

Usage:
    Development:  python run.py
    Production:   gunicorn --bind 0.0.0.0:3000 --workers 2 --threads 4 run:app
"""
import atexit

from gemini_chat import create_app

app = create_app()

# Release the Gemini connection pool when the worker process exits
atexit.register(app.config["GEMINI_SERVICE"].close)

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=3000, debug=app.config.get("FLASK_DEBUG", False))
