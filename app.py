# app.py
"""
Thin entrypoint for the expense tracker.

Usage example:
    uvicorn app:app --reload
    python app.py            # listens on $PORT (default 3000)
"""

from expense_tracker.main import app, run  # re-export FastAPI instance

if __name__ == "__main__":
    run()
