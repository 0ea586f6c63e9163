# main.py
# ──────────────────────────────────────────────────────────────────────────────
# Call Concierge FastAPI backend:
# - POST /api/call validates the form and places one Twilio call
# - GET /api/voices lists the supported voices
# - Health is shallow & deterministic
# Run with: uvicorn main:app --host :: --port 8080
# ──────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

from dotenv import load_dotenv

from concierge.app import create_app

load_dotenv()

app = create_app()
