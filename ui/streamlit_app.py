# ui/streamlit_app.py
# ──────────────────────────────────────────────────────────────────────────────
# Call Concierge Streamlit form
# - Caller name, recipient (E.164), voice, message
# - Live preview of the exact script the agent will read
# - Busy flag disables the button while a call request is in flight
#
# Env / Secrets:
#   BACKEND_URL   (e.g., http://localhost:8080)
#   REQ_TIMEOUT   (seconds, default 15)
#
# Run:
#   PYTHONPATH=. streamlit run ui/streamlit_app.py
# ──────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

# ---- Stdlib -----------------------------------------------------------------
import os
import sys
from pathlib import Path

# ---- Third-party ------------------------------------------------------------
import streamlit as st

# ---- Local imports (robust path injection) ----------------------------------
try:
    from concierge.schemas import DEFAULT_VOICE, Voice
    from ui.call_state import Idle, Loading, can_submit, describe, preview_script, submit_call
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]  # <repo_root>
    sys.path.insert(0, str(repo_root))
    from concierge.schemas import DEFAULT_VOICE, Voice
    from ui.call_state import Idle, Loading, can_submit, describe, preview_script, submit_call

# ──────────────────────────────────────────────────────────────────────────────
# Config
# ──────────────────────────────────────────────────────────────────────────────

def _get_secret(key: str, default: str = "") -> str:
    val = os.getenv(key)
    if val:
        return val
    try:
        v = st.secrets.get(key)
    except FileNotFoundError:
        v = None
    return str(v) if v else default

BACKEND_URL = _get_secret("BACKEND_URL", "http://localhost:8080").strip().rstrip("/")
REQ_TIMEOUT = float(_get_secret("REQ_TIMEOUT", "15"))

st.set_page_config(page_title="Call Concierge", layout="wide")
st.caption("CALL CONCIERGE")
st.title("Launch an on-demand voice agent")
st.write(
    "Configure the script, choose a voice, and instantly place automated calls "
    "that speak on your behalf using Twilio."
)

# ──────────────────────────────────────────────────────────────────────────────
# Session State
# ──────────────────────────────────────────────────────────────────────────────

if "call_state" not in st.session_state:
    st.session_state.call_state = Idle()

# ──────────────────────────────────────────────────────────────────────────────
# Form
# ──────────────────────────────────────────────────────────────────────────────

voices = list(Voice)
col_form, col_status = st.columns([2, 1])

with col_form:
    st.subheader("Call details")
    caller_name = st.text_input("Your name", value="Alex", placeholder="Jane Doe")
    target_number = st.text_input("Recipient phone number", value="+1", placeholder="+15551234567")
    voice = st.selectbox(
        "Voice selection",
        voices,
        index=voices.index(DEFAULT_VOICE),
        format_func=lambda v: v.label,
    )
    message = st.text_area(
        "What should the agent say?",
        value="I'm calling to follow up about our meeting. Please call me back when you can.",
        placeholder="Provide the script the agent should read during the call.",
        height=160,
    )

    st.subheader("Preview")
    st.info(preview_script(caller_name, message) or "Your script preview will appear here.")

    ready = can_submit(
        st.session_state.call_state,
        caller_name=caller_name,
        target_number=target_number,
        message=message,
    )
    if st.button("📞 Place call", disabled=not ready, type="primary"):
        st.session_state.call_state = Loading()
        with st.spinner("Placing call…"):
            st.session_state.call_state = submit_call(
                BACKEND_URL,
                caller_name=caller_name,
                target_number=target_number,
                message=message,
                voice=voice.value,
                timeout=REQ_TIMEOUT,
            )

# ──────────────────────────────────────────────────────────────────────────────
# Status
# ──────────────────────────────────────────────────────────────────────────────

with col_status:
    st.subheader("Status")
    kind, text = describe(st.session_state.call_state)
    if kind == "success":
        st.success(text)
    elif kind == "error":
        st.error(text)
    else:
        st.info(text)
    st.caption(f"Backend: {BACKEND_URL}")
