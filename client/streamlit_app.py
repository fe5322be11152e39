# client/streamlit_app.py
import os
import requests
import streamlit as st

import api as API
from components import color_label, color_swatch, show_field_errors
from gen_data import gen_customer_record
from app.validation import ColorPreference, validate

DEMO_ENABLED = os.getenv("DEMO_ENABLED", "false").lower() in ("1", "true", "yes")
FIELDS = ("fullName", "cpf", "email", "colorPreference", "notes")

st.set_page_config(page_title="Customer Registration", layout="centered")
st.title("📝 Customer Registration")

with st.sidebar:
    st.header("Settings")
    locale = st.selectbox("Language", ["en", "pt-BR"], key="locale")
    api_url = os.getenv("API_BASE_URL", "http://localhost:8000")
    st.text_input("API Base URL (from env)", value=api_url, disabled=True)
    if st.button("Health check"):
        try:
            st.success(API.healthz())
        except requests.RequestException as e:
            st.error(f"Health check failed: {e}")

# ------------------------
# Session state
# ------------------------
for f in FIELDS:
    st.session_state.setdefault(f"form_{f}", None if f == "colorPreference" else "")

def _fill_demo():
    for k, v in gen_customer_record().items():
        st.session_state[f"form_{k}"] = v

def _reset():
    for f in FIELDS:
        st.session_state[f"form_{f}"] = None if f == "colorPreference" else ""

# clearing must happen before the widgets are created
if st.session_state.pop("_clear_form", False):
    _reset()
if "_flash" in st.session_state:
    st.success(st.session_state.pop("_flash"))

if DEMO_ENABLED:
    st.button("🎲 Generate", on_click=_fill_demo, help="Fill the form with random valid data")

# ------------------------
# Form
# ------------------------
colors = [c.value for c in ColorPreference]
with st.form("customer_form"):
    st.text_input("Full name", key="form_fullName")
    st.text_input("CPF", key="form_cpf", placeholder="000.000.000-00", max_chars=14)
    st.text_input("Email", key="form_email")
    st.selectbox(
        "Favorite color", colors, key="form_colorPreference", index=None,
        format_func=lambda v: color_label(ColorPreference(v), locale),
    )
    st.text_area("Notes", key="form_notes", max_chars=1000)
    submitted = st.form_submit_button("Register")

if st.session_state.form_colorPreference:
    color_swatch(ColorPreference(st.session_state.form_colorPreference), locale)

if submitted:
    payload = {f: st.session_state[f"form_{f}"] for f in FIELDS}
    payload["notes"] = payload["notes"] or None

    # same rules as the server, every error at once
    result = validate(payload, locale)
    if not result.ok:
        show_field_errors(result.errors)
    else:
        try:
            with st.spinner("Submitting..."):
                resp = API.create_customer(payload, locale=locale)
            st.session_state["_flash"] = f"Registered {resp['data']['fullName']} ({resp['data']['email']})"
            st.session_state["_clear_form"] = True
            st.rerun()
        except API.ApiError as e:
            st.error(API.error_message(e, locale))
