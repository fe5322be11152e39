# client/components.py
import streamlit as st

from app.i18n import t
from app.validation import ColorPreference

COLOR_HEX = {
    ColorPreference.RED: "#ef4444",
    ColorPreference.ORANGE: "#f97316",
    ColorPreference.YELLOW: "#eab308",
    ColorPreference.GREEN: "#22c55e",
    ColorPreference.BLUE: "#3b82f6",
    ColorPreference.INDIGO: "#6366f1",
    ColorPreference.VIOLET: "#8b5cf6",
}

def color_label(color: ColorPreference, locale: str) -> str:
    return t(f"color.{color.value}", locale)

def color_swatch(color: ColorPreference | None, locale: str):
    """Small colored dot next to the selected color's name."""
    if color is None:
        return
    st.markdown(
        f"<span style='color:{COLOR_HEX[color]}'>●</span> {color_label(color, locale)}",
        unsafe_allow_html=True,
    )

def show_field_errors(errors):
    """Render every FieldError, one line each."""
    for e in errors:
        st.error(f"**{e.field}**: {e.message}")

def show_json(obj, caption: str | None = None):
    if caption:
        st.caption(caption)
    st.json(obj)
