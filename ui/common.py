# ui/common.py
import streamlit as st

import db
from errors import TrackerError

def force_rerun():
    fn = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if fn:
        fn()

def run_action(action, *args, success=None, **kwargs):
    """Call a manager operation in its own session; show failures inline."""
    with db.session_scope() as s:
        try:
            result = action(s, *args, **kwargs)
        except TrackerError as e:
            st.error(str(e))
            return None
    if success:
        st.success(success)
    return result
