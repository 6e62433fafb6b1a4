# ui/members_panel.py
import streamlit as st
import pandas as pd
from datetime import date, timedelta

import db
from errors import TrackerError
from managers import project_manager
from ui.common import run_action, force_rerun
from utils.auth import Actor
from utils.progress import completion_by_user

MEMBER_COLUMNS = ["Name", "Start", "End", "Score", "Progress %"]

def _member_rows(project_id: int):
    with db.session_scope() as s:
        project = db.get_project(s, project_id)
        rows = completion_by_user(project, s) if project else []
    return [{"Name": r["name"], "Start": r["start_date"], "End": r["end_date"],
             "Score": r["score"], "Progress %": round(r["progress"], 1)} for r in rows]

def removable_users(users, project):
    return [(u, label) for u, label in users if project.is_assigned(u)]

def render_members_panel(project_id: int, actor: Actor):
    st.subheader("Project Members")

    if not actor.is_admin:
        project = run_action(project_manager.get_project, actor, project_id)
        if project:
            mine = project["scoreByUser"][0]["score"] if project["scoreByUser"] else 0
            st.metric("Your score", mine, help=f"Out of {project['totalScore']} points on this project")
        return

    data = _member_rows(project_id)
    st.dataframe(pd.DataFrame(data) if data else pd.DataFrame(columns=MEMBER_COLUMNS))

    with db.session_scope() as s:
        users = [(u.id, f"{u.display_name} <{u.email}>") for u in db.list_users(s)]
        project = db.get_project(s, project_id)
        removable = removable_users(users, project) if project else []
    if not users:
        st.info("Nobody has signed in yet.")
        return

    labels = dict(users)
    with st.form("assign_member", clear_on_submit=True):
        user_id = st.selectbox("User", [u for u, _ in users], format_func=labels.get)
        c1, c2 = st.columns(2)
        start = c1.date_input("Start", value=date.today(), key="assign_start")
        end = c2.date_input("End", value=date.today() + timedelta(days=30), key="assign_end")
        add_btn = st.form_submit_button("Assign")
    if add_btn:
        if run_action(project_manager.assign_user, actor, project_id, user_id, start, end,
                      success=f"Assigned {labels[user_id]}"):
            force_rerun()

    if not removable:
        return
    with st.form("remove_member"):
        rm_id = st.selectbox("Remove user", [u for u, _ in removable], format_func=labels.get)
        rm_btn = st.form_submit_button("Remove")
    if rm_btn:
        try:
            with db.session_scope() as s:
                result = project_manager.remove_user(s, project_id, rm_id)
        except TrackerError as e:
            st.error(str(e))
            return
        if result is None:
            st.warning("User not assigned to this project")
        else:
            st.success(f"Removed {labels[rm_id]}")
            force_rerun()
