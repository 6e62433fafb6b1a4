# ui/admin_panel.py
import streamlit as st

from managers import project_manager
from ui.common import run_action, force_rerun
from utils.auth import Actor

def render_admin_panel(project_id: int, actor: Actor):
    st.subheader("Admin Tools")
    if not actor.is_admin:
        st.info("Admin‑only area")
        return

    project = run_action(project_manager.get_project, actor, project_id)
    if not project:
        return

    with st.form("edit_project"):
        new_name = st.text_input("Name", value=project["name"])
        new_desc = st.text_area("Description", value=project["description"] or "")
        saved = st.form_submit_button("Save")
    if saved:
        if run_action(project_manager.update_project, actor, project_id, new_name, new_desc,
                      success="Project updated"):
            force_rerun()

    st.markdown("**Danger zone**")
    confirm = st.checkbox("I understand this deletes every task, progress record and score")
    if st.button("Delete project (irreversible)", disabled=not confirm):
        if run_action(project_manager.delete_project, actor, project_id, success="Project deleted"):
            st.session_state["selected_project_id"] = None
            force_rerun()
