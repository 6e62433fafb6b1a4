# ui/projects_panel.py

import streamlit as st

from managers import project_manager
from ui.common import run_action, force_rerun
from utils.auth import Actor

__all__ = ["render_projects", "render_new_project"]


def render_projects(actor: Actor):
    """Display a dropdown of the projects the actor can see and return the selected id."""
    st.subheader("Projects" if actor.is_admin else "Projects (only ones you are assigned to)")

    projects = run_action(project_manager.list_projects, actor) or []
    if not projects:
        st.info("No projects found.")
        return None

    proj_options = {f"{p['name']} (#{p['id']})": p["id"] for p in projects}
    selected_label = st.selectbox("Select a project", ["—"] + list(proj_options.keys()))
    return proj_options.get(selected_label)


def render_new_project(actor: Actor):
    """Form to create a new project (admins only)."""
    if not actor.is_admin:
        return

    with st.expander("New project"):
        with st.form("new_project", clear_on_submit=True):
            p_name = st.text_input("Project name", placeholder="Please enter a project name")
            p_desc = st.text_area("Description", placeholder="Short project description…")
            submitted = st.form_submit_button("Create project", use_container_width=True)

        if submitted:
            p = run_action(project_manager.create_project, actor, p_name, p_desc or None)
            if p:
                st.session_state["selected_project_id"] = p["id"]
                st.success(f"Created project #{p['id']}")
                force_rerun()
