# ui/tasks_panel.py
import streamlit as st

from managers import project_manager, task_manager
from models.progress import PROGRESS_STATUSES
from models.task import DEFAULT_TASK_SCORE
from ui.common import run_action, force_rerun
from utils.auth import Actor

def render_tasks_panel(project_id: int, actor: Actor):
    st.subheader("Tasks")
    if actor.is_admin:
        with st.form("new_task", clear_on_submit=True):
            t_name = st.text_input("Task name")
            t_desc = st.text_area("Description")
            t_score = st.number_input("Score", min_value=1, value=DEFAULT_TASK_SCORE, step=1)
            submit_task = st.form_submit_button("Add task")
        if submit_task:
            if run_action(task_manager.create_task, actor, project_id, t_name, t_desc, int(t_score),
                          success="Task added"):
                force_rerun()

    project = run_action(project_manager.get_project, actor, project_id)
    if not project:
        return
    tasks = project.get("taskDetails", [])
    if not tasks:
        st.info("No tasks yet.")
        return

    for t in tasks:
        if actor.is_admin:
            _render_admin_task(t, actor)
        else:
            _render_member_task(t, actor)

def _render_admin_task(t: dict, actor: Actor):
    with st.expander(f"🧩 {t['name']} ({t['score']} pts)"):
        new_name = st.text_input("Name", value=t["name"], key=f"tn_{t['id']}")
        new_desc = st.text_area("Description", value=t["description"], key=f"td_{t['id']}")
        c1, c2 = st.columns(2)
        if c1.button("Save task", key=f"sv_{t['id']}"):
            if run_action(task_manager.update_task, actor, t["id"], new_name, new_desc,
                          success="Task saved"):
                force_rerun()
        if c2.button("Delete task", key=f"del_{t['id']}"):
            run_action(task_manager.delete_task, actor, t["id"], success="Task deleted")
            force_rerun()

def _render_member_task(t: dict, actor: Actor):
    detail = run_action(task_manager.get_task, actor, t["id"])
    progress = (detail or {}).get("userProgress")
    status = progress["status"] if progress else None
    with st.expander(f"🧩 {t['name']} — {status or 'not started'} ({t['score']} pts)"):
        st.write(t["description"])
        if progress is None:
            st.info("You have no progress record for this task.")
            return
        if status == "Completed":
            st.success("Completed")
            return
        new_status = st.selectbox("Status", PROGRESS_STATUSES,
                                  index=PROGRESS_STATUSES.index(status), key=f"st_{t['id']}")
        if st.button("Update progress", key=f"up_{t['id']}"):
            if run_action(task_manager.update_progress, actor, t["id"], new_status,
                          success="Progress updated"):
                force_rerun()
