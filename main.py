# main.py

#============================================================#
#                        Scoreboard-PM                       #
#============================================================#
# Version     : V2.0.0                                       #
#------------------------------------------------------------#
# Purpose     : Operator console: projects, assignments with #
#               date ranges, scored tasks, per-user progress #
#               and a Plotly assignment timeline.            #
#============================================================#

import streamlit as st

import db
from ui.admin_panel import render_admin_panel
from ui.common import force_rerun
from ui.gantt_panel import render_gantt_panel
from ui.members_panel import render_members_panel
from ui.projects_panel import render_projects, render_new_project
from ui.tasks_panel import render_tasks_panel
from utils.auth import Actor
from utils.logs import setup_logger

st.set_page_config(
    page_title="Scoreboard - Project Manager",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ======================  GLOBAL CSS  ======================
st.markdown("""
<style>
:root{
  --tab-active:#2563eb;
  --tab-bg:#f6f7fb;
  --tab-text:#374151;
}
.stTabs [role="tablist"]{gap:10px;padding:6px 2px 14px 2px;border-bottom:0;}
.stTabs [role="tab"]{
  background:var(--tab-bg); color:var(--tab-text);
  border:1px solid #e5e7eb; border-radius:999px; padding:10px 16px;
  font-weight:600; transition:all .18s;
}
.stTabs [role="tab"][aria-selected="true"]{
  background:var(--tab-active); color:#fff; border-color:transparent;
}
</style>
""", unsafe_allow_html=True)

@st.cache_resource
def _init_once():
    setup_logger()
    db.init_db()
    return True

_init_once()

# ======================  AUTH  ======================
def full_screen_login():
    _, col, _ = st.columns([1, 2.2, 1])
    with col:
        st.markdown("<h2 style='text-align:center;'>Scoreboard PM</h2>", unsafe_allow_html=True)
        with st.form("login_form", clear_on_submit=False):
            email = st.text_input("Your email", placeholder="you@example.com")
            name  = st.text_input("Your name (optional)")
            submitted = st.form_submit_button("Sign in / Continue", use_container_width=True)
        if submitted:
            if not email:
                st.warning("Please enter your email.")
            else:
                st.session_state["user"] = db.login(email, name or None)
                force_rerun()

user = st.session_state.get("user")
if not user:
    full_screen_login()
    st.stop()

actor = Actor(id=user["id"], role=user["role"], name=user["name"] or user["email"])

with st.sidebar:
    st.caption(f"Signed in as **{user['email']}** ({user['role']})")
    if st.button("Sign out"):
        st.session_state.clear()
        force_rerun()
    st.markdown("---")
    picked = render_projects(actor)
    if picked:
        st.session_state["selected_project_id"] = picked
    render_new_project(actor)

project_id = st.session_state.get("selected_project_id")
if not project_id:
    st.info("Pick a project in the sidebar to get started.")
    st.stop()

tab1, tab2, tab3, tab4 = st.tabs(["Tasks", "Members", "Timeline", "Admin"])

with tab1:
    render_tasks_panel(project_id, actor)

with tab2:
    render_members_panel(project_id, actor)

with tab3:
    render_gantt_panel(project_id, actor)

with tab4:
    render_admin_panel(project_id, actor)
