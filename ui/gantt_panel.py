# ui/gantt_panel.py
import streamlit as st
import plotly.express as px

from utils.auth import Actor
from utils.timeline import timeline_df_for_project

def render_gantt_panel(project_id: int, actor: Actor):
    st.subheader("Assignment Timeline")
    if not actor.is_admin:
        st.info("Only admins can see who is assigned when.")
        return
    df = timeline_df_for_project(project_id)
    if df.empty:
        st.info("Assign users with start and end dates to see the timeline.")
    else:
        fig = px.timeline(df, x_start="Start", x_end="Finish", y="Item",
                          color="Score", hover_data=["Type"])
        fig.update_yaxes(autorange="reversed")
        st.plotly_chart(fig, use_container_width=True)
