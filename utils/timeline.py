# utils/timeline.py
import pandas as pd

import db

TIMELINE_COLUMNS = ["Item", "Start", "Finish", "Score", "Type"]

def timeline_df_for_project(project_id: int, session=None) -> pd.DataFrame:
    """One row per assignment: who is on the project, from when to when."""
    if session is None:
        with db.session_scope() as s:
            return timeline_df_for_project(project_id, s)

    project = db.get_project(session, project_id)
    rows = []
    if project is not None:
        for a in project.assignments:
            entry = project.score_for(a.user_id)
            rows.append({
                "Item": a.user.display_name if a.user else f"User #{a.user_id}",
                "Start": a.start_date,
                "Finish": a.end_date,
                "Score": entry.score if entry else 0,
                "Type": "Assignment",
            })
    df = pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
    if not df.empty:
        df = df.dropna(subset=["Start", "Finish"], how="any")
    return df
