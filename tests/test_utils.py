from models.progress import Progress
from models.project import Project
from models.task import Task
from managers import project_manager, task_manager
from utils.progress import compute_user_progress, completion_by_user
from utils.timeline import timeline_df_for_project, TIMELINE_COLUMNS

def test_compute_user_progress():
    class DummySession:
        def exec(self, stmt):
            class Rows:
                def all(self):
                    return [Progress(id=1), Progress(id=2)]
            return Rows()

    project = Project(id=1, name="P", tasks=[Task(id=i, name="t", description="d") for i in range(4)])
    result = compute_user_progress(project, 1, DummySession())
    assert result == 50.0

def test_compute_user_progress_without_tasks():
    assert compute_user_progress(Project(id=1, name="P"), 1, session=None) == 0.0

def test_completion_by_user(session, admin, member, member_user, dates):
    p = project_manager.create_project(session, admin, "P")
    t1 = task_manager.create_task(session, admin, p["id"], "T1", "d", 10)
    task_manager.create_task(session, admin, p["id"], "T2", "d", 10)
    project_manager.assign_user(session, admin, p["id"], member_user.id, *dates)
    task_manager.update_progress(session, member, t1["id"], "Completed")

    rows = completion_by_user(session.get(Project, p["id"]), session)
    assert len(rows) == 1
    assert rows[0]["name"] == "Mia Member"
    assert rows[0]["score"] == 10
    assert rows[0]["progress"] == 50.0

def test_timeline_df_for_project(session, admin, member_user, dates):
    p = project_manager.create_project(session, admin, "P")
    assert timeline_df_for_project(p["id"], session).empty

    project_manager.assign_user(session, admin, p["id"], member_user.id, *dates)
    df = timeline_df_for_project(p["id"], session)
    assert list(df.columns) == TIMELINE_COLUMNS
    assert df.iloc[0]["Item"] == "Mia Member"
    assert df.iloc[0]["Start"] == dates[0]
    assert df.iloc[0]["Score"] == 0

def test_remove_choices_are_limited_to_assigned_users(session, admin, member_user, other_user, dates):
    from ui.members_panel import removable_users

    p = project_manager.create_project(session, admin, "P")
    project_manager.assign_user(session, admin, p["id"], member_user.id, *dates)
    users = [(member_user.id, "Mia"), (other_user.id, "Otto")]
    assert removable_users(users, session.get(Project, p["id"])) == [(member_user.id, "Mia")]
