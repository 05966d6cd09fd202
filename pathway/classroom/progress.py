"""
ProgressTracker - Track learner state in ~/.pathway/progress.db.

Stores learner state separately from course content:
- Activity completion states
- Sidebar collapsed preference
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from pathway.config import get_progress_db_path
from pathway.schemas import Activity, CompletionState


logger = logging.getLogger(__name__)

SIDEBAR_COLLAPSED_PREF = "format_pathway_sidebar_collapsed"


class ProgressTracker:
    """
    Track learner progress in SQLite database.

    Progress is stored separately from content (course.db) so that:
    - Content can be updated without losing progress
    - Progress is user-specific, content is shared
    """

    def __init__(self, db_path: Optional[Path] = None, user_id: str = "default"):
        """
        Initialize progress tracker.

        Args:
            db_path: Path to progress.db (default: PATHWAY_PROGRESS_DB or ~/.pathway/progress.db)
            user_id: Learner identifier for multi-user support
        """
        self.db_path = Path(db_path) if db_path else get_progress_db_path()
        self.user_id = user_id
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS activity_completion (
                    user_id TEXT NOT NULL,
                    activity_id TEXT NOT NULL,
                    state TEXT NOT NULL DEFAULT 'incomplete',
                    updated_at TEXT,
                    PRIMARY KEY (user_id, activity_id)
                );

                CREATE TABLE IF NOT EXISTS user_preferences (
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    value TEXT,
                    PRIMARY KEY (user_id, name)
                );

                CREATE INDEX IF NOT EXISTS idx_activity_completion_user
                ON activity_completion(user_id);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Activity Completion
    # -------------------------------------------------------------------------

    def get_completion_state(self, activity_id: str) -> CompletionState:
        """Get the completion state of an activity (incomplete if never recorded)."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT state FROM activity_completion
                   WHERE user_id = ? AND activity_id = ?""",
                (self.user_id, activity_id)
            )
            row = cursor.fetchone()
            return CompletionState(row["state"]) if row else CompletionState.INCOMPLETE
        finally:
            conn.close()

    def get_all_completion_states(self) -> dict[str, CompletionState]:
        """Get recorded completion states for all activities."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT activity_id, state FROM activity_completion
                   WHERE user_id = ?""",
                (self.user_id,)
            )
            return {
                row["activity_id"]: CompletionState(row["state"])
                for row in cursor.fetchall()
            }
        finally:
            conn.close()

    def set_completion_state(self, activity_id: str, state: CompletionState):
        """Record the completion state of an activity."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO activity_completion (user_id, activity_id, state, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(user_id, activity_id) DO UPDATE SET
                     state = ?,
                     updated_at = ?""",
                (self.user_id, activity_id, state.value, now, state.value, now)
            )
            conn.commit()
        finally:
            conn.close()

    def reset_activity(self, activity_id: str):
        """Reset an activity to incomplete."""
        conn = self._get_connection()
        try:
            conn.execute(
                """DELETE FROM activity_completion
                   WHERE user_id = ? AND activity_id = ?""",
                (self.user_id, activity_id)
            )
            conn.commit()
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------

    def get_preference(self, name: str, default: Optional[str] = None) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT value FROM user_preferences WHERE user_id = ? AND name = ?""",
                (self.user_id, name)
            )
            row = cursor.fetchone()
            return row["value"] if row else default
        finally:
            conn.close()

    def set_preference(self, name: str, value: str):
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO user_preferences (user_id, name, value)
                   VALUES (?, ?, ?)
                   ON CONFLICT(user_id, name) DO UPDATE SET value = ?""",
                (self.user_id, name, value, value)
            )
            conn.commit()
        finally:
            conn.close()

    def get_sidebar_collapsed(self) -> bool:
        """Get the stored sidebar state (expanded unless saved otherwise)."""
        return self.get_preference(SIDEBAR_COLLAPSED_PREF, "0") == "1"

    def set_sidebar_collapsed(self, collapsed: bool):
        self.set_preference(SIDEBAR_COLLAPSED_PREF, "1" if collapsed else "0")

    def reset_all_progress(self):
        """Reset all progress and preferences for the current learner."""
        conn = self._get_connection()
        try:
            conn.execute(
                "DELETE FROM activity_completion WHERE user_id = ?",
                (self.user_id,)
            )
            conn.execute(
                "DELETE FROM user_preferences WHERE user_id = ?",
                (self.user_id,)
            )
            conn.commit()
        finally:
            conn.close()


def save_sidebar_preference(progress: ProgressTracker, collapsed: bool) -> bool:
    """
    Persist the sidebar collapsed state without ever failing the render.

    Returns True if the preference was stored.
    """
    try:
        progress.set_sidebar_collapsed(collapsed)
    except (sqlite3.Error, OSError) as e:
        logger.warning(f"Could not save sidebar preference: {e}")
        return False
    return True


def mark_activity(progress: ProgressTracker, activity: Activity, completed: bool) -> CompletionState:
    """
    Record a learner's completion of a tracked activity.

    Manual activities are ticked by the learner. Automatic activities are
    normally completed by the activity itself; recording them here stands in
    for that event when no such activity runs.

    Raises:
        ValueError: If the activity is not tracked
    """
    if not activity.is_tracked:
        raise ValueError(f"Activity {activity.id} does not track completion")
    state = CompletionState.COMPLETE if completed else CompletionState.INCOMPLETE
    progress.set_completion_state(activity.id, state)
    return state
