"""
Pathway - Linear course viewer with a progress sidebar

Streamlit application that shows a course one section at a time, lands
learners on their first unfinished section and tracks completion.

Usage:
    python scripts/compile_course.py courses/example.yaml
    streamlit run app.py
"""

import streamlit as st

from pathway.classroom import (
    CompletionAggregator,
    CourseLoader,
    CoursePlatform,
    ProgressTracker,
    SectionNavigator,
    is_completed_state,
    mark_activity,
    resolve_landing,
    save_sidebar_preference,
)
from pathway.config import get_course_db_path, load_site_defaults
from pathway.schemas import CourseView, SidebarPosition, TrackingMode
from pathway.viewer import (
    build_course_view,
    section_from_url,
    section_name,
    status_indicator,
    view_url,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Pathway",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "loader" not in st.session_state:
        db_path = get_course_db_path()
        if db_path.exists():
            st.session_state.loader = CourseLoader(db_path, load_site_defaults())
        else:
            st.session_state.loader = None

    if "progress" not in st.session_state:
        st.session_state.progress = ProgressTracker()

    if "platform" not in st.session_state and st.session_state.loader:
        st.session_state.platform = CoursePlatform(
            st.session_state.loader,
            st.session_state.progress,
        )

    if "editing" not in st.session_state:
        st.session_state.editing = False

    if "sidebar_collapsed" not in st.session_state:
        st.session_state.sidebar_collapsed = st.session_state.progress.get_sidebar_collapsed()


def get_course_id() -> int | None:
    """Course from the `id` query parameter, else the first course."""
    raw = st.query_params.get("id")
    if raw and raw.isdigit():
        return int(raw)
    courses = st.session_state.loader.get_courses()
    return courses[0].id if courses else None


def get_requested_section() -> int | None:
    raw = st.query_params.get("section")
    return int(raw) if raw and raw.isdigit() else None


def go_to_section(course_id: int, number: int):
    """Navigate to a section through the query string."""
    st.query_params["id"] = str(course_id)
    st.query_params["section"] = str(number)
    st.rerun()


# -----------------------------------------------------------------------------
# Sidebar: Course Outline
# -----------------------------------------------------------------------------

def toggle_sidebar(collapsed: bool):
    """Flip the sidebar state; a failed save never blocks the page."""
    st.session_state.sidebar_collapsed = collapsed
    save_sidebar_preference(st.session_state.progress, collapsed)


def render_outline(view: CourseView, course_id: int):
    """Render the progress outline into the current container."""
    st.subheader("Course Outline")

    if st.button("⟨ Hide outline", key="collapse_outline"):
        toggle_sidebar(True)
        st.rerun()

    if view.show_progress and view.completion_enabled:
        sidebar = view.sidebar
        st.markdown(
            f"**Progress:** {sidebar.overall_completed}/{sidebar.overall_total} "
            f"activities ({sidebar.overall_percent}%)"
        )
        st.progress(sidebar.overall_percent / 100)

    st.divider()

    for entry in view.sidebar.entries:
        col1, col2 = st.columns([1, 9])
        with col1:
            st.markdown(status_indicator(entry))
        with col2:
            label = entry.name
            if view.show_progress and entry.has_tracked_items:
                label += f" · {entry.progress_percent}%"
            if st.button(
                label,
                key=f"section_{entry.number}",
                type="primary" if entry.is_current else "secondary",
                use_container_width=True,
            ):
                go_to_section(course_id, entry.number)
            if entry.has_image:
                st.image(entry.image_url, use_container_width=True)


def render_expand_button():
    if st.button("Show outline ⟩", key="expand_outline"):
        toggle_sidebar(False)
        st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Section View
# -----------------------------------------------------------------------------

def render_section(view: CourseView, course_id: int):
    """Render the displayed section with its activities."""
    platform = st.session_state.platform
    progress = st.session_state.progress
    sections = {s.number: s for s in platform.get_sections(course_id)}
    activities = platform.get_activities(course_id)

    st.title(view.course_name)

    navigator = SectionNavigator(sections.values(), lambda s: None, section_name)
    position, total = navigator.get_section_position(view.current_section)
    if position:
        st.caption(f"Section {position} of {total}")

    # Overview is pinned above the content unless it lives in the outline
    shown = []
    if view.show_overview_above and view.current_section != 0 and 0 in sections:
        shown.append(sections[0])
    if view.current_section in sections:
        shown.append(sections[view.current_section])

    if view.current_section_image:
        st.image(view.current_section_image, use_container_width=True)

    for section in shown:
        if not section.user_visible:
            continue
        st.header(section_name(section))
        for activity_id in section.activity_ids:
            activity = activities.get(activity_id)
            if activity is None or not activity.user_visible:
                continue
            if activity.is_tracked and view.completion_enabled:
                done = is_completed_state(progress.get_completion_state(activity.id))
                label, help_text = activity.name, None
                if activity.tracking == TrackingMode.AUTOMATIC:
                    label += " (automatic)"
                    help_text = "Completed by the activity; tick to record it here"
                checked = st.checkbox(
                    label, value=done, key=f"activity_{activity.id}", help=help_text
                )
                if checked != done:
                    mark_activity(progress, activity, checked)
                    st.rerun()
            else:
                st.markdown(f"- {activity.name}")

    st.divider()
    col1, col2 = st.columns(2)
    with col1:
        if view.prev_section and st.button(f"← {view.prev_section.name}", key="prev_section"):
            go_to_section(course_id, section_from_url(view.prev_section.url))
    with col2:
        if view.next_section and st.button(f"{view.next_section.name} →", key="next_section"):
            go_to_section(course_id, section_from_url(view.next_section.url))


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    if not st.session_state.loader:
        st.error("Course database not found. Please build it first.")
        st.code("python scripts/compile_course.py courses/example.yaml")
        return

    course_id = get_course_id()
    platform = st.session_state.platform
    course = platform.get_course(course_id) if course_id is not None else None
    if course is None:
        st.error("Course not found.")
        return

    sections = platform.get_sections(course.id)
    aggregator = CompletionAggregator.from_states(
        platform.get_activities(course.id),
        platform.get_completion_states(course.id),
        course.completion_enabled,
    )

    st.sidebar.title("🧭 Pathway")
    st.session_state.editing = st.sidebar.toggle("Editing mode", value=st.session_state.editing)

    decision = resolve_landing(
        course,
        sections,
        aggregator,
        view_url=lambda number: view_url(course, number),
        requested_section=get_requested_section(),
        is_editing=st.session_state.editing,
    )
    if decision.should_redirect:
        go_to_section(course.id, decision.section)

    images = platform.get_all_section_images(course.id) if course.config.show_images else {}
    view = build_course_view(
        course,
        sections,
        aggregator,
        current_number=decision.section or 0,
        section_images=images,
        sidebar_collapsed=st.session_state.sidebar_collapsed,
    )

    if view.sidebar_collapsed:
        render_expand_button()
        render_section(view, course.id)
    elif view.sidebar_position == SidebarPosition.RIGHT:
        main_col, outline_col = st.columns([3, 1])
        with main_col:
            render_section(view, course.id)
        with outline_col:
            render_outline(view, course.id)
    else:
        with st.sidebar:
            render_outline(view, course.id)
        render_section(view, course.id)


if __name__ == "__main__":
    main()
