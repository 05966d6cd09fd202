"""
Course view composition tests.
"""

from pathway.classroom import CompletionAggregator, CourseLoader, CoursePlatform, ProgressTracker
from pathway.schemas import (
    CompletionState,
    Course,
    CourseConfig,
    CourseDisplay,
    Section,
    SidebarEntry,
    SidebarPosition,
)
from pathway.viewer import (
    build_course_view,
    load_course_view,
    section_from_url,
    section_name,
    status_indicator,
    view_url,
)

from helpers import done, make_course_data, make_section, todo


class TestSectionName:

    def test_explicit_name(self):
        assert section_name(Section(id=1, number=2, name="  Loading data ")) == "Loading data"

    def test_default_names(self):
        assert section_name(Section(id=1, number=0)) == "Overview"
        assert section_name(Section(id=2, number=3)) == "Section 3"


class TestViewUrl:

    def test_numbered_section_multi_page(self, course):
        assert view_url(course, 2) == "/course/view.php?id=7&section=2"

    def test_overview_uses_anchor(self, course):
        assert view_url(course, 0) == "/course/view.php?id=7#section-0"

    def test_course_only(self, course):
        assert view_url(course, None) == "/course/view.php?id=7"

    def test_single_page_uses_anchor(self):
        course = Course(id=7, fullname="C", config=CourseConfig(course_display=CourseDisplay.SINGLE_PAGE))
        assert view_url(course, 3) == "/course/view.php?id=7#section-3"

    def test_navigation_anchor_without_section_links(self):
        course = Course(id=7, fullname="C", config=CourseConfig(course_display=CourseDisplay.SINGLE_PAGE))
        assert view_url(course, 3, navigation=True, link_course_sections=False) is None
        assert view_url(course, 3, navigation=True) is not None

    def test_section_from_url(self, course):
        assert section_from_url(view_url(course, 4)) == 4
        assert section_from_url(view_url(course, 0)) == 0
        assert section_from_url("/course/view.php?id=7#section-5") == 5
        assert section_from_url("/course/view.php?id=7") == 0


class TestStatusIndicator:

    def test_indicators(self):
        base = dict(number=1, name="S", url="#")
        assert status_indicator(SidebarEntry(**base, is_complete=True, is_current=True)) == "✓"
        assert status_indicator(SidebarEntry(**base, is_current=True)) == "→"
        assert status_indicator(SidebarEntry(**base, is_in_progress=True)) == "◐"
        assert status_indicator(SidebarEntry(**base)) == "○"


class TestBuildCourseView:

    def build(self, course, current=2, images=None, **kwargs):
        sections, aggregate = make_course_data(
            make_section(0, section_id=10),
            make_section(1, done(2), section_id=11),
            make_section(2, done(1) + todo(2), section_id=12),
            make_section(3, todo(1), section_id=13, visible=False),
            make_section(4, todo(1), section_id=14),
        )
        return build_course_view(course, sections, aggregate, current, images, **kwargs)

    def test_view_model(self, course):
        view = self.build(course)
        assert view.course_name == "Data Analysis"
        assert view.current_section == 2
        assert view.sidebar_left
        assert view.show_progress
        assert view.has_sections
        assert view.sidebar.total_numbered_sections == 3
        assert (view.sidebar.overall_completed, view.sidebar.overall_total) == (3, 6)
        assert view.sidebar.overall_percent == 50
        assert view.show_overview_above

    def test_prev_next(self, course):
        view = self.build(course)
        assert view.prev_section.name == "Section 1"
        assert view.prev_section.url == "/course/view.php?id=7&section=1"
        assert view.next_section.name == "Section 4"

    def test_overview_has_no_navigation(self, course):
        view = self.build(course, current=0)
        assert view.prev_section is None
        assert view.next_section is None

    def test_current_section_image(self, course):
        view = self.build(course, images={12: "/img/12.png", 11: "/img/11.png"})
        assert view.current_section_image == "/img/12.png"
        assert view.sidebar.entries[0].image_url == "/img/11.png"

    def test_images_hidden_when_disabled(self, course):
        course.config.show_images = False
        view = self.build(course, images={12: "/img/12.png"})
        assert view.current_section_image is None
        assert all(not e.has_image for e in view.sidebar.entries)

    def test_no_banner_on_overview(self, course):
        view = self.build(course, current=0, images={10: "/img/10.png"})
        assert view.current_section_image is None

    def test_layout_options(self, course):
        course.config.sidebar_position = SidebarPosition.RIGHT
        course.config.include_overview_section = True
        view = self.build(course, sidebar_collapsed=True)
        assert view.sidebar_right
        assert view.sidebar_collapsed
        assert not view.show_overview_above
        assert view.sidebar.entries[0].is_overview_section

    def test_completion_disabled(self):
        course = Course(id=7, fullname="C", completion_enabled=False)
        sections, _ = make_course_data(make_section(0), make_section(1, done(2)))
        aggregate = CompletionAggregator({}, lambda a: CompletionState.COMPLETE, False)
        view = build_course_view(course, sections, aggregate, 1)
        assert not view.completion_enabled
        assert view.sidebar.overall_total == 0
        assert view.sidebar.overall_percent == 0


class TestLoadCourseView:

    def test_from_sqlite_platform(self, course_db, tmp_path):
        progress = ProgressTracker(db_path=tmp_path / "progress.db")
        progress.set_completion_state("install", CompletionState.COMPLETE)
        progress.set_completion_state("unrelated", CompletionState.COMPLETE)
        platform = CoursePlatform(CourseLoader(course_db), progress)

        view = load_course_view(platform, 7, current_number=1)

        assert view.sidebar_right
        numbers = [e.number for e in view.sidebar.entries]
        assert numbers == [0, 1, 2]
        section_1 = view.sidebar.entries[1]
        assert (section_1.completed_count, section_1.total_count) == (1, 2)
        assert section_1.progress_percent == 50
        assert view.current_section_image.endswith("/2/new.png")
        assert view.prev_section is None
        assert view.next_section.url == "/course/view.php?id=7&section=2"

    def test_completion_states_scoped_to_course(self, course_db, tmp_path):
        progress = ProgressTracker(db_path=tmp_path / "progress.db")
        progress.set_completion_state("csv", CompletionState.COMPLETE)
        progress.set_completion_state("other-course-activity", CompletionState.COMPLETE)
        platform = CoursePlatform(CourseLoader(course_db), progress)
        assert platform.get_completion_states(7) == {"csv": CompletionState.COMPLETE}

    def test_missing_course(self, course_db, tmp_path):
        platform = CoursePlatform(CourseLoader(course_db), ProgressTracker(db_path=tmp_path / "p.db"))
        assert load_course_view(platform, 99) is None
