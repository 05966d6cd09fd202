"""
LearningPlatform - The host platform collaborator consumed by the core.

The core never talks to storage directly; it is handed courses, sections,
activities, completion states and section images through this interface.
CourseLoader (content) and ProgressTracker (learner state) implement it
together via CoursePlatform.
"""

from typing import Optional, Protocol

from pathway.schemas import Activity, CompletionState, Course, Section

from .loader import CourseLoader
from .progress import ProgressTracker


class LearningPlatform(Protocol):
    def get_course(self, course_id: int) -> Optional[Course]: ...

    def get_sections(self, course_id: int) -> list[Section]: ...

    def get_activities(self, course_id: int) -> dict[str, Activity]: ...

    def get_completion_states(self, course_id: int) -> dict[str, CompletionState]: ...

    def get_all_section_images(self, course_id: int) -> dict[int, str]: ...


class CoursePlatform:
    """
    SQLite-backed LearningPlatform.

    Combines CourseLoader (shared course content) with ProgressTracker
    (one learner's completion states).
    """

    def __init__(self, loader: CourseLoader, progress: ProgressTracker):
        self.loader = loader
        self.progress = progress

    def get_course(self, course_id: int) -> Optional[Course]:
        return self.loader.get_course(course_id)

    def get_sections(self, course_id: int) -> list[Section]:
        return self.loader.get_sections(course_id)

    def get_activities(self, course_id: int) -> dict[str, Activity]:
        return self.loader.get_activities(course_id)

    def get_completion_states(self, course_id: int) -> dict[str, CompletionState]:
        # progress.db is per learner and not partitioned by course; restrict
        # to this course's activities
        states = self.progress.get_all_completion_states()
        activity_ids = self.loader.get_activities(course_id).keys()
        return {aid: states[aid] for aid in activity_ids if aid in states}

    def get_all_section_images(self, course_id: int) -> dict[int, str]:
        return self.loader.get_all_section_images(course_id)
