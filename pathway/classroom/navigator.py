"""
Navigator - Previous/next section links inside the numbered part of a course.

Provides:
- Nearest visible previous section
- Nearest visible next section
- Section position for "Section 3 of 8" style display

The overview (section 0) has no prev/next links and is never a link target.
Sections without a view URL are skipped as if hidden.
"""

from typing import Callable, Iterable, Optional

from pathway.schemas import NavigationLink, Section, OVERVIEW_SECTION


ViewUrl = Callable[[Section], Optional[str]]
SectionName = Callable[[Section], str]


class SectionNavigator:
    """
    Navigate through the ordered sections of a course.

    Sections are indexed by number; gaps (deleted sections) are tolerated.
    """

    def __init__(
        self,
        sections: Iterable[Section],
        view_url: ViewUrl,
        section_name: SectionName,
    ):
        """
        Initialize navigator.

        Args:
            sections: Sections of the course, in any order
            view_url: Resolves a section to its view URL (None if not linkable)
            section_name: Resolves a section to its display name
        """
        self.view_url = view_url
        self.section_name = section_name
        self._sections: dict[int, Section] = {s.number: s for s in sections}
        self._last_number = max(self._sections, default=OVERVIEW_SECTION)

    @property
    def total_sections(self) -> int:
        """Number of visible numbered sections."""
        return sum(
            1 for number, s in self._sections.items()
            if number > OVERVIEW_SECTION and s.user_visible
        )

    def _link(self, number: int) -> Optional[NavigationLink]:
        """Link to a section if it exists, is visible and has a URL."""
        section = self._sections.get(number)
        if section is None or not section.user_visible:
            return None
        url = self.view_url(section)
        if not url:
            return None
        return NavigationLink(name=self.section_name(section), url=url)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_previous(self, current_number: int) -> Optional[NavigationLink]:
        """Get the nearest linkable section before the current one."""
        if current_number <= OVERVIEW_SECTION:
            return None
        for number in range(current_number - 1, OVERVIEW_SECTION, -1):
            link = self._link(number)
            if link is not None:
                return link
        return None

    def get_next(self, current_number: int) -> Optional[NavigationLink]:
        """Get the nearest linkable section after the current one."""
        if current_number <= OVERVIEW_SECTION:
            return None
        for number in range(current_number + 1, self._last_number + 1):
            link = self._link(number)
            if link is not None:
                return link
        return None

    def find_adjacent(
        self, current_number: int
    ) -> tuple[Optional[NavigationLink], Optional[NavigationLink]]:
        """Get (previous, next) links for the current section."""
        return self.get_previous(current_number), self.get_next(current_number)

    def get_section_position(self, current_number: int) -> tuple[int, int]:
        """
        Get section position among visible numbered sections as (current, total).

        Returns (0, total) if the section is hidden, missing or the overview.
        """
        visible = sorted(
            number for number, s in self._sections.items()
            if number > OVERVIEW_SECTION and s.user_visible
        )
        if current_number not in visible:
            return (0, len(visible))
        return (visible.index(current_number) + 1, len(visible))


def find_adjacent(
    sections: Iterable[Section],
    current_number: int,
    view_url: ViewUrl,
    section_name: SectionName,
) -> tuple[Optional[NavigationLink], Optional[NavigationLink]]:
    """Get (previous, next) navigation links around `current_number`."""
    return SectionNavigator(sections, view_url, section_name).find_adjacent(current_number)
