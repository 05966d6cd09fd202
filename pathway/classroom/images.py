"""Section header image URLs."""

from urllib.parse import quote


COMPONENT = "format_pathway"
FILE_AREA = "sectionimage"
ACCEPTED_IMAGE_TYPES = (".jpg", ".png", ".gif", ".webp")

PLUGINFILE_BASE = "/pluginfile.php"


def section_image_url(
    course_id: int,
    section_id: int,
    filepath: str,
    filename: str,
    base: str = PLUGINFILE_BASE,
) -> str:
    """
    Build the served URL for a stored section image.

    The section database ID is the item ID of the file area, e.g.
    /pluginfile.php/12/format_pathway/sectionimage/34/banner.png
    """
    if not filepath.startswith("/"):
        filepath = "/" + filepath
    if not filepath.endswith("/"):
        filepath += "/"
    return (
        f"{base}/{course_id}/{COMPONENT}/{FILE_AREA}/{section_id}"
        f"{quote(filepath)}{quote(filename)}"
    )
