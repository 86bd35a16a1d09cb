# ABOUTME: A single content unit of a book: title, XHTML body, and archive path.
# ABOUTME: The resource path stays None until the book is saved or loaded.

from dataclasses import dataclass

from quire.formats.resources import derive_id


@dataclass
class Chapter:
    """One chapter, backed by one XHTML resource in the archive.

    resource_path is relative to the OPF directory. When it is None a
    title-derived path is assigned the first time the book is saved.
    """

    title: str = ""
    content: str = ""
    resource_path: str | None = None

    @property
    def resource_id(self) -> str | None:
        """Manifest id for this chapter, or None if no path is assigned yet."""
        if self.resource_path is None:
            return None
        return derive_id(self.resource_path)

    def is_valid(self) -> tuple[bool, str]:
        """Check title, then content; stop at the first problem."""
        if not self.title.strip():
            return False, "Chapter title is missing."
        if not self.content.strip():
            return False, "Chapter content is missing."
        return True, "Chapter is valid."

    def describe(self) -> str:
        return f"Title: {self.title}, Resource: {self.resource_path or 'N/A'}"

    def __str__(self) -> str:
        return self.describe()
