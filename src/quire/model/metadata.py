# ABOUTME: Descriptive metadata for a book, as stored in the OPF dc:* elements.
# ABOUTME: Validation reports missing required fields without raising.

from dataclasses import dataclass
from datetime import date


@dataclass
class EpubMetadata:
    """Descriptive fields of an EPUB package.

    Title and author are required for a book to be saved. The identifier
    (usually an ISBN) is recommended; its absence is reported by validate()
    but does not block a save. Every other field is optional and empty by
    default.
    """

    title: str = ""
    author: str = ""
    publisher: str = ""
    publication_date: date | None = None
    language: str = ""
    identifier: str = ""
    description: str = ""

    def validate(self) -> tuple[bool, list[str]]:
        """Check required and recommended fields.

        All checks always run, so the returned list holds every problem in
        a fixed order: title, author, identifier.

        Returns:
            (ok, errors) where ok is True only when errors is empty.
        """
        errors: list[str] = []
        if not self.title.strip():
            errors.append("Title is required.")
        if not self.author.strip():
            errors.append("Author is required.")
        if not self.identifier.strip():
            errors.append("Identifier (e.g., ISBN) is recommended.")
        return not errors, errors

    def describe(self) -> str:
        """Render all seven fields, one per line, in a fixed order."""
        pub_date = self.publication_date.isoformat() if self.publication_date else "N/A"
        return (
            f"Title: {self.title}\n"
            f"Author: {self.author}\n"
            f"Publisher: {self.publisher}\n"
            f"Publication Date: {pub_date}\n"
            f"Language: {self.language}\n"
            f"Identifier: {self.identifier}\n"
            f"Description: {self.description}\n"
        )

    def __str__(self) -> str:
        return self.describe()
