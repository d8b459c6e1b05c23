"""Header - descriptive metadata carried by an artwork."""

from dataclasses import dataclass, field

from art3a.core.chars import normalize_text


@dataclass
class Header:
    """
    Metadata stored in the header section of a 3a file.

    Keys the reader does not understand are kept in `extra_keys` so they
    survive a load/save cycle.
    """
    title: str | None = None
    authors: list[str] = field(default_factory=list)
    orig_authors: list[str] = field(default_factory=list)
    src: str | None = None
    editor: str | None = None
    license: str | None = None
    loop: bool | None = None
    preview: int | None = None
    colors: bool | None = None
    tags: list[str] = field(default_factory=list)
    extra_keys: list[tuple[str, str]] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    def add_tag(self, tag: str) -> None:
        """Add a tag (without the leading '#') unless already present."""
        tag = normalize_text(tag).strip().lstrip('#')
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        if tag in self.tags:
            self.tags.remove(tag)

    def authors_line(self) -> str:
        return ", ".join(self.orig_authors + self.authors)

    def title_line(self) -> str:
        """Human readable "<title> by <authors>" line."""
        authors = self.authors_line()
        if self.title:
            return f"{self.title} by {authors}" if authors else self.title
        return f"art by {authors}" if authors else ""

    def copy(self) -> "Header":
        return Header(
            title=self.title,
            authors=list(self.authors),
            orig_authors=list(self.orig_authors),
            src=self.src,
            editor=self.editor,
            license=self.license,
            loop=self.loop,
            preview=self.preview,
            colors=self.colors,
            tags=list(self.tags),
            extra_keys=list(self.extra_keys),
            comments=list(self.comments),
        )
