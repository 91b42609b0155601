"""Base class for skip list renderers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from cleanstream.models.skip import SkipInterval


class SkipRenderer(ABC):
    """Abstract base class for skip list renderers.

    Each renderer turns a resolved skip list into the text of one
    output format.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Short format name (e.g., 'vtt')."""
        ...

    @property
    @abstractmethod
    def media_type(self) -> str:
        """HTTP media type of the rendered text."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension including dot (e.g., '.vtt')."""
        ...

    @abstractmethod
    def render(
        self,
        skips: Sequence[SkipInterval],
        title_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Render a skip list.

        Args:
            skips: Resolved skip intervals, sorted by start time
            title_id: Title identifier the skips belong to
            metadata: Optional title metadata

        Returns:
            Rendered document text
        """
        ...

    def save(
        self,
        skips: Sequence[SkipInterval],
        title_id: str,
        output_path: Path,
        metadata: dict[str, Any] | None = None,
    ) -> Path:
        """Render and write to a file, adding the extension if missing."""
        output_path = Path(output_path)
        if not output_path.suffix:
            output_path = output_path.with_suffix(self.file_extension)
        output_path.write_text(self.render(skips, title_id, metadata), encoding="utf-8")
        return output_path

    def get_output_filename(self, base_name: str) -> str:
        """Generate output filename with correct extension."""
        return f"{base_name}{self.file_extension}"
