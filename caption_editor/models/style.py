"""Caption style model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace

from caption_editor.models.errors import ValidationError


@dataclass
class CaptionStyle:
    """Visual style attached to a caption segment.

    Opaque to the editing logic: copied and merged, never interpreted.
    """

    font: str = "Poppins"
    font_size: int = 85
    text_color: str = "#FFFFFF"
    highlighter_color: str = "#00FF00"
    background_color: str = "#000000"
    stroke_color: str = "#000000"
    stroke_width: float = 2.5
    text_transform: str = "none"  # none, uppercase, lowercase, capitalize
    position_x: float = 50.0  # percent of frame width
    position_y: float = 80.0  # percent of frame height
    render_mode: str = "horizontal"  # horizontal, progressive
    text_align: str = "center"
    scale: float = 1.0
    emphasize_mode: bool = True
    burn_in: bool = True

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    def copy(self) -> CaptionStyle:
        """Return a shallow copy."""
        return replace(self)

    def merged(self, overrides: dict) -> CaptionStyle:
        """Return a copy with only the given fields replaced.

        Raises:
            ValidationError: If *overrides* names a field the style does not have.
        """
        unknown = set(overrides) - self.field_names()
        if unknown:
            raise ValidationError(f"Unknown style field(s): {', '.join(sorted(unknown))}")
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> CaptionStyle:
        """Build a style from a dict, ignoring keys the model does not know."""
        known = cls.field_names()
        return cls(**{k: v for k, v in d.items() if k in known})
