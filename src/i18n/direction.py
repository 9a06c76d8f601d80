"""
Right-to-left layout helpers.

Hebrew and Arabic pages flip horizontal layout: start/end spacing, text
alignment, flex direction and directional icons. These helpers compute the
class names, inline styles and HTML attributes a template needs to render
an element in either direction.

Usage:
    from src.i18n.direction import directional_container

    box = directional_container(is_rtl=True, align_text=True,
                                spacing={"padding_start": "1rem"})
    box.attrs   # {"class": "rtl text-right",
                #  "style": "direction: rtl; padding-right: 1rem",
                #  "dir": "rtl", "data-direction": "rtl", "data-rtl": "true"}
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from config.settings import config

LTR = "ltr"
RTL = "rtl"

# Unicode bidirectional control characters
RLE = "\u202b"  # Right-to-Left Embedding
LRE = "\u202a"  # Left-to-Right Embedding
RLO = "\u202e"  # Right-to-Left Override
LRO = "\u202d"  # Left-to-Right Override
PDF = "\u202c"  # Pop Directional Formatting
FSI = "\u2068"  # First Strong Isolate
PDI = "\u2069"  # Pop Directional Isolate


def is_rtl_language(language: Optional[str]) -> bool:
    """Check if a language (or locale such as 'he-IL') is written right to left."""
    if not language:
        return False
    base = re.split(r"[-_]", language)[0].lower()
    return base in config.i18n.rtl_languages


def text_direction(language: Optional[str]) -> str:
    return RTL if is_rtl_language(language) else LTR


# =============================================================================
# CLASS NAMES
# =============================================================================

# Each pair swaps both ways. Matched in one pass so 'ml-' -> 'mr-' is never
# swapped back by the 'mr-' -> 'ml-' rule.
_CLASS_SWAPS = {
    "ml-": "mr-",
    "mr-": "ml-",
    "pl-": "pr-",
    "pr-": "pl-",
    "border-l": "border-r",
    "border-r": "border-l",
    "rounded-l": "rounded-r",
    "rounded-r": "rounded-l",
    "text-left": "text-right",
    "text-right": "text-left",
    "left-": "right-",
    "right-": "left-",
    "justify-start": "justify-end",
    "justify-end": "justify-start",
    "items-start": "items-end",
    "items-end": "items-start",
}
_CLASS_SWAP_PATTERN = re.compile(
    r"(?<!\w)("
    + "|".join(
        re.escape(k) + ("" if k.endswith("-") else r"(?![a-z])")
        for k in sorted(_CLASS_SWAPS, key=len, reverse=True)
    )
    + r")"
)


def to_rtl_class(class_name: str, is_rtl: bool) -> str:
    """
    Convert LTR utility classes to their mirrored RTL equivalents.

    Example:
        to_rtl_class("ml-4 text-left", True) -> "mr-4 text-right"
    """
    if not is_rtl:
        return class_name
    return _CLASS_SWAP_PATTERN.sub(lambda m: _CLASS_SWAPS[m.group(1)], class_name)


def directional_class(ltr_class: str, rtl_class: Optional[str], is_rtl: bool) -> str:
    """Pick the RTL class if given, otherwise mirror the LTR one."""
    if is_rtl:
        return rtl_class or to_rtl_class(ltr_class, True)
    return ltr_class


def join_classes(*classes) -> str:
    """Join truthy class names, dropping duplicates but keeping order."""
    seen: list[str] = []
    for cls in classes:
        if not cls:
            continue
        for part in str(cls).split():
            if part not in seen:
                seen.append(part)
    return " ".join(seen)


# =============================================================================
# INLINE STYLES
# =============================================================================

# relative property -> (LTR physical property, RTL physical property)
_DIRECTIONAL_PROPERTIES = {
    "margin_start": ("margin-left", "margin-right"),
    "margin_end": ("margin-right", "margin-left"),
    "padding_start": ("padding-left", "padding-right"),
    "padding_end": ("padding-right", "padding-left"),
    "border_start": ("border-left", "border-right"),
    "border_end": ("border-right", "border-left"),
    "margin_left": ("margin-left", "margin-right"),
    "margin_right": ("margin-right", "margin-left"),
    "padding_left": ("padding-left", "padding-right"),
    "padding_right": ("padding-right", "padding-left"),
    "border_left": ("border-left", "border-right"),
    "border_right": ("border-right", "border-left"),
    "left": ("left", "right"),
    "right": ("right", "left"),
}


def flip_style(prop: str, is_rtl: bool, value: str) -> dict[str, str]:
    """
    Map a direction-relative style to a physical CSS property.

    Args:
        prop: One of margin_start, padding_end, border_start, left, translate_x, ...
        is_rtl: Whether the layout is right to left
        value: CSS value

    Returns:
        Single-entry dict {css-property: value}
    """
    if prop == "translate_x":
        return {"transform": f"translateX(-{value})" if is_rtl else f"translateX({value})"}
    try:
        ltr_prop, rtl_prop = _DIRECTIONAL_PROPERTIES[prop]
    except KeyError:
        raise ValueError(f"Unknown directional property: {prop}") from None
    return {rtl_prop if is_rtl else ltr_prop: value}


def text_align(is_rtl: bool, align: str = "start") -> str:
    """Resolve start/end alignment to left/right."""
    if align == "start":
        return "right" if is_rtl else "left"
    if align == "end":
        return "left" if is_rtl else "right"
    return align


def flex_direction(is_rtl: bool, direction: str = "row") -> str:
    if direction == "row":
        return "row-reverse" if is_rtl else "row"
    if direction == "row-reverse":
        return "row" if is_rtl else "row-reverse"
    return direction


def style_string(style: dict[str, str]) -> str:
    """Render a style dict as an inline CSS declaration list."""
    return "; ".join(f"{k}: {v}" for k, v in style.items())


def icon_rotation(is_rtl: bool, icon_type: str = "arrow") -> str:
    """Class that mirrors directional icons in RTL layouts."""
    if not is_rtl:
        return ""
    return "rotate-180" if icon_type in ("arrow", "chevron", "caret") else ""


# =============================================================================
# BIDI TEXT
# =============================================================================


def bidi_wrap(text: str, direction: str) -> str:
    """Embed text in a direction (for mixed Hebrew/English strings)."""
    mark = RLE if direction == RTL else LRE
    return f"{mark}{text}{PDF}"


def bidi_force(text: str, direction: str) -> str:
    """Force every character of text into a direction."""
    mark = RLO if direction == RTL else LRO
    return f"{mark}{text}{PDF}"


def bidi_isolate(text: str) -> str:
    """Isolate text so its direction does not leak into surrounding content."""
    return f"{FSI}{text}{PDI}"


# =============================================================================
# LAYOUT PRIMITIVES
# =============================================================================


@dataclass
class Rendered:
    """Computed presentation for one element."""

    classes: str
    style: dict[str, str]
    direction: str
    extra_attrs: dict[str, str] = field(default_factory=dict)

    @property
    def is_rtl(self) -> bool:
        return self.direction == RTL

    @property
    def attrs(self) -> dict[str, str]:
        """HTML attributes ready for a template."""
        attrs = {}
        if self.classes:
            attrs["class"] = self.classes
        if self.style:
            attrs["style"] = style_string(self.style)
        attrs["dir"] = self.direction
        attrs["data-direction"] = self.direction
        attrs["data-rtl"] = "true" if self.is_rtl else "false"
        attrs.update(self.extra_attrs)
        return attrs


def _effective_direction(is_rtl: bool, force_direction: Optional[str]) -> str:
    if force_direction is not None:
        if force_direction not in (LTR, RTL):
            raise ValueError(f"force_direction must be 'ltr' or 'rtl', got {force_direction!r}")
        return force_direction
    return RTL if is_rtl else LTR


def directional_container(
    is_rtl: bool,
    class_name: str = "",
    reverse_in_rtl: bool = False,
    align_text: bool = False,
    rtl_class: Optional[str] = None,
    ltr_class: Optional[str] = None,
    force_direction: Optional[str] = None,
    spacing: Optional[dict[str, str]] = None,
    style: Optional[dict[str, str]] = None,
) -> Rendered:
    """
    DirectionalContainer: a box that switches layout with the text direction.

    Args:
        is_rtl: Direction of the current language
        class_name: Extra classes always applied
        reverse_in_rtl: Reverse flex rows in RTL
        align_text: Align text to the start edge
        rtl_class / ltr_class: Classes applied only in that direction
        force_direction: Ignore the language and use this direction
        spacing: padding_start / padding_end / margin_start / margin_end values
        style: Extra inline styles
    """
    direction = _effective_direction(is_rtl, force_direction)
    rtl = direction == RTL

    classes = join_classes(
        direction,
        "flex-row-reverse" if reverse_in_rtl and rtl else None,
        f"text-{text_align(rtl)}" if align_text else None,
        rtl_class if rtl else ltr_class,
        class_name,
    )

    styles = {"direction": direction}
    styles.update(style or {})
    for prop, value in (spacing or {}).items():
        if value:
            styles.update(flip_style(prop, rtl, value))

    return Rendered(classes=classes, style=styles, direction=direction)


_FLEX_DIRECTION_CLASSES = {
    "row": "flex-row",
    "row-reverse": "flex-row-reverse",
    "column": "flex-col",
    "column-reverse": "flex-col-reverse",
}
_ALIGN_VALUES = ("start", "end", "center", "baseline", "stretch")
_GAP_CLASSES = {
    "none": "gap-0",
    "xs": "gap-1",
    "sm": "gap-2",
    "md": "gap-4",
    "lg": "gap-6",
    "xl": "gap-8",
    "2xl": "gap-12",
}


def directional_flex(
    is_rtl: bool,
    direction: str = "row",
    reverse_in_rtl: bool = True,
    justify: str = "start",
    align: str = "center",
    gap: str = "md",
    wrap: bool = False,
    class_name: str = "",
    force_direction: Optional[str] = None,
) -> Rendered:
    """
    DirectionalFlex: flex container whose main axis follows the reading direction.

    Rows are reversed in RTL (unless reverse_in_rtl is off) and start/end
    justification is mirrored for rows; columns are left alone.
    """
    if direction not in _FLEX_DIRECTION_CLASSES:
        raise ValueError(f"Unknown flex direction: {direction!r}")
    text_dir = _effective_direction(is_rtl, force_direction)
    rtl = text_dir == RTL
    is_row = direction in ("row", "row-reverse")

    flex_dir = flex_direction(rtl and reverse_in_rtl, direction) if is_row else direction

    if justify in ("start", "end") and rtl and is_row:
        justify_class = "justify-end" if justify == "start" else "justify-start"
    elif justify in ("start", "end", "center", "between", "around", "evenly"):
        justify_class = f"justify-{justify}"
    else:
        justify_class = "justify-start"

    classes = join_classes(
        "flex",
        _FLEX_DIRECTION_CLASSES[flex_dir],
        justify_class,
        f"items-{align}" if align in _ALIGN_VALUES else "items-center",
        _GAP_CLASSES.get(gap, "gap-4"),
        "flex-wrap" if wrap else None,
        class_name,
    )
    return Rendered(classes=classes, style={}, direction=text_dir)


# These input types hold Latin-script data even on Hebrew pages
LTR_INPUT_TYPES = ("email", "url", "tel", "number")


def directional_input(
    is_rtl: bool,
    input_type: str = "text",
    content_direction: str = "auto",
    align_with_content: bool = True,
    has_mixed_content: bool = False,
    class_name: str = "",
    value: Optional[str] = None,
    isolate_content: bool = False,
) -> Rendered:
    """
    DirectionalInput: text input aligned to its content direction.

    With content_direction='auto' Latin-only input types are LTR and
    everything else follows the page. Number inputs align to the end edge
    of the page so digits line up. With isolate_content the value is
    wrapped in FSI/PDI marks and the field renders with an isolated bidi
    context.
    """
    if content_direction == "auto":
        content_dir = LTR if input_type in LTR_INPUT_TYPES else (RTL if is_rtl else LTR)
    elif content_direction in (LTR, RTL):
        content_dir = content_direction
    else:
        raise ValueError(f"content_direction must be 'ltr', 'rtl' or 'auto', got {content_direction!r}")
    content_rtl = content_dir == RTL

    align_class = None
    if align_with_content:
        if input_type == "number":
            align_class = "text-left" if is_rtl else "text-right"
        else:
            align_class = "text-right" if content_rtl else "text-left"

    classes = join_classes(align_class, "rtl" if is_rtl else None, class_name)
    style = {
        "direction": content_dir,
        "unicode-bidi": "isolate" if (has_mixed_content or isolate_content) else "normal",
    }
    extra = {
        "type": input_type,
        "data-content-rtl": "true" if content_rtl else "false",
        "data-mixed-content": "true" if has_mixed_content else "false",
    }
    if value is not None:
        extra["value"] = bidi_isolate(value) if isolate_content else value
    return Rendered(classes=classes, style=style, direction=content_dir, extra_attrs=extra)
