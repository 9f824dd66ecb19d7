"""Display package - icon and text derivation plus presentation sinks."""

from juicewatch.display.icons import IconState, derive_icon
from juicewatch.display.protocols import ConsolePresentation, MockPresentation, PresentationSink
from juicewatch.display.title import MenuDetail, derive_menu_detail, derive_title

__all__ = [
    "ConsolePresentation",
    "IconState",
    "MenuDetail",
    "MockPresentation",
    "PresentationSink",
    "derive_icon",
    "derive_menu_detail",
    "derive_title",
]
