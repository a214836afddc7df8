"""In-process model of the browser surface pages act on.

The page lifecycle never touches a real DOM. It talks to a ``Document``
that records the root element's classes, the viewport's scroll state,
the overlay widgets (modal and drawer), and the committed page HTML.
Hosts that drive a real browser implement the same attributes.
"""


class RootElement:
    """The application root element and its class list.

    Base classes are permanent. At most one extension class, owned by the
    active page's ``body_class``, is layered on top.
    """

    __slots__ = ("base_classes", "extension_class")

    def __init__(self, base_classes: tuple[str, ...] = ("App",)) -> None:
        self.base_classes = base_classes
        self.extension_class = ""

    @property
    def classes(self) -> tuple[str, ...]:
        extra = tuple(self.extension_class.split())
        return self.base_classes + extra

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def set_extension_class(self, class_name: str) -> None:
        """Replace the extension class. An empty string clears it."""
        self.extension_class = class_name.strip()


class Viewport:
    """Scroll position plus the history scroll-restoration mode.

    ``default_restoration`` is the mode pages get unless they opt out.
    """

    __slots__ = ("default_restoration", "scroll_restoration", "scroll_y")

    def __init__(self, scroll_restoration: str = "auto") -> None:
        self.scroll_y = 0
        self.default_restoration = scroll_restoration
        self.scroll_restoration = scroll_restoration

    def scroll_to(self, y: int) -> None:
        self.scroll_y = max(0, y)

    def scroll_to_top(self) -> None:
        self.scroll_to(0)


class ModalManager:
    """Holds at most one open modal, identified by name."""

    __slots__ = ("active",)

    def __init__(self) -> None:
        self.active: str | None = None

    @property
    def is_open(self) -> bool:
        return self.active is not None

    def show(self, name: str) -> None:
        self.active = name

    def close(self) -> None:
        self.active = None


class Drawer:
    """The off-canvas navigation panel used on narrow screens."""

    __slots__ = ("is_open",)

    def __init__(self) -> None:
        self.is_open = False

    def show(self) -> None:
        self.is_open = True

    def hide(self) -> None:
        self.is_open = False


class Document:
    """Root element, viewport, overlays, and the committed page content."""

    __slots__ = ("content", "drawer", "modal", "root", "viewport")

    def __init__(self, *, scroll_restoration: str = "auto") -> None:
        self.root = RootElement()
        self.viewport = Viewport(scroll_restoration)
        self.modal = ModalManager()
        self.drawer = Drawer()
        self.content = ""

    def close_modal(self) -> None:
        self.modal.close()

    def close_drawer(self) -> None:
        self.drawer.hide()

    def commit(self, html: str) -> None:
        """Replace the visible page content with freshly rendered HTML."""
        self.content = html
