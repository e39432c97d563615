"""Base mixin for hovergrid TUI widgets."""


class GridMixin:
    """Mixin for widgets that paint engine-controlled content.

    Suppresses Textual's default link processing; the grid never renders
    user-authored text.
    """

    auto_links = False
