"""Navigation context handed to resolvers.

Resolvers never look up ambient globals. The app builds one
``NavigationContext`` at freeze time and passes it to every resolver it
constructs, so a resolver can be unit-tested with a hand-built context.
"""

from dataclasses import dataclass, field

from perch.document import Document
from perch.pages.state import PageStateStore
from perch.scheduling import TaskQueue


class ScrollTarget:
    """The single pending scroll target. Setting it again overwrites it.

    ``scheduled`` is True while a task that will consume the target is
    queued, so repeated renders queue at most one.
    """

    __slots__ = ("_value", "scheduled")

    def __init__(self) -> None:
        self._value: int | str | None = None
        self.scheduled = False

    @property
    def pending(self) -> bool:
        return self._value is not None

    def set(self, value: int | str) -> None:
        self._value = value

    def peek(self) -> int | str | None:
        return self._value

    def take(self) -> int | str | None:
        """Return the pending target and clear the slot."""
        value, self._value = self._value, None
        return value


@dataclass(frozen=True, slots=True)
class NavigationContext:
    """Shared collaborators for one app.

    Attributes:
        state: The ``current``/``previous`` page states (read-only for resolvers).
        tasks: Queue for work deferred until after render.
        document: The browser surface the pages act on.
        scroll_target: Pending post-render scroll target.
    """

    state: PageStateStore = field(default_factory=PageStateStore)
    tasks: TaskQueue = field(default_factory=TaskQueue)
    document: Document = field(default_factory=Document)
    scroll_target: ScrollTarget = field(default_factory=ScrollTarget)
