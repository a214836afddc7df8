"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, template_dir="pages")
    """

    debug: bool = False

    # Templates: None renders page templates from their inline source only
    template_dir: str | Path | None = None
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Document
    scroll_restoration_default: str = "auto"  # "auto" or "manual"

    # Logging
    log_navigation: bool = True  # debug-level mount/reuse decisions
