"""One-time check that the root project wires up the autoload-dump hook."""

from __future__ import annotations

import logging
import textwrap

from yuga_installer.host import Output, RootPackage

logger = logging.getLogger(__name__)

__all__ = ["UsageAdvisor", "POST_AUTOLOAD_DUMP_HOOK", "POST_AUTOLOAD_DUMP_EVENT"]

POST_AUTOLOAD_DUMP_EVENT = "post-autoload-dump"
POST_AUTOLOAD_DUMP_HOOK = "yuga_installer.installer:ModuleInstaller.post_autoload_dump"

_BANNER_WIDTH = 75
_TEXT_WIDTH = 68


class UsageAdvisor:
    """Warns, once, when a project does not call the autoload-dump hook.

    The check runs only for the first call to :meth:`check_usage` on a
    given advisor; share one advisor to get once-per-process behavior.
    """

    def __init__(self, output: Output) -> None:
        self.output = output
        self.checked = False

    def check_usage(self, root_package: RootPackage | None) -> bool:
        """Check the root package's hook configuration.

        Packages that are not of type ``project`` (a module under
        development, for instance) are never warned about.

        Returns:
            True if a warning was written.
        """
        if self.checked:
            return False
        self.checked = True

        if root_package is None or root_package.type != "project":
            return False

        hooks = root_package.scripts.get(POST_AUTOLOAD_DUMP_EVENT) or []
        if POST_AUTOLOAD_DUMP_HOOK in hooks:
            return False

        logger.warning("Root package '%s' does not register %s", root_package.name, POST_AUTOLOAD_DUMP_HOOK)
        self.warn_user(
            "Action required!",
            "Please update your application's package configuration to add the "
            f"{POST_AUTOLOAD_DUMP_EVENT} hook: {POST_AUTOLOAD_DUMP_HOOK}",
        )
        return True

    def warn_user(self, title: str, text: str) -> None:
        """Write a highlighted banner with a title and word-wrapped text."""

        def wrap(line: str) -> str:
            return "<error>     " + line.ljust(_BANNER_WIDTH) + "</error>"

        messages = ["", "", wrap(""), wrap(title), wrap("")]
        for line in text.split("\n"):
            wrapped = textwrap.wrap(line, _TEXT_WIDTH, break_long_words=False, break_on_hyphens=False) or [""]
            messages.extend(wrap(part) for part in wrapped)
        messages.extend([wrap(""), "", ""])

        self.output.write(messages)
