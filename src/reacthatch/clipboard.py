"""
reacthatch.clipboard - Best-Effort Clipboard Copy
=================================================

Copying the follow-up command is a convenience. When no clipboard backend
is available (headless Linux without xclip/xsel, CI, SSH sessions) the
copy reports failure and the caller prints the command instead.
"""

from __future__ import annotations

import logging

import pyperclip


logger = logging.getLogger(__name__)


class ClipboardPublisher:
    """Copy text to the system clipboard through pyperclip."""

    def copy(self, text: str) -> bool:
        """
        Copy ``text`` to the clipboard.

        Returns
        -------
        bool
            True if the text was copied, False if no clipboard is available.
        """
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.debug("Clipboard unavailable: %s", e)
            return False
        return True
