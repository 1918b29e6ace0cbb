"""
reacthatch.emoji - Favicon Emoji Picker
=======================================

Each generated project gets a random emoji for its favicon and README
title, which makes browser tabs of different projects easy to tell apart.
"""

from __future__ import annotations

import random
from collections.abc import Sequence


EMOJIS: tuple[str, ...] = (
    "👻", "☠️", "👽", "👾", "🤖", "🥷", "👑", "🐶", "🐭", "🦊",
    "🐸", "🪿", "🦆", "🦅", "🦉", "🦄", "🦋", "🐞", "🐢", "🦖",
    "🐙", "🦐", "🦞", "🐠", "🐬", "🦜", "🦔", "🐲", "🌵", "🌲",
    "🍀", "🌺", "🌸", "🌼", "🌻", "☀️", "🌎", "🌖", "✨", "💥",
    "🔥", "☃️", "☔️", "🍎", "🍌", "🍉", "🍇", "🍓", "🫐", "🥑",
    "🌽", "🌶️", "🥕", "🍕", "🍩", "⚽️", "🏀", "🏈", "⚾️", "🥎",
    "🎾", "🏐", "⛳️", "🏵️", "🫟", "🎨", "🧩", "🚀", "🚁", "⛵️",
    "🛸", "🏖️", "🏝️", "🏜️", "🌋", "🎁", "🎊", "🎉", "🪩", "📚",
)


def pick_emoji(rng: random.Random, catalog: Sequence[str] = EMOJIS) -> str:
    """
    Pick one emoji uniformly at random.

    Parameters
    ----------
    rng : random.Random
        Random source. Pass a seeded instance for reproducible output.

    catalog : Sequence[str]
        Emoji to choose from.

    Returns
    -------
    str
        One element of ``catalog``.

    Raises
    ------
    ValueError
        If ``catalog`` is empty.

    Examples
    --------
    >>> pick_emoji(random.Random(0), ["a", "b", "c"]) in {"a", "b", "c"}
    True
    """
    if not catalog:
        raise ValueError("Cannot pick from an empty emoji catalog")
    return rng.choice(catalog)
