"""GitHub-style heading slugs with duplicate tracking"""

import re


def slugify(text: str) -> str:
    """Lowercase text, drop punctuation, and turn each space into a hyphen."""
    text = text.lower()
    text = re.sub(r'[^\w\- ]', '', text)
    return text.replace(' ', '-')


class Slugger:
    """Hands out unique slugs: the first 'intro' stays 'intro', then 'intro-1', 'intro-2'."""

    def __init__(self) -> None:
        self.occurrences: dict[str, int] = {}

    def slug(self, text: str) -> str:
        original = result = slugify(text)
        while result in self.occurrences:
            self.occurrences[original] += 1
            result = f"{original}-{self.occurrences[original]}"
        self.occurrences[result] = 0
        return result
