"""
Open tag stack

Tracks which raw tag words are open, in the order they were opened, and
applies bracketed tag groups to that state.

Closing is by string prefix, not exact name: "</bg>" closes "bg:red" and
"bg:bright:blue", "</b>" closes "b", "bold" and "blue". "</>" closes
everything.
"""

from typing import Iterator, List, Tuple

from .log import LOG, verbosity_get


class TagStack:
    """
    Ordered collection of currently open tag words

    A fresh stack is created for every parse and thrown away afterwards.
    Duplicates are allowed; opening "red" twice keeps both entries.
    """

    def __init__(self) -> None:
        self.tags: List[str] = []

    def open(self, raw: str) -> None:
        """Push a raw tag word"""
        self.tags.append(raw)

    def close(self, name: str) -> int:
        """
        Remove every open tag that starts with name

        Args:
            name: Bare close target; "" closes every tag

        Returns:
            Number of entries removed (0 when nothing matched)
        """
        kept = [tag for tag in self.tags if not tag.startswith(name)]
        removed = len(self.tags) - len(kept)
        self.tags = kept
        return removed

    def clear(self) -> None:
        """Close every open tag"""
        self.tags = []

    def apply(self, tag_token: str) -> "TagStack":
        """
        Apply one bracketed tag group to the stack

        The group is split on whitespace. Words are opens until the first
        word starting with "</"; from there on every word of the group is a
        close target, including bare words: "</bg italic>" closes both "bg"
        and "italic".

        Args:
            tag_token: Bracketed group such as "<red bold>" or "</bg>"

        Returns:
            self, for chaining

        Example:
            >>> TagStack().apply("<red bg:blue bold>").apply("</bg>").snapshot()
            ('red', 'bold')
        """
        closing = False

        for word in tag_token.split():
            if closing or word.startswith("</"):
                closing = True
                name = word.replace("</", "", 1).replace(">", "", 1)
                if name:
                    self.close(name)
                else:
                    self.clear()
            else:
                self.open(word.replace("<", "", 1).replace(">", "", 1))

        if verbosity_get() >= 3:
            LOG(f"Stack after '{tag_token}': {self.tags}", level=3)
        return self

    def snapshot(self) -> Tuple[str, ...]:
        """Immutable copy of the open tags, oldest first"""
        return tuple(self.tags)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)

    def __bool__(self) -> bool:
        return bool(self.tags)

    def __repr__(self) -> str:
        return f"TagStack({self.tags!r})"
