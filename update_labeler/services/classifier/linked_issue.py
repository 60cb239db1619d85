"""Detection of "fixes #123"-style closing references in issue and PR bodies."""

import re

# GitHub closing keywords
CLOSING_KEYWORDS: tuple[str, ...] = (
    "close",
    "closes",
    "closed",
    "fix",
    "fixes",
    "fixed",
    "resolve",
    "resolves",
    "resolved",
)

# The number must end the word: "#42abc" is not a reference to #42
_CLOSING_REFERENCE = re.compile(
    r"(?:^|(?<=\s))(?:" + "|".join(CLOSING_KEYWORDS) + r") #(\d+)(?!\w)",
    re.IGNORECASE,
)


def find_linked_issue(text: str | None) -> int | None:
    """
    Find the issue a body of text closes.

    Args:
        text: Issue or pull request body

    Returns:
        The referenced issue number if the text contains exactly one closing
        reference, None if it contains none or several
    """
    if not text:
        return None

    matches = _CLOSING_REFERENCE.findall(text)
    if len(matches) != 1:
        return None
    return int(matches[0])
