# Lenient JSON-with-comments parsing
import json
from typing import Any


def strip_jsonc_comments(text: str) -> str:
    """Remove // and /* */ comments that sit outside string literals.

    ABOUTME: Comments are dropped entirely, not replaced with whitespace
    ABOUTME: A block comment that never closes runs to end of input

    Args:
        text: Raw JSONC document

    Returns:
        Document text without comments

    Examples:
        >>> strip_jsonc_comments('{"a": 1} // note')
        '{"a": 1} '
        >>> strip_jsonc_comments('{"url": "http://x"}')
        '{"url": "http://x"}'
    """
    result: list[str] = []
    in_string = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if in_string:
            result.append(char)
            if char == "\\" and i + 1 < length:
                # Escaped character can never close the string
                result.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
            result.append(char)
            i += 1
            continue

        nxt = text[i + 1] if i + 1 < length else ""

        if char == "/" and nxt == "/":
            while i < length and text[i] not in "\r\n":
                i += 1
            continue

        if char == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue

        result.append(char)
        i += 1

    return "".join(result)


def strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede a closing } or ].

    ABOUTME: Whitespace between the comma and the closer is kept
    ABOUTME: Commas inside string literals are left alone
    """
    result: list[str] = []
    in_string = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if in_string:
            result.append(char)
            if char == "\\" and i + 1 < length:
                result.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
        elif char == ",":
            j = i + 1
            while j < length and text[j] in " \t\r\n":
                j += 1
            if j < length and text[j] in "}]":
                i += 1
                continue

        result.append(char)
        i += 1

    return "".join(result)


def parse_jsonc(text: str) -> Any:
    """Parse JSON that may contain comments and trailing commas.

    ABOUTME: Uses built-in json module once the text has been cleaned
    ABOUTME: Propagates json.JSONDecodeError for anything else that is invalid

    Raises:
        json.JSONDecodeError: If the cleaned text is not valid JSON
    """
    cleaned = strip_trailing_commas(strip_jsonc_comments(text))
    return json.loads(cleaned)
