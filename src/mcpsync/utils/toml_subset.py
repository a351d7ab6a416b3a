# Minimal TOML reader/writer for mcpsync
#
# Handles only the subset Codex MCP configs use: flat [section] headers with
# string, string-array and single-level inline-table values. No numbers,
# booleans, dates, multi-line strings or nested tables.
import re
from dataclasses import dataclass

# ABOUTME: Value types understood by the subset parser
TomlValue = str | list[str] | dict[str, str]
TomlSection = dict[str, TomlValue]

SECTION_PATTERN = re.compile(r"^\[\s*([^\[\]]+?)\s*\]$")
ARRAY_TABLE_PATTERN = re.compile(r"^\[\[\s*([^\[\]]+?)\s*\]\]$")
KEY_VALUE_PATTERN = re.compile(r'^("?)([\w.-]+)\1\s*=\s*(.+)$')
INLINE_PAIR_PATTERN = re.compile(
    r'^"?([\w.-]+)"?\s*=\s*("(?:[^"\\]|\\.)*"|\'[^\']*\')$'
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}
_ESCAPE_PATTERN = re.compile(r"\\(.)", re.DOTALL)


@dataclass(frozen=True)
class TomlBlock:
    """Raw text of one section (or the preamble) of a TOML document.

    ABOUTME: name is None for the preamble before the first header
    ABOUTME: text keeps original line endings, comments and formatting
    """
    name: str | None
    text: str


def parse_toml(content: str) -> dict[str, TomlSection]:
    """Parse the supported TOML subset into section -> key -> value.

    ABOUTME: Dotted section names stay flat string keys ("mcp_servers.x")
    ABOUTME: Keys before the first section header are ignored
    ABOUTME: Never raises; unrecognised lines are skipped

    Args:
        content: TOML document text

    Returns:
        Dict mapping section name to its key/value pairs

    Example input:
        [mcp_servers.github]
        command = "npx"
        args = ["-y", "@modelcontextprotocol/server-github"]
        env = { "GITHUB_TOKEN" = "ghp_xxxx" }
    """
    result: dict[str, TomlSection] = {}
    current: str | None = None

    for raw_line in content.splitlines():
        line = _strip_comment(raw_line.strip())
        if not line:
            continue

        if ARRAY_TABLE_PATTERN.match(line):
            # Arrays of tables are outside the subset; ignore their keys
            current = None
            continue

        section_match = SECTION_PATTERN.match(line)
        if section_match:
            current = section_match.group(1)
            result.setdefault(current, {})
            continue

        if current is None:
            continue

        kv_match = KEY_VALUE_PATTERN.match(line)
        if not kv_match:
            continue

        key = kv_match.group(2)
        result[current][key] = _parse_value(kv_match.group(3).strip())

    return result


def dump_toml(sections: dict[str, TomlSection]) -> str:
    """Render sections as TOML text.

    ABOUTME: Structural inverse of parse_toml
    ABOUTME: Sections are separated by a blank line

    Example output:
        [mcp_servers.github]
        command = "npx"
        args = ["-y", "@modelcontextprotocol/server-github"]
        env = { "GITHUB_TOKEN" = "ghp_xxxx" }
    """
    lines: list[str] = []

    for section, values in sections.items():
        lines.append(f"[{section}]")
        for key, value in values.items():
            lines.append(f"{key} = {_format_value(value)}")
        lines.append("")

    return "\n".join(lines)


def split_toml_blocks(content: str) -> list[TomlBlock]:
    """Split a document into its preamble and one block per section header.

    ABOUTME: Joining every block's text reproduces the input exactly
    ABOUTME: Comment lines before a header belong to the previous block
    """
    blocks: list[TomlBlock] = []
    name: str | None = None
    buffer: list[str] = []

    for raw_line in content.splitlines(keepends=True):
        line = _strip_comment(raw_line.strip())
        header = ARRAY_TABLE_PATTERN.match(line) or SECTION_PATTERN.match(line)
        if header:
            if buffer or name is not None:
                blocks.append(TomlBlock(name=name, text="".join(buffer)))
            name = header.group(1)
            buffer = []
        buffer.append(raw_line)

    if buffer or name is not None:
        blocks.append(TomlBlock(name=name, text="".join(buffer)))

    return blocks


def quote_string(value: str) -> str:
    """Double-quote a string, escaping backslashes, quotes and control chars."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


def _format_value(value: TomlValue) -> str:
    if isinstance(value, str):
        return quote_string(value)

    if isinstance(value, list):
        return "[" + ", ".join(quote_string(item) for item in value) + "]"

    if not value:
        return "{}"

    pairs = [f"{quote_string(k)} = {quote_string(v)}" for k, v in value.items()]
    return "{ " + ", ".join(pairs) + " }"


def _parse_value(value: str) -> TomlValue:
    """Dispatch on the first character of a raw value."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return _parse_string(value)

    if value.startswith("[") and value.endswith("]"):
        return _parse_array(value)

    if value.startswith("{") and value.endswith("}"):
        return _parse_inline_table(value)

    return value


def _parse_string(value: str) -> str:
    # Literal (single-quoted) strings take no escapes
    if value[0] == "'":
        return value[1:-1]
    return _ESCAPE_PATTERN.sub(
        lambda m: _ESCAPES.get(m.group(1), m.group(0)), value[1:-1]
    )


def _parse_array(value: str) -> list[str]:
    """Parse ["a", "b"] into a list of strings.

    ABOUTME: Commas inside quoted elements do not split
    ABOUTME: Unquoted whitespace between elements is dropped
    """
    result: list[str] = []
    for item in _split_top_level(value[1:-1]):
        item = item.strip()
        if not item:
            continue
        if len(item) >= 2 and item[0] == item[-1] and item[0] in "\"'":
            result.append(_parse_string(item))
        else:
            result.append(item)
    return result


def _parse_inline_table(value: str) -> dict[str, str]:
    """Parse { "KEY" = "value", OTHER = "x" } into a dict.

    ABOUTME: Pairs that are not key = quoted-string are skipped
    """
    result: dict[str, str] = {}
    for pair in _split_top_level(value[1:-1]):
        match = INLINE_PAIR_PATTERN.match(pair.strip())
        if match:
            result[match.group(1)] = _parse_string(match.group(2))
    return result


def _split_top_level(inner: str) -> list[str]:
    """Split on commas that are outside string literals."""
    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    i = 0

    while i < len(inner):
        char = inner[i]
        if quote:
            current.append(char)
            if char == "\\" and quote == '"' and i + 1 < len(inner):
                current.append(inner[i + 1])
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
            current.append(char)
        elif char == ",":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    parts.append("".join(current))
    return parts


def _strip_comment(line: str) -> str:
    """Drop a trailing # comment that is outside any string literal."""
    if "#" not in line:
        return line

    quote: str | None = None
    i = 0
    while i < len(line):
        char = line[i]
        if quote:
            if char == "\\" and quote == '"':
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "#":
            return line[:i].rstrip()
        i += 1

    return line
