from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from .types import ColumnDescriptor, ForeignKeyRef, TableDescriptor

logger = logging.getLogger(__name__)

# ============================================================================
# DDL parser
#
# Parses simplified SQL DDL into table descriptors.
#
# Supported syntax:
#   CREATE [TEMP|TEMPORARY] TABLE [IF NOT EXISTS] users (
#     id INT PRIMARY KEY,
#     org_id INT REFERENCES orgs(id),
#     price DECIMAL(10,2),
#     CONSTRAINT fk_owner FOREIGN KEY (owner_id) REFERENCES users(id),
#     PRIMARY KEY (id)
#   );
#
# Anything else is tolerated rather than rejected: a clause or column entry
# that doesn't fit the expected shape is skipped and parsing carries on with
# the next one. The parser never raises on string input.
# ============================================================================

# SQL comments: -- to end of line, /* block */
_COMMENT_RE = re.compile(r"--[^\n]*|/\*.*?\*/", re.DOTALL)
# Identifier quoting: `name`, "name", [name]
_QUOTE_RE = re.compile(r'[`"\[\]]')
# Purely numeric length/precision: VARCHAR(50) -> VARCHAR
_NUMERIC_ARG_RE = re.compile(r"\s*\(\s*\d+\s*\)")
_TOKEN_RE = re.compile(r"'(?:[^']|'')*'|[(),;]|[^\s(),;']+")

TokenKind = Literal["word", "string", "lparen", "rparen", "comma", "semi"]

_PUNCTUATION: dict[str, TokenKind] = {
    "(": "lparen",
    ")": "rparen",
    ",": "comma",
    ";": "semi",
}

# Leading words of table-level index/check entries (never attributes)
_INDEX_WORDS = {"UNIQUE", "KEY", "INDEX", "CHECK", "FULLTEXT", "SPATIAL"}


@dataclass(slots=True)
class Token:
    kind: TokenKind
    value: str


def preprocess(text: str) -> str:
    """Strip comments, identifier quotes and numeric type arguments."""
    text = _COMMENT_RE.sub(" ", text)
    text = _QUOTE_RE.sub("", text)
    return _NUMERIC_ARG_RE.sub("", text)


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    for match in _TOKEN_RE.finditer(text):
        value = match.group(0)
        if value.startswith("'"):
            tokens.append(Token("string", value))
        else:
            tokens.append(Token(_PUNCTUATION.get(value, "word"), value))
    return tokens


def parse_sql(text: str) -> list[TableDescriptor]:
    """Parse every CREATE TABLE clause in ``text``, in order of appearance."""
    tokens = tokenize(preprocess(text))
    tables: list[TableDescriptor] = []

    pos = 0
    while pos < len(tokens):
        if _is_keyword(tokens[pos], "CREATE"):
            result = _parse_create_table(tokens, pos)
            if result is not None:
                table, pos = result
                tables.append(table)
                continue
        pos += 1

    return tables


# ============================================================================
# Clause level
# ============================================================================


def _parse_create_table(
    tokens: list[Token], start: int
) -> tuple[TableDescriptor, int] | None:
    """Parse one clause starting at CREATE.

    Returns the table and the position just past its closing parenthesis.
    """
    pos = start + 1
    if _is_keyword(_at(tokens, pos), "TEMP", "TEMPORARY"):
        pos += 1
    if not _is_keyword(_at(tokens, pos), "TABLE"):
        return None
    pos += 1

    if (
        _is_keyword(_at(tokens, pos), "IF")
        and _is_keyword(_at(tokens, pos + 1), "NOT")
        and _is_keyword(_at(tokens, pos + 2), "EXISTS")
    ):
        pos += 3

    name_token = _at(tokens, pos)
    if name_token is None or name_token.kind != "word":
        logger.debug("Skipping CREATE TABLE without a table name")
        return None
    pos += 1

    if _kind(_at(tokens, pos)) != "lparen":
        logger.debug("Skipping table %r: no column list", name_token.value)
        return None

    end = _matching_paren(tokens, pos)
    if end is None:
        logger.debug("Skipping table %r: column list is never closed", name_token.value)
        return None

    table = _build_table(name_token.value, tokens[pos + 1:end])
    return table, end + 1


def _build_table(name: str, body: list[Token]) -> TableDescriptor:
    table = TableDescriptor(name=name)
    # Columns named by a table-level PRIMARY KEY (...) entry
    primary_keys: list[str] = []

    for entry in _split_entries(body):
        _parse_entry(entry, table, primary_keys)

    for attr in table.attributes:
        if attr.name in primary_keys:
            attr.is_primary_key = True

    return table


def _split_entries(body: list[Token]) -> list[list[Token]]:
    """Split a column list on commas outside parentheses."""
    entries: list[list[Token]] = []
    current: list[Token] = []
    depth = 0

    for token in body:
        if token.kind == "lparen":
            depth += 1
        elif token.kind == "rparen":
            depth -= 1
        elif token.kind == "comma" and depth == 0:
            entries.append(current)
            current = []
            continue
        current.append(token)

    entries.append(current)
    return [entry for entry in entries if entry]


# ============================================================================
# Entry level — one column definition or one table constraint
# ============================================================================


def _parse_entry(
    entry: list[Token], table: TableDescriptor, primary_keys: list[str]
) -> None:
    head = entry[0]

    if _is_keyword(head, "CONSTRAINT"):
        # CONSTRAINT <name> <constraint>
        if len(entry) > 2:
            _parse_constraint(entry[2:], table, primary_keys)
        return

    if _is_keyword(head, "PRIMARY", "FOREIGN") or _is_index_entry(entry):
        _parse_constraint(entry, table, primary_keys)
        return

    if len(entry) < 2 or head.kind != "word" or entry[1].kind != "word":
        logger.debug("Skipping entry %r in table %r", _entry_text(entry), table.name)
        return

    name = head.value
    attr_type = entry[1].value
    pos = 2
    if _kind(_at(entry, pos)) == "lparen":
        end = _matching_paren(entry, pos)
        if end is not None:
            attr_type += _group_text(entry[pos:end + 1])
            pos = end + 1

    rest = entry[pos:]
    table.attributes.append(
        ColumnDescriptor(
            name=name,
            type=attr_type,
            is_primary_key=_has_primary_key(rest),
        )
    )

    reference = _parse_references(rest)
    if reference is not None:
        table.foreign_keys.append(ForeignKeyRef(name, reference[0], reference[1]))


def _parse_constraint(
    entry: list[Token], table: TableDescriptor, primary_keys: list[str]
) -> None:
    """Handle PRIMARY KEY (...) and FOREIGN KEY (...) REFERENCES t(c).

    Other constraints (UNIQUE, CHECK, INDEX) contribute nothing.
    """
    if _is_keyword(_at(entry, 0), "PRIMARY") and _is_keyword(_at(entry, 1), "KEY"):
        primary_keys.extend(_group_names(entry, 2))
        return

    if _is_keyword(_at(entry, 0), "FOREIGN") and _is_keyword(_at(entry, 1), "KEY"):
        columns = _group_names(entry, 2)
        reference = _parse_references(entry)
        if columns and reference is not None:
            table.foreign_keys.append(ForeignKeyRef(columns[0], reference[0], reference[1]))
        else:
            logger.debug("Skipping foreign key %r in table %r", _entry_text(entry), table.name)


def _is_index_entry(entry: list[Token]) -> bool:
    """UNIQUE (a), UNIQUE KEY uq (a), KEY idx (a), INDEX idx (a), CHECK (...)"""
    if not _is_keyword(entry[0], *_INDEX_WORDS):
        return False
    return (
        _kind(_at(entry, 1)) == "lparen"
        or _is_keyword(_at(entry, 1), "KEY", "INDEX")
        or _kind(_at(entry, 2)) == "lparen"
    )


def _has_primary_key(tokens: list[Token]) -> bool:
    for i in range(len(tokens) - 1):
        if _is_keyword(tokens[i], "PRIMARY") and _is_keyword(tokens[i + 1], "KEY"):
            return True
    return False


def _parse_references(tokens: list[Token]) -> tuple[str, str] | None:
    """Find ``REFERENCES <table> ( <column> )`` and return (table, column)."""
    for i, token in enumerate(tokens):
        if not _is_keyword(token, "REFERENCES"):
            continue
        target = _at(tokens, i + 1)
        if target is None or target.kind != "word":
            return None
        columns = _group_names(tokens, i + 2)
        if not columns:
            return None
        return target.value, columns[0]
    return None


# ============================================================================
# Token helpers
# ============================================================================


def _at(tokens: list[Token], pos: int) -> Token | None:
    return tokens[pos] if 0 <= pos < len(tokens) else None


def _kind(token: Token | None) -> TokenKind | None:
    return token.kind if token is not None else None


def _is_keyword(token: Token | None, *keywords: str) -> bool:
    return token is not None and token.kind == "word" and token.value.upper() in keywords


def _matching_paren(tokens: list[Token], open_pos: int) -> int | None:
    """Index of the parenthesis closing the one at ``open_pos``."""
    depth = 0
    for i in range(open_pos, len(tokens)):
        if tokens[i].kind == "lparen":
            depth += 1
        elif tokens[i].kind == "rparen":
            depth -= 1
            if depth == 0:
                return i
    return None


def _group_names(tokens: list[Token], open_pos: int) -> list[str]:
    """Words inside the parenthesized group starting at ``open_pos``."""
    if _kind(_at(tokens, open_pos)) != "lparen":
        return []
    end = _matching_paren(tokens, open_pos)
    if end is None:
        return []
    return [t.value for t in tokens[open_pos + 1:end] if t.kind == "word"]


def _group_text(tokens: list[Token]) -> str:
    return "".join(t.value for t in tokens)


def _entry_text(tokens: list[Token]) -> str:
    return " ".join(t.value for t in tokens)
