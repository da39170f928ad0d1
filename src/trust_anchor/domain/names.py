"""
Distinguished-name text parsing.

CA names arrive as RFC 2253 text, often written the older RFC 1779 way:
spaces around separators and '=', ';' between RDNs, quoted values, and an
"OID." prefix on numeric attribute types. cryptography only parses the
strict RFC 4514 grammar, so the text is first rewritten into that form:

  'CN=Test CA; O="Example, Inc."'  →  'CN=Test CA,O=Example\\, Inc.'

Escaped characters and quoted values are kept intact; only unescaped
whitespace next to a separator or '=' is dropped.
"""

from __future__ import annotations

from cryptography import x509

from trust_anchor.errors import InvalidArgument

_RDN_SEPARATORS = {",": ",", ";": ",", "+": "+"}
_ALWAYS_ESCAPED = frozenset('"+,;<>\\')


def _escape_value(value: str) -> str:
    """Escape an unquoted attribute value for RFC 4514."""
    chars = [f"\\{char}" if char in _ALWAYS_ESCAPED else char for char in value]
    if chars and chars[0] in ("#", " "):
        chars[0] = "\\" + chars[0]
    if chars and chars[-1] == " ":
        chars[-1] = "\\ "
    return "".join(chars)


def _strip_blanks(tokens: list[str]) -> list[str]:
    """Drop bare-space tokens at both ends; escaped spaces are two-char tokens."""
    start, end = 0, len(tokens)
    while start < end and tokens[start].isspace():
        start += 1
    while end > start and tokens[end - 1].isspace():
        end -= 1
    return tokens[start:end]


def _normalize_attribute(tokens: list[str]) -> str:
    """Rewrite one 'type=value' pair, trimming around '=' and the OID. prefix."""
    if "=" not in tokens:
        # No separator: leave it to the parser to reject
        return "".join(_strip_blanks(tokens))
    split_at = tokens.index("=")
    attr_type = "".join(_strip_blanks(tokens[:split_at]))
    if attr_type[:4].upper() == "OID.":
        attr_type = attr_type[4:]
    value = "".join(_strip_blanks(tokens[split_at + 1 :]))
    return f"{attr_type}={value}"


def _tokenize(text: str) -> list[str]:
    """
    Split DN text into tokens, one per character.

    Backslash escapes stay together as two-char tokens and a quoted value
    becomes a single RFC 4514-escaped token, so neither can be mistaken for
    a separator.
    """
    tokens: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char == "\\" and index + 1 < len(text):
            tokens.append(text[index : index + 2])
            index += 2
        elif char == '"':
            closing = index + 1
            value: list[str] = []
            while closing < len(text) and text[closing] != '"':
                if text[closing] == "\\" and closing + 1 < len(text):
                    closing += 1
                value.append(text[closing])
                closing += 1
            if closing >= len(text):
                raise InvalidArgument("CA name has an unterminated quoted value")
            tokens.append(_escape_value("".join(value)))
            index = closing + 1
        else:
            tokens.append(char)
            index += 1
    return tokens


def to_rfc4514(text: str) -> str:
    """Rewrite RFC 1779/2253 distinguished-name text in strict RFC 4514 form."""
    pieces: list[str] = []
    attribute: list[str] = []
    for token in _tokenize(text):
        if token in _RDN_SEPARATORS:
            pieces.append(_normalize_attribute(attribute))
            pieces.append(_RDN_SEPARATORS[token])
            attribute = []
        else:
            attribute.append(token)
    pieces.append(_normalize_attribute(attribute))
    return "".join(pieces)


def parse_distinguished_name(ca_name: str) -> x509.Name:
    """
    Parse distinguished-name text into an x509.Name.

    Raises InvalidArgument if the text is not a syntactically valid DN or
    names no attributes at all.
    """
    try:
        name = x509.Name.from_rfc4514_string(to_rfc4514(ca_name))
    except ValueError as e:
        detail = f": {e}" if str(e) else ""
        raise InvalidArgument(f"CA name is not a valid distinguished name{detail}") from e
    if len(name.rdns) == 0:
        raise InvalidArgument("CA name must contain at least one attribute")
    return name
