from __future__ import annotations

import re

from odoo_sync.models import ProductDescriptor

_CODE_RE = re.compile(r"\[(?P<code>[^\]]*)\]")

_ATTRIBUTES_RE = re.compile(
    r"""
    \(                         # opening paren
    (?P<attrs>[^()]*)          # comma separated attribute values
    \)
    \s*$                       # only when it closes the descriptor
    """,
    re.VERBOSE,
)


def split_attributes(text: str) -> tuple[str, ...]:
    """'Red, Large' -> ('Red', 'Large'); empty tokens are dropped."""
    return tuple(tok.strip() for tok in text.split(",") if tok.strip())


def parse(raw: str | None) -> ProductDescriptor:
    """
    Split a product descriptor of the form ``[CODE] Name (Attr1, Attr2)``.

    Never raises: a missing code is None, missing attributes are an empty
    tuple. The attribute suffix is cut first so the code is looked for in
    what remains.

    Examples:
      '[ABC123] Widget (Red, Large)' -> code 'ABC123', name 'Widget', ('Red', 'Large')
      'Widget Without Code'          -> code None, name 'Widget Without Code', ()
    """
    text = "" if raw is None else str(raw)

    attributes: tuple[str, ...] = ()
    rest = text
    m = _ATTRIBUTES_RE.search(rest)
    if m:
        attributes = split_attributes(m.group("attrs"))
        rest = rest[:m.start()]

    code = None
    m = _CODE_RE.search(rest)
    if m:
        code = m.group("code").strip() or None
        rest = rest[:m.start()] + rest[m.end():]

    return ProductDescriptor(raw=text, code=code, name=rest.strip(), attributes=attributes)
