"""Pytest configuration and fixtures."""

import pytest

XS_NAMESPACE = "http://www.w3.org/2001/XMLSchema"


def wrap_schema(body: str) -> str:
    """Wrap declarations in an xs:schema root element."""
    return f'<xs:schema xmlns:xs="{XS_NAMESPACE}">{body}</xs:schema>'


@pytest.fixture
def write_xsd(tmp_path):
    """Write a schema file under tmp_path and return its path.

    Text is wrapped in an xs:schema root unless it already is a document;
    bytes are written verbatim.
    """

    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            if "<xs:schema" not in content and "<schema" not in content:
                content = wrap_schema(content)
            path.write_text(content, encoding="utf-8")
        return path

    return _write
