"""
Go-specific naming utilities and sanitization.

Handles Go reserved words, builtins, and golint naming conventions:
common initialisms are written in upper case (``tagId`` becomes ``TagID``).
"""

from typing import List

from ...core.naming import NameSanitizer, NamingCase

# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

# Go builtin types and functions
GO_BUILTIN_TYPES = {
    "any",
    "bool",
    "byte",
    "comparable",
    "complex64",
    "complex128",
    "error",
    "float32",
    "float64",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "rune",
    "string",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
    "append",
    "cap",
    "clear",
    "close",
    "complex",
    "copy",
    "delete",
    "imag",
    "len",
    "make",
    "max",
    "min",
    "new",
    "panic",
    "print",
    "println",
    "real",
    "recover",
    "iota",
    "nil",
    "true",
    "false",
}

# Initialisms golint expects in upper case
GO_INITIALISMS = {
    "ACL",
    "API",
    "ASCII",
    "CPU",
    "CSS",
    "DNS",
    "EOF",
    "GUID",
    "HTML",
    "HTTP",
    "HTTPS",
    "ID",
    "IP",
    "JSON",
    "LHS",
    "QPS",
    "RAM",
    "RHS",
    "RPC",
    "SLA",
    "SMTP",
    "SQL",
    "SSH",
    "TCP",
    "TLS",
    "TTL",
    "UDP",
    "UI",
    "UID",
    "UUID",
    "URI",
    "URL",
    "UTF8",
    "VM",
    "XML",
    "XMPP",
    "XSRF",
    "XSS",
}


def create_go_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Go."""
    return NameSanitizer(
        GO_RESERVED_WORDS, GO_BUILTIN_TYPES, GO_INITIALISMS, digit_prefix="X"
    )


_default_sanitizer = create_go_sanitizer()


def lint_title(name: str) -> str:
    """
    Title-case a name the way golint expects.

    >>> lint_title("foo cpu baz")
    'FooCPUBaz'
    >>> lint_title("json and html")
    'JSONAndHTML'
    """
    return _default_sanitizer.convert(name, NamingCase.PASCAL_CASE)


def go_field_name(name: str) -> str:
    """Exported field name for an element or attribute name."""
    return lint_title(name)


def go_struct_name(name: str, prefix: str = "", exported: bool = False) -> str:
    """
    Struct name for an element: ``prefix + name`` in golint style.

    Unexported names keep their first word in lower case
    (``tagId`` becomes ``tagID``, ``URL`` becomes ``url``).
    """
    source = f"{prefix}_{name}" if prefix else name
    case = NamingCase.PASCAL_CASE if exported else NamingCase.CAMEL_CASE
    converted = _default_sanitizer.convert(source, case)
    if _default_sanitizer.is_reserved(converted):
        converted = f"{converted}_"
    return converted


def validate_go_package_name(name: str) -> List[str]:
    """
    Validate Go package name according to Go naming rules.

    An empty name is valid and means no package clause is written.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        return errors

    # Check basic identifier rules
    if not name.isidentifier() or not name.isascii():
        errors.append(f"'{name}' is not a valid Go identifier")
        return errors

    # Go-specific rules
    if name[0].isupper():
        errors.append("Package names should be lowercase")

    if name in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors
