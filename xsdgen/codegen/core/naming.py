"""
Identifier conversion for generated code.

Handles word splitting, case conversions, initialisms, keyword conflicts
and duplicate names across different programming languages.
"""

import re
from enum import Enum
from typing import List, Optional, Set


class NamingCase(Enum):
    """Target identifier styles."""

    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


# "tagId" -> tag Id, "XMLHttpRequest" -> XML Http Request, "v2Name" -> v2 Name
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+[0-9]*|[A-Z]+[0-9]*|[0-9]+[a-z]*")


def split_words(name: str) -> List[str]:
    """Split an identifier or phrase into words at separators and case changes."""
    words = []
    for chunk in re.split(r"[^A-Za-z0-9]+", name):
        words.extend(_WORD_PATTERN.findall(chunk))
    return words


class NameSanitizer:
    """Converts XML names into unique, non-reserved identifiers of one language."""

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        builtin_types: Optional[Set[str]] = None,
        initialisms: Optional[Set[str]] = None,
        digit_prefix: str = "_",
    ):
        """
        Configure the rules of one target language.

        Args:
            reserved_words: Keywords of the language
            builtin_types: Predeclared names to avoid
            initialisms: Words always written in upper case in PascalCase/camelCase
            digit_prefix: Prepended to names that would start with a digit
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self.initialisms = initialisms or set()
        self.digit_prefix = digit_prefix
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.PASCAL_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Convert ``name`` to ``target_case`` and make it unique.

        Names are unique among those returned since the last
        :meth:`reset_used_names`.

        Args:
            name: XML name or phrase
            target_case: Identifier style
            suffix_on_conflict: Separator placed before the counter

        Returns:
            Identifier not returned before since the last reset
        """
        converted = self.convert(name, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)
        self._used_names.add(final_name)
        return final_name

    def convert(self, name: str, target_case: NamingCase) -> str:
        """Convert a name to the target case without tracking duplicates."""
        words = split_words(name) or ["field"]

        if target_case == NamingCase.CAMEL_CASE:
            converted = words[0].lower() + "".join(self._title_word(w) for w in words[1:])
        else:
            converted = "".join(self._title_word(w) for w in words)

        # Identifiers cannot start with a digit
        if converted[0].isdigit():
            prefix = self.digit_prefix
            if target_case == NamingCase.CAMEL_CASE:
                prefix = prefix.lower()
            converted = f"{prefix}{converted}"
        return converted

    def _title_word(self, word: str) -> str:
        if word.upper() in self.initialisms:
            return word.upper()
        return word[0].upper() + word[1:].lower()

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words or name in self.builtin_types

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Append suffixes until the name is neither reserved nor taken."""
        if self.is_reserved(name):
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            if suffix == "_":
                name = f"{original_name}{suffix}{counter}"
            else:
                name = f"{original_name}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Forget all taken names, e.g. when starting a new struct."""
        self._used_names.clear()
