"""Domain enumerations."""

from enum import Enum, auto


class TokenKind(Enum):
    """Lexical class of a leaf token."""

    IDENT = auto()  # identifiers and keywords, incl. r#raw
    PUNCT = auto()  # single punctuation character
    LITERAL = auto()  # string, char, byte and numeric literals
    LIFETIME = auto()  # 'a, 'static


class Spacing(Enum):
    """Whether a punctuation token is glued to the following token."""

    ALONE = auto()
    JOINT = auto()  # e.g. first char of `->`, `::`


class Delimiter(Enum):
    """Group delimiter pair."""

    PARENTHESIS = ("(", ")")
    BRACKET = ("[", "]")
    BRACE = ("{", "}")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def from_open(cls, char: str) -> "Delimiter":
        """Delimiter opened by char.

        Raises:
            ValueError: If char is not an opening delimiter
        """
        for delimiter in cls:
            if delimiter.open == char:
                return delimiter
        raise ValueError(f"not an opening delimiter: {char!r}")


class Visibility(Enum):
    """Function item visibility."""

    PRIVATE = auto()  # no qualifier
    PUBLIC = auto()  # pub
    SCOPED = auto()  # pub(crate), pub(super), pub(in path)
