from abc import ABC, abstractmethod

from autodoc.models import Doclet
from autodoc.syntax import SyntaxTree


class CodeParser(ABC):
    """Abstract base class for language-specific source code parsers."""

    @abstractmethod
    def parse(self, source_code: str) -> SyntaxTree:
        """Parse source code into a syntax tree with its comments.

        Args:
            source_code: The source code to parse

        Returns:
            SyntaxTree holding the top-level statements and all comments

        Raises:
            SourceParseError: If the source code is not valid
        """
        pass


class CommentParser(ABC):
    """Abstract base class for documentation comment parsers."""

    @abstractmethod
    def parse(self, comment: str, unwrap: bool = True) -> Doclet:
        """Parse a delimited comment like '/** ... */' into a doclet.

        Args:
            comment: Comment text including its delimiters
            unwrap: Strip the delimiters and leading '*' gutters first

        Returns:
            Doclet with its description and ordered tags

        Raises:
            CommentParseError: If the comment cannot be parsed
        """
        pass
