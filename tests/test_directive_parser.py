"""
Directive parser tests

Tests metadata tokenizing, the file= range grammar, the inline flag and
the named syntax errors.
"""

import pytest

from codeimport.config import AppSettings
from codeimport.lib.directive import directive_parse, metaTokens_split
from codeimport.lib.errors import DirectiveSyntaxError
from codeimport.models.directive import ImportMode


class TestMetaTokens:
    """Test splitting metadata into tokens"""

    def test_plain_split(self):
        """Tokens are separated by single spaces"""
        assert metaTokens_split("title=x file=a.py") == ["title=x", "file=a.py"]

    def test_escaped_space_kept(self):
        """A backslash-escaped space does not split"""
        assert metaTokens_split(r"file=my\ dir/a.py inline") == [r"file=my\ dir/a.py", "inline"]

    def test_empty_meta(self):
        """Empty metadata yields one empty token"""
        assert metaTokens_split("") == [""]


class TestNoDirective:
    """Blocks without a file= token are skipped"""

    def test_none_meta(self):
        assert directive_parse(None) is None

    def test_unrelated_meta(self):
        assert directive_parse("title=example.py showLineNumbers") is None

    def test_key_must_start_token(self):
        """file= inside another token is not a directive"""
        assert directive_parse("myfile=a.py") is None


class TestRanges:
    """Test the line range grammar"""

    def test_whole_file(self):
        """No range: whole file, open range"""
        directive = directive_parse("file=./a.py")
        assert directive.path == "./a.py"
        assert directive.from_line is None
        assert directive.to_line is None
        assert directive.has_dash is True
        assert directive.mode is ImportMode.CLASSIC

    def test_single_line(self):
        directive = directive_parse("file=./a.py#L5")
        assert directive.from_line == 5
        assert directive.has_dash is False
        assert directive.to_line is None

    def test_open_range(self):
        directive = directive_parse("file=./a.py#L5-")
        assert directive.from_line == 5
        assert directive.has_dash is True
        assert directive.to_line is None

    def test_closed_range(self):
        directive = directive_parse("file=./a.py#L5-L9")
        assert (directive.from_line, directive.has_dash, directive.to_line) == (5, True, 9)

    def test_reversed_range_not_validated(self):
        """m < n is left to the extractor"""
        directive = directive_parse("file=./a.py#L9-L5")
        assert (directive.from_line, directive.to_line) == (9, 5)

    def test_range_without_start(self):
        """#-L3 starts at the first line"""
        directive = directive_parse("file=./a.py#-L3")
        assert directive.from_line is None
        assert directive.to_line == 3
        assert directive.has_dash is True

    def test_empty_suffix_is_whole_file(self):
        directive = directive_parse("file=./a.py#")
        assert directive.path == "./a.py"
        assert directive.has_dash is True

    def test_hash_in_path(self):
        """A '#' not followed by a range belongs to the path"""
        directive = directive_parse("file=./c#/main.cs#L2")
        assert directive.path == "./c#/main.cs"
        assert directive.from_line == 2

    def test_hash_with_name_suffix(self):
        directive = directive_parse("file=./notes#draft")
        assert directive.path == "./notes#draft"
        assert directive.from_line is None

    def test_first_file_token_wins(self):
        directive = directive_parse("file=./a.py file=./b.py")
        assert directive.path == "./a.py"

    def test_raw_token_recorded(self):
        directive = directive_parse("title=x file=./a.py#L1-L2")
        assert directive.raw == "file=./a.py#L1-L2"


class TestEscaping:
    """Test backslash-escaped spaces in paths"""

    def test_escapes_kept_in_path(self):
        """Unescaping is left to the resolver"""
        directive = directive_parse(r"file=./my\ file.py#L2 inline")
        assert directive.path == r"./my\ file.py"
        assert directive.from_line == 2
        assert directive.mode is ImportMode.GROUP


class TestMode:
    """Test the inline flag"""

    def test_inline_token(self):
        assert directive_parse("file=./a.py inline").mode is ImportMode.GROUP

    def test_inline_is_case_sensitive(self):
        assert directive_parse("file=./a.py Inline").mode is ImportMode.CLASSIC

    def test_inline_inside_path_is_not_flag(self):
        """The flag must be its own token"""
        assert directive_parse("file=./inline.py").mode is ImportMode.CLASSIC

    def test_custom_flag(self):
        settings = AppSettings(inline_flag="groups")
        assert directive_parse("file=./a.py groups", settings).mode is ImportMode.GROUP


class TestSuffixInPath:
    """A suffix that is not a complete range belongs to the path"""

    def test_file_name_starting_with_l(self):
        directive = directive_parse("file=./a#Lb.txt")
        assert directive.path == "./a#Lb.txt"
        assert directive.from_line is None
        assert directive.has_dash is True

    def test_file_name_with_range_after_hash(self):
        directive = directive_parse("file=./notes#Lab.txt#L2-L3")
        assert directive.path == "./notes#Lab.txt"
        assert (directive.from_line, directive.to_line) == (2, 3)

    @pytest.mark.parametrize("token", [
        "file=./a.py#L",
        "file=./a.py#L3-L",
        "file=./a.py#L3x",
        "file=./a.py#L2-L3-",
    ])
    def test_incomplete_range(self, token):
        directive = directive_parse(token)
        assert directive.path == token[len("file="):]
        assert directive.from_line is None
        assert directive.to_line is None


class TestSyntaxErrors:
    """Malformed directives raise DirectiveSyntaxError naming the token"""

    def test_empty_path(self):
        with pytest.raises(DirectiveSyntaxError, match="expected a file path") as info:
            directive_parse("file=")
        assert info.value.token == "file="
        assert info.value.column == len("file=")

    def test_empty_path_before_range(self):
        with pytest.raises(DirectiveSyntaxError, match="file=#L3"):
            directive_parse("file=#L3")

    def test_is_a_syntax_error(self):
        """Callers catching SyntaxError still see directive errors"""
        with pytest.raises(SyntaxError):
            directive_parse("file=#L2-L3")
