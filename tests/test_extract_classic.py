"""
Classic (line range) extraction tests

Tests single lines, open and closed ranges, trailing newline handling and
the lenient out-of-range behaviour.
"""

from codeimport.lib.extract import lines_extract

SOURCE = "one\ntwo\nthree\nfour\nfive\n"


class TestSingleLine:
    """No dash: exactly one line"""

    def test_each_line(self):
        for number, expected in enumerate(["one", "two", "three", "four", "five"], start=1):
            assert lines_extract(SOURCE, number, False, None) == expected

    def test_default_start_is_first_line(self):
        assert lines_extract(SOURCE, None, False, None) == "one"


class TestOpenRange:
    """Dash without end line: up to the end of the file"""

    def test_to_end_drops_trailing_empty_line(self):
        assert lines_extract(SOURCE, 3, True, None) == "three\nfour\nfive"

    def test_to_end_preserving_trailing_newline(self):
        assert lines_extract(SOURCE, 3, True, None, preserve_trailing_newline=True) == "three\nfour\nfive\n"

    def test_whole_file(self):
        assert lines_extract(SOURCE, None, True, None) == "one\ntwo\nthree\nfour\nfive"

    def test_file_without_trailing_newline(self):
        assert lines_extract("a\nb", 1, True, None) == "a\nb"

    def test_only_one_trailing_empty_line_dropped(self):
        assert lines_extract("a\n\n", 1, True, None) == "a\n"


class TestClosedRange:
    """Dash and end line: inclusive range"""

    def test_inclusive(self):
        result = lines_extract(SOURCE, 2, True, 4)
        assert result == "two\nthree\nfour"
        assert len(result.split("\n")) == 4 - 2 + 1

    def test_crlf_normalized(self):
        """Output is joined with \\n whatever the source used"""
        assert lines_extract("a\r\nb\r\nc\r\n", 1, True, 2) == "a\nb"

    def test_start_equals_end(self):
        assert lines_extract(SOURCE, 4, True, 4) == "four"


class TestLenient:
    """Out-of-range requests yield partial or empty output, never errors"""

    def test_reversed_range_is_empty(self):
        assert lines_extract(SOURCE, 4, True, 2) == ""

    def test_start_beyond_end_of_file(self):
        assert lines_extract(SOURCE, 40, False, None) == ""

    def test_end_beyond_end_of_file(self):
        assert lines_extract(SOURCE, 4, True, 40) == "four\nfive\n"

    def test_zero_counts_as_absent(self):
        assert lines_extract(SOURCE, 0, False, None) == "one"
        assert lines_extract(SOURCE, 4, True, 0) == "four\nfive"
